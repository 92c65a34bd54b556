"""FastAPI application exposing the engagement snapshot and an event ingest API."""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Sequence

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from .aggregator import EngagementAggregator
from .config import MonitorSettings
from .errors import MonitorError, OrderingViolationError
from .ingest import EventPayload
from .stream import EventStream

logger = logging.getLogger(__name__)


def create_app(
    sections: Sequence[str],
    *,
    settings: Optional[MonitorSettings] = None,
    overview_showing: bool = False,
    active_section_index: int = 0,
) -> FastAPI:
    """Instantiate the FastAPI application with one aggregator for the session."""
    resolved_settings = settings or MonitorSettings()
    stream = EventStream()
    aggregator = EngagementAggregator(
        sections,
        resolved_settings,
        overview_showing=overview_showing,
        active_section_index=active_section_index,
    )
    aggregator.attach(stream)

    app = FastAPI(title="Engagement Monitor", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.stream = stream
    app.state.aggregator = aggregator
    # Sync endpoints run in a thread pool; the stream has a single writer.
    app.state.ingest_lock = threading.Lock()

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        monitor: EngagementAggregator = request.app.state.aggregator
        return {
            "sections": monitor.section_ids,
            "events_processed": monitor.snapshot().events_processed,
            "activity_window_ms": resolved_settings.activity_window_ms,
            "activity_components": list(resolved_settings.activity_components),
            "overview_source_id": resolved_settings.overview_source_id,
            "section_source_id": resolved_settings.section_source_id,
            "tick_source_id": resolved_settings.tick_source_id,
        }

    @app.get("/api/activity")
    def activity(request: Request) -> Dict[str, Any]:
        return request.app.state.aggregator.snapshot().to_dict()

    @app.post("/api/events")
    def ingest_events(payload: list[EventPayload], request: Request) -> Dict[str, Any]:
        event_stream: EventStream = request.app.state.stream
        processed = 0
        with request.app.state.ingest_lock:
            for item in payload:
                try:
                    event_stream.emit(item.to_event())
                except OrderingViolationError as exc:
                    logger.warning("Rejected out-of-order event: %s", exc)
                    raise HTTPException(
                        status_code=409,
                        detail={"error": str(exc), "processed": processed},
                    ) from exc
                except MonitorError as exc:
                    logger.warning("Rejected event: %s", exc)
                    raise HTTPException(
                        status_code=400,
                        detail={"error": str(exc), "processed": processed},
                    ) from exc
                processed += 1
        return {"processed": processed}

    return app
