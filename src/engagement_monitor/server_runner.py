"""Helpers to launch the monitor's HTTP API."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import uvicorn

from .config import MonitorSettings
from .webapp import create_app


def run_server(
    sections: Sequence[str],
    *,
    host: str = "127.0.0.1",
    port: int = 8766,
    settings: Optional[MonitorSettings] = None,
    overview_showing: bool = False,
    log_level: str = "info",
) -> None:
    """Start the FastAPI app serving the engagement snapshot."""
    app = create_app(
        sections,
        settings=settings or MonitorSettings(),
        overview_showing=overview_showing,
    )
    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(app, host=host, port=port, log_level=log_level)
