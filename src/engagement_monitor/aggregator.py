"""Engagement aggregator: derives time spent and time active from the event stream.

The finest granularity of the output is set by the most frequent events in the
stream, usually the per-frame tick. Active seconds are not driven by a timer:
an active second begins with an activity event and stays open until some later
event arrives more than one activity window after it began. Activity events
inside an open window neither restart nor extend it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .classifier import EventClassifier
from .config import MonitorSettings
from .errors import MalformedEventError, OrderingViolationError, UnknownSectionError
from .models import (
    ApplicationRecord,
    Classification,
    DomainEvent,
    EngagementSnapshot,
    SectionRecord,
)
from .stream import EventStream

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AggregatorState:
    """Mutable stream position and window bookkeeping behind the records."""

    overview_showing: bool
    active_section_index: int
    has_seen_first_activity: bool = False
    active_window_start: Optional[float] = None
    last_timestamp: Optional[float] = None
    events_processed: int = 0


class EngagementAggregator:
    """Single-writer reducer over an ordered stream of domain events.

    Only one thread may call :meth:`process`. :meth:`snapshot` may be called
    from anywhere; it returns the immutable snapshot published after the last
    successful event.
    """

    def __init__(
        self,
        sections: Sequence[str],
        settings: Optional[MonitorSettings] = None,
        *,
        overview_showing: bool = False,
        active_section_index: int = 0,
    ) -> None:
        if not sections:
            raise ValueError("At least one section is required")
        self.settings = settings or MonitorSettings()
        self._classifier = EventClassifier(self.settings)
        self._window_ms = self.settings.activity_window_ms
        self._application = ApplicationRecord()
        self._sections = [SectionRecord(section_id=name) for name in sections]
        self._check_section(active_section_index)
        self._state = AggregatorState(
            overview_showing=overview_showing,
            active_section_index=active_section_index,
        )
        self._snapshot = self._build_snapshot()

    @property
    def section_ids(self) -> list[str]:
        return [section.section_id for section in self._sections]

    @property
    def events_processed(self) -> int:
        return self._snapshot.events_processed

    def attach(self, stream: EventStream) -> None:
        """Register this aggregator as a listener for every event on ``stream``."""
        stream.subscribe(self.process)

    def snapshot(self) -> EngagementSnapshot:
        return self._snapshot

    def process(self, event: DomainEvent) -> None:
        """Apply one event, or raise without changing any state."""
        timestamp = self._check_timestamp(event)
        classification = self._classifier.classify(event)
        if classification.section_index is not None:
            self._check_section(classification.section_index)

        self._apply(timestamp, classification)
        self._state.last_timestamp = timestamp
        self._state.events_processed += 1
        self._snapshot = self._build_snapshot()

    def _apply(self, timestamp: float, classification: Classification) -> None:
        state = self._state
        application = self._application

        # Section-start bookkeeping.
        if classification.overview_showing is not None:
            state.overview_showing = classification.overview_showing
            self._mark_section_started(timestamp)
        if classification.section_index is not None:
            state.active_section_index = classification.section_index
            self._mark_section_started(timestamp)

        current = self._sections[state.active_section_index]
        if not state.overview_showing:
            current.last_use_timestamp = timestamp

        # Close the active window against whichever section is current now.
        if (
            state.active_window_start is not None
            and timestamp - state.active_window_start > self._window_ms
        ):
            application.total_active_seconds += 1
            if not state.overview_showing:
                current.total_active_seconds += 1
            logger.debug(
                "Closed activity window opened at %s (section=%s, overview=%s)",
                state.active_window_start,
                current.section_id,
                state.overview_showing,
            )
            state.active_window_start = None

        if classification.is_activity:
            if not state.has_seen_first_activity:
                state.has_seen_first_activity = True
                application.start_of_data = timestamp
                logger.debug("First activity at %s", timestamp)
            if state.active_window_start is None:
                state.active_window_start = timestamp

        application.current_timestamp = timestamp
        start = (
            application.start_of_data
            if application.start_of_data is not None
            else timestamp
        )
        application.total_run_seconds = _round_half_up((timestamp - start) / 1000)

        if not state.overview_showing and classification.tick_seconds is not None:
            current.total_run_seconds += classification.tick_seconds

    def _mark_section_started(self, timestamp: float) -> None:
        if self._state.overview_showing:
            return
        section = self._sections[self._state.active_section_index]
        if section.first_use_timestamp is None:
            section.first_use_timestamp = timestamp
            logger.debug("Section %s first used at %s", section.section_id, timestamp)

    def _check_timestamp(self, event: DomainEvent) -> float:
        raw = event.timestamp
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise MalformedEventError(f"Event timestamp must be a number, got {raw!r}")
        try:
            timestamp = float(raw)
        except OverflowError as exc:
            raise MalformedEventError("Event timestamp is too large for a float") from exc
        if not math.isfinite(timestamp):
            raise MalformedEventError(f"Event timestamp must be finite, got {timestamp!r}")
        last = self._state.last_timestamp
        if last is not None and timestamp < last:
            raise OrderingViolationError(timestamp, last)
        return timestamp

    def _check_section(self, index: int) -> None:
        if not 0 <= index < len(self._sections):
            raise UnknownSectionError(index, len(self._sections))

    def _build_snapshot(self) -> EngagementSnapshot:
        return EngagementSnapshot(
            application=self._application.freeze(),
            sections=tuple(section.freeze() for section in self._sections),
            events_processed=self._state.events_processed,
        )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
