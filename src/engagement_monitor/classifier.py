"""Classify stream events into the signals the aggregator cares about."""

from __future__ import annotations

import math
from typing import Optional

from .config import MonitorSettings
from .errors import MalformedEventError
from .models import Classification, DomainEvent


def component_name(source_id: str) -> str:
    """Return the last dotted segment of a source identifier."""
    return source_id.rsplit(".", 1)[-1]


class EventClassifier:
    """Stateless queries over single events, bound to a set of source ids."""

    def __init__(self, settings: Optional[MonitorSettings] = None) -> None:
        self.settings = settings or MonitorSettings()
        self._activity_components = frozenset(self.settings.activity_components)

    def classify(self, event: DomainEvent) -> Classification:
        return Classification(
            is_activity=self.is_activity_event(event),
            overview_showing=self.overview_visibility_change(event),
            section_index=self.active_section_change(event),
            tick_seconds=self.section_tick(event),
        )

    def is_activity_event(self, event: DomainEvent) -> bool:
        return component_name(event.source_id) in self._activity_components

    def overview_visibility_change(self, event: DomainEvent) -> Optional[bool]:
        if event.source_id != self.settings.overview_source_id:
            return None
        if not isinstance(event.payload, bool):
            raise MalformedEventError(
                f"Overview change from {event.source_id!r} needs a boolean payload, "
                f"got {event.payload!r}"
            )
        return event.payload

    def active_section_change(self, event: DomainEvent) -> Optional[int]:
        if event.source_id != self.settings.section_source_id:
            return None
        if isinstance(event.payload, bool) or not isinstance(event.payload, int):
            raise MalformedEventError(
                f"Section change from {event.source_id!r} needs an integer payload, "
                f"got {event.payload!r}"
            )
        return event.payload

    def section_tick(self, event: DomainEvent) -> Optional[float]:
        if event.source_id != self.settings.tick_source_id:
            return None
        payload = event.payload
        if isinstance(payload, bool) or not isinstance(payload, (int, float)):
            raise MalformedEventError(
                f"Tick from {event.source_id!r} needs an elapsed-seconds payload, "
                f"got {payload!r}"
            )
        try:
            seconds = float(payload)
        except OverflowError as exc:
            raise MalformedEventError(
                f"Tick from {event.source_id!r} has an elapsed time too large for a float"
            ) from exc
        if not math.isfinite(seconds) or seconds < 0:
            raise MalformedEventError(
                f"Tick from {event.source_id!r} has invalid elapsed time {seconds!r}"
            )
        return seconds


def classify(
    event: DomainEvent, settings: Optional[MonitorSettings] = None
) -> Classification:
    """Classify one event using ``settings`` (defaults when omitted)."""
    return EventClassifier(settings).classify(event)
