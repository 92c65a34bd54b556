"""Errors raised while consuming the event stream."""

from __future__ import annotations


class MonitorError(ValueError):
    """Base class for events the monitor refuses to apply."""


class OrderingViolationError(MonitorError):
    """An event arrived with a timestamp earlier than the last one seen."""

    def __init__(self, timestamp: float, last_timestamp: float) -> None:
        super().__init__(
            f"Event timestamp {timestamp} precedes last seen timestamp {last_timestamp}"
        )
        self.timestamp = timestamp
        self.last_timestamp = last_timestamp


class UnknownSectionError(MonitorError):
    """A section index outside the fixed set of known sections."""

    def __init__(self, index: int, section_count: int) -> None:
        super().__init__(
            f"Section index {index} is out of range for {section_count} section(s)"
        )
        self.index = index
        self.section_count = section_count


class MalformedEventError(MonitorError):
    """An event whose payload does not match what its source requires."""
