"""Domain models for the event stream and the engagement records."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, Union

Payload = Union[bool, int, float, None]


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """A single item from the event stream.

    ``timestamp`` is in milliseconds since an arbitrary epoch. ``payload`` is a
    boolean for visibility changes, an integer for section changes, elapsed
    seconds for ticks and ``None`` for discrete interactions.
    """

    timestamp: float
    source_id: str
    payload: Payload = None


@dataclass(frozen=True, slots=True)
class Classification:
    """What a single event means to the aggregator, with its payload resolved."""

    is_activity: bool = False
    overview_showing: Optional[bool] = None
    section_index: Optional[int] = None
    tick_seconds: Optional[float] = None


@dataclass(slots=True)
class ApplicationRecord:
    """Application-wide running statistics."""

    start_of_data: Optional[float] = None
    current_timestamp: Optional[float] = None
    total_run_seconds: int = 0
    total_active_seconds: int = 0

    def freeze(self) -> "ApplicationRecordView":
        return ApplicationRecordView(
            start_of_data=self.start_of_data,
            current_timestamp=self.current_timestamp,
            total_run_seconds=self.total_run_seconds,
            total_active_seconds=self.total_active_seconds,
        )


@dataclass(slots=True)
class SectionRecord:
    """Running statistics for one selectable section."""

    section_id: str
    first_use_timestamp: Optional[float] = None
    last_use_timestamp: Optional[float] = None
    total_run_seconds: float = 0.0
    total_active_seconds: int = 0

    def freeze(self) -> "SectionRecordView":
        return SectionRecordView(
            section_id=self.section_id,
            first_use_timestamp=self.first_use_timestamp,
            last_use_timestamp=self.last_use_timestamp,
            total_run_seconds=self.total_run_seconds,
            total_active_seconds=self.total_active_seconds,
        )


@dataclass(frozen=True, slots=True)
class ApplicationRecordView:
    start_of_data: Optional[float]
    current_timestamp: Optional[float]
    total_run_seconds: int
    total_active_seconds: int


@dataclass(frozen=True, slots=True)
class SectionRecordView:
    section_id: str
    first_use_timestamp: Optional[float]
    last_use_timestamp: Optional[float]
    total_run_seconds: float
    total_active_seconds: int


@dataclass(frozen=True, slots=True)
class EngagementSnapshot:
    """Point-in-time copy of every record held by an aggregator."""

    application: ApplicationRecordView
    sections: tuple[SectionRecordView, ...]
    events_processed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "application": asdict(self.application),
            "sections": [asdict(section) for section in self.sections],
            "events_processed": self.events_processed,
        }
