"""Configuration models and helpers for the engagement monitor."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable, Optional

DEFAULT_ACTIVITY_COMPONENTS: tuple[str, ...] = (
    "mouseDownAction",
    "touchDownAction",
    "keydownAction",
    "penDownAction",
)


@dataclass(slots=True)
class MonitorSettings:
    """Source identifiers and timing rules used to classify the event stream."""

    activity_window: timedelta = timedelta(seconds=1)
    activity_components: tuple[str, ...] = DEFAULT_ACTIVITY_COMPONENTS
    overview_source_id: str = "sim.showHomeScreenProperty"
    section_source_id: str = "sim.screenIndexProperty"
    tick_source_id: str = "sim.stepSimulationAction"

    @property
    def activity_window_ms(self) -> float:
        return self.activity_window.total_seconds() * 1000

    @classmethod
    def from_options(
        cls,
        window_ms: float = 1000.0,
        activity_components: Optional[Iterable[str]] = None,
        overview_source_id: Optional[str] = None,
        section_source_id: Optional[str] = None,
        tick_source_id: Optional[str] = None,
    ) -> "MonitorSettings":
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        defaults = cls()
        components = (
            tuple(activity_components)
            if activity_components
            else defaults.activity_components
        )
        return cls(
            activity_window=timedelta(milliseconds=window_ms),
            activity_components=components,
            overview_source_id=overview_source_id or defaults.overview_source_id,
            section_source_id=section_source_id or defaults.section_source_id,
            tick_source_id=tick_source_id or defaults.tick_source_id,
        )
