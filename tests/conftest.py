import pytest

from engagement_monitor.config import MonitorSettings
from engagement_monitor.models import DomainEvent

POINTER_SOURCE = "sim.intro.view.mouseDownAction"


@pytest.fixture
def settings() -> MonitorSettings:
    return MonitorSettings()


@pytest.fixture
def events(settings: MonitorSettings):
    """Factory for the event kinds the default settings recognise."""

    class EventFactory:
        def overview(self, timestamp: float, showing: bool) -> DomainEvent:
            return DomainEvent(timestamp, settings.overview_source_id, showing)

        def section(self, timestamp: float, index: int) -> DomainEvent:
            return DomainEvent(timestamp, settings.section_source_id, index)

        def tick(self, timestamp: float, dt: float = 0.016) -> DomainEvent:
            return DomainEvent(timestamp, settings.tick_source_id, dt)

        def pointer(self, timestamp: float) -> DomainEvent:
            return DomainEvent(timestamp, POINTER_SOURCE)

        def other(self, timestamp: float) -> DomainEvent:
            return DomainEvent(timestamp, "sim.intro.view.someProperty", 3)

    return EventFactory()
