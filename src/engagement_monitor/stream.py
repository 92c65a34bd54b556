"""In-process push subscription for domain events."""

from __future__ import annotations

from typing import Callable

from .models import DomainEvent

Listener = Callable[[DomainEvent], None]


class EventStream:
    """Delivers every emitted event to every listener, in subscription order.

    Listener exceptions propagate to the caller of :meth:`emit`.
    """

    def __init__(self) -> None:
        self.listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def emit(self, event: DomainEvent) -> None:
        for listener in self.listeners:
            listener(event)
