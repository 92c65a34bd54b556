"""Parse wire-level JSON events into domain events."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import MalformedEventError
from .models import DomainEvent


class EventPayload(BaseModel):
    timestamp: float
    source_id: str
    payload: Union[bool, int, float, None] = None

    model_config = ConfigDict(extra="forbid")

    def to_event(self) -> DomainEvent:
        return DomainEvent(
            timestamp=self.timestamp,
            source_id=self.source_id,
            payload=self.payload,
        )


def parse_event_line(line: str) -> Optional[DomainEvent]:
    """Parse one JSON line. Blank lines and ``#`` comments yield ``None``."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    try:
        raw = json.loads(stripped)
    except json.JSONDecodeError as exc:
        raise MalformedEventError(f"Invalid JSON: {exc.msg}") from exc
    try:
        return EventPayload.model_validate(raw).to_event()
    except ValidationError as exc:
        raise MalformedEventError(_summarize(exc)) from exc


@dataclass(frozen=True, slots=True)
class EventLine:
    """One raw line of a JSON-lines event file."""

    line_number: int
    text: str

    def parse(self) -> Optional[DomainEvent]:
        return parse_event_line(self.text)


def read_event_lines(path: Path) -> Iterator[EventLine]:
    """Yield the lines of a JSON-lines file with their line numbers.

    Parsing is left to :meth:`EventLine.parse` so a caller can drop a bad
    line and keep reading.
    """
    with Path(path).open("r", encoding="utf-8") as handle:
        for line_number, text in enumerate(handle, start=1):
            yield EventLine(line_number, text)


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "event"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)

