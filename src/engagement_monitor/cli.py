"""Command-line interface for the engagement monitor."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from .config import MonitorSettings
from .paths import get_log_path

app = typer.Typer(help="Engagement metrics from an ordered event stream.")

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: bool = typer.Option(
        False, "--log-file", help="Also write logs to the per-user data directory."
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )
    if log_file:
        handler = logging.FileHandler(get_log_path(), encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)


@app.command()
def replay(
    events_path: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="JSON-lines file of events to replay."
    ),
    sections: list[str] = typer.Option(
        ..., "--section", "-s", help="Section name, repeat once per section in order."
    ),
    window_ms: float = typer.Option(
        1000.0, "--window-ms", min=1.0, help="Length of one activity window in milliseconds."
    ),
    overview: bool = typer.Option(
        False, "--overview/--no-overview", help="Whether the overview is showing at start."
    ),
    skip_invalid: bool = typer.Option(
        False, "--skip-invalid", help="Log and drop rejected events instead of aborting."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the snapshot as JSON."),
) -> None:
    """Replay a recorded event stream and print the resulting metrics."""
    from .aggregator import EngagementAggregator
    from .errors import MonitorError
    from .ingest import read_event_lines
    from .reporting import SummaryPrinter
    from .stream import EventStream

    settings = MonitorSettings.from_options(window_ms=window_ms)
    stream = EventStream()
    aggregator = EngagementAggregator(sections, settings, overview_showing=overview)
    aggregator.attach(stream)

    rejected = 0
    for line in read_event_lines(events_path):
        try:
            event = line.parse()
            if event is not None:
                stream.emit(event)
        except MonitorError as exc:
            if not skip_invalid:
                typer.echo(f"{events_path}:{line.line_number}: {exc}", err=True)
                raise typer.Exit(code=1) from exc
            rejected += 1
            logger.warning("Dropped event at line %d: %s", line.line_number, exc)

    if rejected:
        logger.info("Dropped %d rejected event(s).", rejected)

    snapshot = aggregator.snapshot()
    if as_json:
        typer.echo(json.dumps(snapshot.to_dict(), indent=2))
    else:
        SummaryPrinter().print_snapshot(snapshot)


@app.command()
def serve(
    sections: list[str] = typer.Option(
        ..., "--section", "-s", help="Section name, repeat once per section in order."
    ),
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(8766, "--port", min=1, max=65535, help="TCP port for the API."),
    window_ms: float = typer.Option(
        1000.0, "--window-ms", min=1.0, help="Length of one activity window in milliseconds."
    ),
    overview: bool = typer.Option(
        False, "--overview/--no-overview", help="Whether the overview is showing at start."
    ),
) -> None:
    """Serve the snapshot and ingest API over HTTP."""
    from .server_runner import run_server

    run_server(
        sections,
        host=host,
        port=port,
        settings=MonitorSettings.from_options(window_ms=window_ms),
        overview_showing=overview,
    )
