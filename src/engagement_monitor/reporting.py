"""Simple reporting utilities for CLI output."""

from __future__ import annotations

from typing import Optional

from .models import EngagementSnapshot


class SummaryPrinter:
    """Render human-readable engagement summaries in the console."""

    def print_snapshot(self, snapshot: EngagementSnapshot) -> None:
        application = snapshot.application
        if application.current_timestamp is None:
            print("No events processed.")
            return

        print("Engagement summary")
        print("-" * 40)
        print(f"Start of data:   {format_timestamp(application.start_of_data)}")
        print(f"Last event:      {format_timestamp(application.current_timestamp)}")
        print(f"Run time:        {format_duration(application.total_run_seconds)}")
        print(f"Active time:     {format_duration(application.total_active_seconds)}")
        print()

        print("Sections:")
        print(f"  {'section':<24} {'run':>8} {'active':>8}  first use")
        for section in snapshot.sections:
            print(
                f"  {section.section_id[:24]:<24} "
                f"{format_duration(section.total_run_seconds):>8} "
                f"{format_duration(section.total_active_seconds):>8}  "
                f"{format_timestamp(section.first_use_timestamp)}"
            )


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def format_timestamp(value: Optional[float]) -> str:
    if value is None:
        return "-"
    return f"{value:g} ms"
