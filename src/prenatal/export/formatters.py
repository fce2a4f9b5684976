"""Output formatters for pregnancy progress and daily schedules."""

from __future__ import annotations

import json
from datetime import date
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from prenatal.gestation.baby_sizes import BabySizeEntry
from prenatal.gestation.clock import GestationalProgress, derive_lmp_from_due_date
from prenatal.kicks import KickSession
from prenatal.schedule.models import Completion, DailyScheduleSlot


def progress_to_dict(
    due_date: date,
    progress: GestationalProgress,
    size: Optional[BabySizeEntry] = None,
    milestone: Optional[str] = None,
) -> dict:
    """Convert a progress snapshot to a JSON-ready dict."""
    result = {
        "due_date": due_date.isoformat(),
        "lmp_date": derive_lmp_from_due_date(due_date).isoformat(),
        "current_week": progress.current_week,
        "days_into_week": progress.days_into_week,
        "trimester": progress.trimester,
        "trimester_name": progress.trimester_name,
        "days_remaining": progress.days_remaining,
        "weeks_remaining": progress.weeks_remaining,
        "is_overdue": progress.is_overdue,
        "percent_complete": round(progress.percent_complete, 1),
    }
    if size is not None:
        result["baby_size"] = baby_size_to_dict(size)
    if milestone:
        result["milestone"] = milestone
    return result


def baby_size_to_dict(size: BabySizeEntry) -> dict:
    return {
        "week": size.week,
        "object": size.object_name,
        "icon": size.icon,
        "length": size.length,
        "weight": size.weight,
    }


def slot_to_dict(slot: DailyScheduleSlot) -> dict:
    return {
        "reminder_id": slot.reminder_id,
        "name": slot.name,
        "dosage": slot.dosage,
        "time": slot.time,
        "taken": slot.taken,
        "log_id": slot.log_id,
    }


def completion_to_dict(completion: Completion) -> dict:
    return {
        "taken_count": completion.taken_count,
        "total_count": completion.total_count,
        "progress_fraction": completion.progress_fraction,
    }


def schedule_to_dict(
    day: date, schedule: list[DailyScheduleSlot], completion: Completion
) -> dict:
    """Convert a day's schedule and its completion stats to a JSON-ready dict."""
    return {
        "day": day.isoformat(),
        "slots": [slot_to_dict(s) for s in schedule],
        "completion": completion_to_dict(completion),
    }


def kick_session_to_dict(session: KickSession) -> dict:
    return {
        "session_id": session.session_id,
        "count": session.count,
        "duration_minutes": session.duration_minutes,
        "started_at": session.started_at.isoformat(),
        "completed_at": session.completed_at.isoformat(),
        "reached_target": session.reached_target,
        "notes": session.notes,
    }


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def progress(
        self,
        due_date: date,
        progress: GestationalProgress,
        size: Optional[BabySizeEntry] = None,
        milestone: Optional[str] = None,
    ) -> None:
        """Print a progress panel."""
        lines = [
            f"[bold]Week {progress.current_week}[/bold] + {progress.days_into_week} days"
            f"  ({progress.trimester_name})",
            f"Due: {due_date.strftime('%B %d, %Y')}",
        ]
        if progress.is_overdue:
            lines.append("[yellow]Past due date[/yellow]")
        else:
            lines.append(
                f"{progress.days_remaining} days left (~{progress.weeks_remaining} weeks)"
            )
        if size is not None:
            lines.append(
                f"Baby is about the size of a {size.icon} [cyan]{size.object_name}[/cyan]"
                f" ({size.length}, {size.weight})"
            )
        if milestone:
            lines.append(f"[magenta]{milestone}[/magenta]")

        self.console.print(Panel("\n".join(lines), title="Pregnancy Progress"))

    def schedule(
        self,
        day: date,
        schedule: list[DailyScheduleSlot],
        completion: Completion,
    ) -> None:
        """Print the day's dose schedule."""
        if not schedule:
            self.console.print(f"No reminders scheduled for {day.isoformat()}")
            return

        table = Table(title=f"Schedule for {day.isoformat()}")
        table.add_column("Time", style="cyan")
        table.add_column("Name")
        table.add_column("Dosage")
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Status", justify="center")

        for slot in schedule:
            status = "[green]taken[/green]" if slot.taken else "[yellow]pending[/yellow]"
            table.add_row(slot.time, slot.name, slot.dosage, slot.reminder_id, status)

        self.console.print(table)
        self.console.print(
            f"{completion.taken_count} of {completion.total_count} doses taken"
            f" ({completion.percent:.0f}%)"
        )


class JSONFormatter:
    """Format results as JSON for programmatic use."""

    def progress(
        self,
        due_date: date,
        progress: GestationalProgress,
        size: Optional[BabySizeEntry] = None,
        milestone: Optional[str] = None,
    ) -> str:
        return json.dumps(
            progress_to_dict(due_date, progress, size, milestone),
            indent=2,
            ensure_ascii=False,
        )

    def schedule(
        self,
        day: date,
        schedule: list[DailyScheduleSlot],
        completion: Completion,
    ) -> str:
        return json.dumps(schedule_to_dict(day, schedule, completion), indent=2)


class MarkdownFormatter:
    """Format results as Markdown for notes and sharing."""

    def progress(
        self,
        due_date: date,
        progress: GestationalProgress,
        size: Optional[BabySizeEntry] = None,
        milestone: Optional[str] = None,
    ) -> str:
        lines = [
            f"# Week {progress.current_week}",
            "",
            f"**Trimester:** {progress.trimester_name}",
            f"**Due date:** {due_date.isoformat()}",
            f"**Days remaining:** {progress.days_remaining}",
        ]
        if size is not None:
            lines.append(f"**Baby size:** {size.object_name} ({size.length}, {size.weight})")
        if milestone:
            lines.extend(["", f"> {milestone}"])
        return "\n".join(lines)

    def schedule(
        self,
        day: date,
        schedule: list[DailyScheduleSlot],
        completion: Completion,
    ) -> str:
        lines = [
            f"# Schedule for {day.isoformat()}",
            "",
            "| Time | Name | Dosage | Taken |",
            "|------|------|--------|-------|",
        ]
        for slot in schedule:
            lines.append(
                f"| {slot.time} | {slot.name} | {slot.dosage} | {'yes' if slot.taken else 'no'} |"
            )
        lines.extend(
            ["", f"**Taken:** {completion.taken_count} of {completion.total_count}"]
        )
        return "\n".join(lines)


def _get_formatter(output_format: str, console: Optional[Console] = None):
    if output_format == "table":
        return TableFormatter(console)
    elif output_format == "json":
        return JSONFormatter()
    elif output_format == "markdown":
        return MarkdownFormatter()
    else:
        raise ValueError(f"Unknown output format: {output_format}")


def format_progress(
    due_date: date,
    progress: GestationalProgress,
    size: Optional[BabySizeEntry] = None,
    milestone: Optional[str] = None,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a progress snapshot.

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    formatter = _get_formatter(output_format, console)
    return formatter.progress(due_date, progress, size, milestone)


def format_schedule(
    day: date,
    schedule: list[DailyScheduleSlot],
    completion: Completion,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format a daily schedule.

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    formatter = _get_formatter(output_format, console)
    return formatter.schedule(day, schedule, completion)
