"""CLI interface using Typer."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from prenatal.config import get_settings
from prenatal.db import get_db
from prenatal.db.queries import (
    IntakeQueries,
    KickQueries,
    PregnancyQueries,
    ReminderQueries,
)
from prenatal.export.formatters import (
    baby_size_to_dict,
    format_progress,
    format_schedule,
    kick_session_to_dict,
    progress_to_dict,
    schedule_to_dict,
)
from prenatal.export.response import create_response, error_response
from prenatal.gestation import (
    GestationalReference,
    checklist_for_trimester,
    compute_progress,
    get_milestone,
    get_weekly_insight,
    lookup_baby_size,
)
from prenatal.kicks import KICK_TARGET, KickSession, build_session, format_elapsed
from prenatal.parsing import (
    InvalidInput,
    load_records_file,
    parse_date,
    parse_datetime,
    parse_time_of_day,
)
from prenatal.schedule import (
    FREQUENCY_LABELS,
    FrequencyCode,
    build_daily_schedule,
    compute_completion,
    pending_slots,
    record_intake,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Pregnancy progress and supplement schedule tracking",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

# Subcommand groups
pregnancy_app = typer.Typer(help="Set and show the tracked due date")
reminders_app = typer.Typer(help="Manage medication and supplement reminders")
kicks_app = typer.Typer(help="Log kick counter sessions")
config_app = typer.Typer(help="Show or initialize configuration")

app.add_typer(pregnancy_app, name="pregnancy")
app.add_typer(reminders_app, name="reminders")
app.add_typer(kicks_app, name="kicks")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr through Rich at the configured level."""
    level = "DEBUG" if verbose else get_settings().logging.level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def ensure_tables() -> None:
    """Create the schema on first use."""
    db = get_db()
    # kick_sessions is created last in the schema script
    if not db.table_exists("kick_sessions"):
        db.initialize_schema()


def fail(
    command: str,
    message: str,
    json_output: bool,
    suggestions: Optional[list[str]] = None,
) -> NoReturn:
    """Report an error in the requested style and exit with status 1."""
    if json_output:
        print(error_response(command, message, suggestions).to_json())
    else:
        console.print(f"[red]{message}[/red]")
        for suggestion in suggestions or []:
            console.print(suggestion)
    raise typer.Exit(1)


def resolve_day(day_str: Optional[str]) -> date:
    return parse_date(day_str) if day_str else date.today()


def active_reference(command: str, json_output: bool) -> GestationalReference:
    """Load the active pregnancy or exit with a hint to create one."""
    with get_db().get_connection() as conn:
        active = PregnancyQueries.get_active(conn)
    if active is None:
        fail(
            command,
            "No pregnancy is being tracked",
            json_output,
            ["Set one with: prenatal pregnancy set --due YYYY-MM-DD"],
        )
    return active[1]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Pregnancy progress and supplement schedule tracking."""
    configure_logging(verbose)


# Callbacks for sub-apps that need the database
@pregnancy_app.callback()
def pregnancy_callback() -> None:
    """Ensure tables exist before any pregnancy command."""
    ensure_tables()


@reminders_app.callback()
def reminders_callback() -> None:
    """Ensure tables exist before any reminders command."""
    ensure_tables()


@kicks_app.callback()
def kicks_callback() -> None:
    """Ensure tables exist before any kicks command."""
    ensure_tables()


# ============================================================================
# Progress Commands
# ============================================================================


@app.command()
def status(
    on: Optional[str] = typer.Option(
        None, "--on", help="Evaluate on this date (YYYY-MM-DD, default: now)"
    ),
    due: Optional[str] = typer.Option(
        None, "--due", help="Due date to use instead of the tracked pregnancy"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Show current week, trimester, days remaining and baby size."""
    try:
        now = parse_date(on) if on else datetime.now()
        if due:
            due_date = parse_date(due)
        else:
            ensure_tables()
            due_date = active_reference("status", json_output).due_date
    except InvalidInput as e:
        fail("status", str(e), json_output)

    progress = compute_progress(due_date, now)
    size = lookup_baby_size(progress.current_week)
    milestone = get_milestone(progress.current_week)
    insight = get_weekly_insight(progress.current_week)

    if json_output:
        data = progress_to_dict(due_date, progress, size, milestone)
        if insight:
            data["insight"] = {
                "baby": insight.baby,
                "mother": insight.mother,
                "tip": insight.tip,
                "why_it_matters": insight.why_it_matters,
                "checklist": list(insight.checklist),
            }
        print(create_response(
            "status",
            data=data,
            human_summary=(
                f"Week {progress.current_week}, {progress.trimester_name}, "
                f"{progress.days_remaining} days left"
            ),
        ).to_json())
        return

    fmt = output_format or get_settings().defaults.output_format
    try:
        rendered = format_progress(due_date, progress, size, milestone, fmt, console)
    except ValueError as e:
        fail("status", str(e), json_output)
    if rendered is not None:
        print(rendered)
    elif insight:
        console.print(f"\n[bold]This week:[/bold] {insight.baby}")
        console.print(f"[bold]Tip:[/bold] {insight.tip}")


@app.command()
def size(
    week: int = typer.Argument(..., help="Gestational week"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the baby size comparison for a week."""
    entry = lookup_baby_size(week)

    if json_output:
        print(create_response(
            "size",
            data=baby_size_to_dict(entry),
            human_summary=f"Week {entry.week}: {entry.object_name}",
        ).to_json())
    else:
        console.print(
            f"Week {entry.week}: {entry.icon} [cyan]{entry.object_name}[/cyan]"
            f" - {entry.length}, {entry.weight}"
        )


@app.command()
def checklist(
    trimester: Optional[int] = typer.Option(
        None, "--trimester", "-t", help="Trimester 1-3 (default: current)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show recommended tasks for a trimester."""
    if trimester is None:
        ensure_tables()
        reference = active_reference("checklist", json_output)
        trimester = reference.progress(datetime.now()).trimester

    tasks = checklist_for_trimester(trimester)
    if not tasks:
        fail("checklist", f"Unknown trimester: {trimester}", json_output)

    if json_output:
        print(create_response(
            "checklist",
            data={
                "trimester": trimester,
                "tasks": [
                    {
                        "id": t.task_id,
                        "task": t.task,
                        "description": t.description,
                        "category": t.category,
                    }
                    for t in tasks
                ],
            },
            human_summary=f"{len(tasks)} tasks for trimester {trimester}",
        ).to_json())
        return

    table = Table(title=f"Trimester {trimester} Checklist")
    table.add_column("Task", style="cyan")
    table.add_column("Category")
    table.add_column("Details", style="dim")
    for t in tasks:
        table.add_row(t.task, t.category, t.description)
    console.print(table)


# ============================================================================
# Pregnancy Commands
# ============================================================================


@pregnancy_app.command("set")
def pregnancy_set(
    due: Optional[str] = typer.Option(None, "--due", help="Due date (YYYY-MM-DD)"),
    lmp: Optional[str] = typer.Option(
        None, "--lmp", help="First day of last menstrual period (YYYY-MM-DD)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Track a pregnancy by due date or LMP date (exactly one)."""
    if (due is None) == (lmp is None):
        fail("pregnancy set", "Provide exactly one of --due or --lmp", json_output)

    try:
        if due:
            reference = GestationalReference.from_due_date(parse_date(due))
        else:
            reference = GestationalReference.from_lmp(parse_date(lmp))
    except InvalidInput as e:
        fail("pregnancy set", str(e), json_output)

    with get_db().get_connection() as conn:
        pregnancy_id = PregnancyQueries.set_due_date(conn, reference)

    if json_output:
        print(create_response(
            "pregnancy set",
            data={
                "pregnancy_id": pregnancy_id,
                "due_date": reference.due_date.isoformat(),
                "lmp_date": reference.lmp_date.isoformat(),
            },
            human_summary=f"Due date set to {reference.due_date.isoformat()}",
        ).to_json())
    else:
        console.print(f"[green]Due date:[/green] {reference.due_date.isoformat()}")
        console.print(f"[blue]LMP:[/blue] {reference.lmp_date.isoformat()}")


@pregnancy_app.command("show")
def pregnancy_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the tracked due date and LMP date."""
    reference = active_reference("pregnancy show", json_output)

    if json_output:
        print(create_response(
            "pregnancy show",
            data={
                "due_date": reference.due_date.isoformat(),
                "lmp_date": reference.lmp_date.isoformat(),
            },
        ).to_json())
    else:
        console.print(f"Due date: {reference.due_date.isoformat()}")
        console.print(f"LMP: {reference.lmp_date.isoformat()}")


# ============================================================================
# Reminder Commands
# ============================================================================


@reminders_app.command("add")
def reminders_add(
    name: str = typer.Argument(..., help="Medication or supplement name"),
    dosage: str = typer.Option(..., "--dosage", "-d", help="Dosage, e.g. '27mg'"),
    frequency: str = typer.Option(
        "DAILY", "--frequency", help="DAILY, TWICE_DAILY or THREE_TIMES_DAILY"
    ),
    times: Optional[list[str]] = typer.Option(
        None, "--time", "-t", help="Time of day HH:MM (repeat up to 3 times)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Add a reminder with 1-3 times of day."""
    settings = get_settings()
    try:
        frequency_code = FrequencyCode(frequency.upper())
    except ValueError:
        fail(
            "reminders add",
            f"Unknown frequency '{frequency}'",
            json_output,
            [f"Choose one of: {', '.join(f.value for f in FrequencyCode)}"],
        )

    try:
        with get_db().get_connection() as conn:
            reminder = ReminderQueries.create(
                conn,
                name=name,
                dosage=dosage,
                frequency=frequency_code,
                times_of_day=times or [settings.reminders.default_time],
            )
    except InvalidInput as e:
        fail("reminders add", str(e), json_output)

    if json_output:
        print(create_response(
            "reminders add",
            data={
                "reminder_id": reminder.reminder_id,
                "name": reminder.name,
                "dosage": reminder.dosage,
                "frequency": reminder.frequency.value,
                "times_of_day": reminder.times_of_day,
            },
            human_summary=f"Added reminder {reminder.reminder_id}: {reminder.name}",
        ).to_json())
    else:
        console.print(
            f"[green]Added reminder {reminder.reminder_id}:[/green] {reminder.name}"
            f" ({reminder.dosage}) at {', '.join(reminder.times_of_day)}"
        )


@reminders_app.command("list")
def reminders_list(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List reminders."""
    with get_db().get_connection() as conn:
        reminders = ReminderQueries.list_active(conn)

    if json_output:
        print(create_response(
            "reminders list",
            data={
                "reminders": [
                    {
                        "reminder_id": r.reminder_id,
                        "name": r.name,
                        "dosage": r.dosage,
                        "frequency": r.frequency.value,
                        "frequency_label": FREQUENCY_LABELS[r.frequency],
                        "times_of_day": r.times_of_day,
                    }
                    for r in reminders
                ]
            },
            human_summary=f"{len(reminders)} reminders",
        ).to_json())
        return

    if not reminders:
        console.print("No reminders yet")
        console.print("Add one with: prenatal reminders add Iron --dosage 27mg --time 08:00")
        return

    table = Table(title="Reminders")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Dosage")
    table.add_column("Frequency")
    table.add_column("Times")
    for r in reminders:
        table.add_row(
            r.reminder_id,
            r.name,
            r.dosage,
            FREQUENCY_LABELS[r.frequency],
            ", ".join(r.times_of_day),
        )
    console.print(table)


@reminders_app.command("remove")
def reminders_remove(
    reminder_id: int = typer.Argument(..., help="Reminder ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Delete a reminder and its intake history."""
    with get_db().get_connection() as conn:
        deleted = ReminderQueries.delete(conn, str(reminder_id))

    if not deleted:
        fail("reminders remove", f"Reminder {reminder_id} not found", json_output)

    if json_output:
        print(create_response(
            "reminders remove",
            data={"reminder_id": str(reminder_id)},
            human_summary=f"Removed reminder {reminder_id}",
        ).to_json())
    else:
        console.print(f"[green]Removed reminder {reminder_id}[/green]")


def _edit_times(command: str, reminder_id: int, json_output: bool, edit) -> None:
    with get_db().get_connection() as conn:
        reminder = ReminderQueries.get(conn, str(reminder_id))
        if reminder is None:
            fail(command, f"Reminder {reminder_id} not found", json_output)
        try:
            updated = edit(reminder)
        except InvalidInput as e:
            fail(command, str(e), json_output)
        ReminderQueries.update_times(conn, updated)

    if json_output:
        print(create_response(
            command,
            data={"reminder_id": updated.reminder_id, "times_of_day": updated.times_of_day},
            human_summary=f"{updated.name}: {', '.join(updated.times_of_day)}",
        ).to_json())
    else:
        console.print(
            f"[green]{updated.name}[/green] now at {', '.join(updated.times_of_day)}"
        )


@reminders_app.command("add-time")
def reminders_add_time(
    reminder_id: int = typer.Argument(..., help="Reminder ID"),
    time_of_day: Optional[str] = typer.Argument(None, help="Time HH:MM"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Add a time of day to a reminder (at most 3)."""
    slot = time_of_day or get_settings().reminders.added_slot_time
    _edit_times(
        "reminders add-time", reminder_id, json_output, lambda r: r.with_added_slot(slot)
    )


@reminders_app.command("remove-time")
def reminders_remove_time(
    reminder_id: int = typer.Argument(..., help="Reminder ID"),
    index: int = typer.Argument(..., help="Position of the time to remove (from 0)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Remove a time of day from a reminder (at least 1 must remain)."""
    _edit_times(
        "reminders remove-time", reminder_id, json_output, lambda r: r.with_removed_slot(index)
    )


# ============================================================================
# Schedule Commands
# ============================================================================


@app.command()
def schedule(
    day_str: Optional[str] = typer.Option(
        None, "--day", "-d", help="Day (YYYY-MM-DD, default: today)"
    ),
    from_file: Optional[Path] = typer.Option(
        None, "--from-file", help="Reconcile an exported medications payload (YAML/JSON)"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: table, json, markdown"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON envelope"),
) -> None:
    """Show the day's dose schedule with taken/pending status."""
    try:
        day = resolve_day(day_str)
        if from_file is not None:
            if not from_file.exists():
                raise InvalidInput(f"File not found: {from_file}")
            records = load_records_file(from_file)
            reminders, logs = records["reminders"], records["logs"]
        else:
            ensure_tables()
            with get_db().get_connection() as conn:
                reminders = ReminderQueries.list_active(conn)
                logs = IntakeQueries.logs_for_day(conn, day)
    except InvalidInput as e:
        fail("schedule", str(e), json_output)

    slots = build_daily_schedule(reminders, logs, day)
    completion = compute_completion(slots)
    logger.debug("Built %d slots for %s", len(slots), day)

    if json_output:
        print(create_response(
            "schedule",
            data=schedule_to_dict(day, slots, completion),
            human_summary=(
                f"{completion.taken_count} of {completion.total_count} doses taken"
            ),
        ).to_json())
        return

    fmt = output_format or get_settings().defaults.output_format
    try:
        rendered = format_schedule(day, slots, completion, fmt, console)
    except ValueError as e:
        fail("schedule", str(e), json_output)
    if rendered is not None:
        print(rendered)


@app.command()
def take(
    reminder_id: int = typer.Argument(..., help="Reminder ID"),
    time_of_day: Optional[str] = typer.Argument(
        None, help="Scheduled time HH:MM (default: next pending dose)"
    ),
    day_str: Optional[str] = typer.Option(
        None, "--day", "-d", help="Day (YYYY-MM-DD, default: today)"
    ),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Optional notes"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Mark a scheduled dose as taken."""
    ensure_tables()
    try:
        day = resolve_day(day_str)
        slot_time = parse_time_of_day(time_of_day) if time_of_day else None
    except InvalidInput as e:
        fail("take", str(e), json_output)

    with get_db().get_connection() as conn:
        reminder = ReminderQueries.get(conn, str(reminder_id))
        if reminder is None:
            fail("take", f"Reminder {reminder_id} not found", json_output)
        if slot_time is not None and slot_time not in reminder.times_of_day:
            fail(
                "take",
                f"{reminder.name} is not scheduled at {slot_time}",
                json_output,
                [f"Scheduled times: {', '.join(reminder.times_of_day)}"],
            )

        slots = build_daily_schedule([reminder], IntakeQueries.logs_for_day(conn, day), day)
        if slot_time is None:
            pending = pending_slots(slots)
            if not pending:
                fail("take", f"All {reminder.name} doses for {day} are taken", json_output)
            slot_time = pending[0].time
        already_taken = any(s.taken for s in slots if s.time == slot_time)

        if already_taken:
            entry = None
        else:
            entry = IntakeQueries.record_intake(
                conn,
                record_intake(
                    reminder.reminder_id,
                    slot_time,
                    day,
                    notes or get_settings().reminders.intake_note,
                ),
            )

    if json_output:
        print(create_response(
            "take",
            data={
                "reminder_id": reminder.reminder_id,
                "time": slot_time,
                "day": day.isoformat(),
                "already_taken": already_taken,
                "log_id": entry.log_id if entry else None,
            },
            human_summary=f"{reminder.name} at {slot_time} recorded",
        ).to_json())
    elif already_taken:
        console.print(f"[yellow]{reminder.name} at {slot_time} was already taken[/yellow]")
    else:
        console.print(f"[green]{reminder.name} intake recorded[/green] ({day} {slot_time})")


# ============================================================================
# Kick Counter Commands
# ============================================================================


@kicks_app.command("log")
def kicks_log(
    count: int = typer.Option(..., "--count", "-c", help="Number of kicks felt"),
    minutes: Optional[int] = typer.Option(
        None, "--minutes", "-m", help="Session length in minutes (ending now)"
    ),
    start: Optional[str] = typer.Option(None, "--start", help="Session start (ISO timestamp)"),
    end: Optional[str] = typer.Option(None, "--end", help="Session end (ISO timestamp)"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Optional notes"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Record a kick counting session."""

    try:
        if start:
            started_at = parse_datetime(start)
            completed_at = parse_datetime(end) if end else datetime.now(started_at.tzinfo)
        elif minutes is not None:
            completed_at = parse_datetime(end) if end else datetime.now()
            started_at = completed_at - timedelta(minutes=minutes)
        else:
            raise InvalidInput("Provide --minutes or --start")
        session = build_session(count, started_at, completed_at, notes)
    except InvalidInput as e:
        fail("kicks log", str(e), json_output)

    with get_db().get_connection() as conn:
        active = PregnancyQueries.get_active(conn)
        session = KickQueries.add_session(conn, session, active[0] if active else None)

    if json_output:
        print(create_response(
            "kicks log",
            data=kick_session_to_dict(session),
            human_summary=f"{session.count} kicks in {session.duration_minutes} min",
        ).to_json())
    else:
        console.print(
            f"[green]Saved:[/green] {session.count} kicks in {session.duration_minutes} min"
        )
        if not session.reached_target:
            console.print(
                f"[yellow]Fewer than {KICK_TARGET} kicks. "
                "Contact your care provider if movement seems reduced.[/yellow]"
            )


@kicks_app.command("list")
def kicks_list(
    limit: int = typer.Option(20, "--limit", "-l", help="Number of sessions to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List recent kick counter sessions."""
    with get_db().get_connection() as conn:
        sessions: list[KickSession] = KickQueries.list_sessions(conn, limit=limit)

    if json_output:
        print(create_response(
            "kicks list",
            data={"sessions": [kick_session_to_dict(s) for s in sessions]},
            human_summary=f"{len(sessions)} sessions",
        ).to_json())
        return

    if not sessions:
        console.print("No sessions recorded yet.")
        return

    table = Table(title="Kick Sessions")
    table.add_column("Started", style="cyan")
    table.add_column("Kicks", justify="right")
    table.add_column("Elapsed", justify="right")
    table.add_column("Notes", style="dim")
    for s in sessions:
        table.add_row(
            s.started_at.strftime("%Y-%m-%d %H:%M"),
            str(s.count),
            format_elapsed(int((s.completed_at - s.started_at).total_seconds())),
            s.notes or "",
        )
    console.print(table)


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the effective configuration."""
    import yaml

    data = get_settings().to_dict()
    if json_output:
        print(create_response("config show", data=data).to_json())
    else:
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
) -> None:
    """Write the current configuration to disk."""
    written = get_settings().save(path)
    console.print(f"[green]Wrote configuration to[/green] {written}")


if __name__ == "__main__":
    app()
