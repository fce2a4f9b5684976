"""Parsing of raw strings and API records into typed values.

This is the only place where malformed input is rejected. The gestation
and schedule calculations downstream assume well-typed values and clamp
rather than raise.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml

if TYPE_CHECKING:
    from prenatal.schedule.models import IntakeLogEntry, ReminderDefinition

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

_INT_TAG = "tag:yaml.org,2002:int"

# YAML 1.1 integers without the base-60 form, so 20:00 is not read as 1200
_INT_RE = re.compile(
    r"""^(?:[-+]?0b[0-1_]+
    |[-+]?0[0-7_]+
    |[-+]?(?:0|[1-9][0-9_]*)
    |[-+]?0x[0-9a-fA-F_]+)$""",
    re.X,
)


class TimeOfDayLoader(yaml.SafeLoader):
    """SafeLoader that keeps unquoted ``HH:MM`` scalars as strings."""


TimeOfDayLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _INT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
TimeOfDayLoader.add_implicit_resolver(_INT_TAG, _INT_RE, list("-+0123456789"))


def load_yaml(stream: Any) -> Any:
    """Parse YAML like ``yaml.safe_load`` but leave times of day as text."""
    return yaml.load(stream, Loader=TimeOfDayLoader)


class InvalidInput(ValueError):
    """Raised when a raw value cannot be parsed into the expected type."""


def parse_date(value: Any) -> date:
    """Parse an ISO calendar date.

    Accepts ``YYYY-MM-DD`` strings, full ISO datetimes (the date part is
    kept), and ``date``/``datetime`` objects.

    Raises:
        InvalidInput: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"Expected a date (YYYY-MM-DD), got {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return parse_datetime(text).date()
    except InvalidInput:
        raise InvalidInput(f"Invalid date '{text}', expected YYYY-MM-DD") from None


def parse_datetime(value: Any) -> datetime:
    """Parse an ISO 8601 timestamp, including a trailing ``Z`` for UTC."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"Expected an ISO timestamp, got {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidInput(f"Invalid timestamp '{value}'") from None


def parse_time_of_day(value: Any) -> str:
    """Normalize a wall-clock time to zero-padded ``HH:MM``.

    Example:
        >>> parse_time_of_day("8:05")
        '08:05'
    """
    if not isinstance(value, str):
        raise InvalidInput(f"Expected a time of day (HH:MM), got {value!r}")

    match = _TIME_RE.match(value.strip())
    if match is None:
        raise InvalidInput(f"Invalid time '{value}', expected HH:MM")

    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidInput(f"Time out of range: '{value}'")
    return f"{hour:02d}:{minute:02d}"


def _require(data: dict, key: str, record: str) -> Any:
    if key not in data or data[key] is None:
        raise InvalidInput(f"{record} record is missing '{key}'")
    return data[key]


def reminder_from_dict(data: dict) -> "ReminderDefinition":
    """Build a ReminderDefinition from an API medication record.

    The backend uses camelCase keys (``timeOfDay``); snake_case keys are
    accepted as well so exported files can be hand edited.
    """
    from prenatal.schedule.models import FrequencyCode, ReminderDefinition

    if not isinstance(data, dict):
        raise InvalidInput(f"Reminder record must be a mapping, got {type(data).__name__}")

    times = data.get("timeOfDay", data.get("times_of_day"))
    if times is None:
        raise InvalidInput("Reminder record is missing 'timeOfDay'")
    if isinstance(times, str):
        times = [times]

    frequency = data.get("frequency", FrequencyCode.DAILY.value)
    try:
        frequency_code = FrequencyCode(str(frequency).upper())
    except ValueError:
        raise InvalidInput(f"Unknown frequency '{frequency}'") from None

    return ReminderDefinition(
        reminder_id=str(_require(data, "id", "Reminder")),
        name=str(_require(data, "name", "Reminder")),
        dosage=str(data.get("dosage", "")),
        frequency=frequency_code,
        times_of_day=[parse_time_of_day(t) for t in times],
    )


def intake_log_from_dict(data: dict, reminder_id: Optional[str] = None) -> "IntakeLogEntry":
    """Build an IntakeLogEntry from an API log record.

    Args:
        data: Log record (``reminderId``, ``scheduledFor``, ``taken``, ``notes``, ``id``)
        reminder_id: Owning reminder when the log is nested under one
    """
    from prenatal.schedule.models import IntakeLogEntry

    if not isinstance(data, dict):
        raise InvalidInput(f"Log record must be a mapping, got {type(data).__name__}")

    owner = data.get("reminderId", reminder_id)
    if owner is None:
        raise InvalidInput("Log record is missing 'reminderId'")

    log_id = data.get("id")
    return IntakeLogEntry(
        reminder_id=str(owner),
        scheduled_for=parse_datetime(_require(data, "scheduledFor", "Log")),
        taken=bool(data.get("taken", True)),
        notes=data.get("notes"),
        log_id=str(log_id) if log_id is not None else None,
    )


def load_records_file(path: Path) -> dict:
    """Load a backend payload exported to disk.

    The file holds ``dueDate`` and a ``medications`` list where each
    medication carries its own ``logs``. YAML and JSON are both accepted.

    Returns:
        Dict with ``due_date`` (date or None), ``reminders`` and ``logs``
    """
    try:
        with open(path) as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = load_yaml(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidInput(f"Could not parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise InvalidInput(f"{path} must contain a mapping at the top level")

    reminders = []
    logs = []
    for med in data.get("medications") or []:
        reminder = reminder_from_dict(med)
        reminders.append(reminder)
        for log in med.get("logs") or []:
            logs.append(intake_log_from_dict(log, reminder.reminder_id))

    due = data.get("dueDate", data.get("due_date"))
    logger.debug(
        "Loaded %d reminders and %d logs from %s", len(reminders), len(logs), path
    )
    return {
        "due_date": parse_date(due) if due else None,
        "reminders": reminders,
        "logs": logs,
    }
