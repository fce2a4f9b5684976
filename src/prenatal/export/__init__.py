"""Output formatting and JSON response envelopes."""

from prenatal.export.formatters import (
    format_progress,
    format_schedule,
    progress_to_dict,
    schedule_to_dict,
)
from prenatal.export.response import CommandResponse, create_response, error_response

__all__ = [
    "CommandResponse",
    "create_response",
    "error_response",
    "format_progress",
    "format_schedule",
    "progress_to_dict",
    "schedule_to_dict",
]
