"""JSON envelope printed by every ``--json`` command.

Each command prints exactly one envelope on stdout. Failures use the same
shape with ``success`` false, so a script reading ``prenatal take ...
--json`` never has to scrape the human-readable error text.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Optional

ENVELOPE_VERSION = "1.0"


@dataclass
class CommandResponse:
    """Outcome of one CLI command.

    ``data`` holds the command's payload (progress snapshot, schedule,
    reminder, kick session). ``suggestions`` are follow-up commands to
    run, such as ``prenatal pregnancy set --due YYYY-MM-DD`` when no
    pregnancy is tracked yet.
    """

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["generated_at"] = datetime.now().isoformat(timespec="seconds")
        payload["envelope_version"] = ENVELOPE_VERSION
        return payload

    def to_json(self, indent: int = 2) -> str:
        # Keeps emoji (baby size icons) readable
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def create_response(
    command: str,
    data: Optional[dict[str, Any]] = None,
    warnings: Optional[list[str]] = None,
    suggestions: Optional[list[str]] = None,
    human_summary: str = "",
) -> CommandResponse:
    """Wrap a command's result in a successful envelope."""
    return CommandResponse(
        success=True,
        command=command,
        data=data or {},
        warnings=warnings or [],
        suggestions=suggestions or [],
        human_summary=human_summary,
    )


def error_response(
    command: str,
    error: str,
    suggestions: Optional[list[str]] = None,
) -> CommandResponse:
    """Envelope for a command that stopped on bad input or missing data."""
    return CommandResponse(
        success=False,
        command=command,
        errors=[error],
        suggestions=suggestions or [],
        human_summary=f"Error: {error}",
    )
