"""
Module: status

Purpose:
    Provides the Status enum shared by tasks, steps and phases, and the
    explicit status-to-label mapping used by the CLI and the renderer.

Key Functions:
    - Status.coerce(value): Map a wire value to a Status, or None
    - status_label(status): Display label with a trailing symbol
    - status_plain_label(status): ASCII label for raster text

Dependencies:
    - enum (std)

Used By:
    - core.models.roadmap
    - progress.aggregator
    - export.renderer
    - cli
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Status(str, Enum):
    """Completion state of a task, or the rolled-up state of a step/phase."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: object) -> Optional[Status]:
        """
        Map a raw value to a Status.

        Args:
            value: A Status, or a wire string like "in_progress"

        Returns:
            Matching Status, or None when the value is not recognised
        """
        if isinstance(value, Status):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


_LABELS: dict[Status, str] = {
    Status.NOT_STARTED: "Not Started •",
    Status.IN_PROGRESS: "In Progress ➜",
    Status.COMPLETED: "Completed ✓",
    Status.BLOCKED: "Blocked ✗",
}

_PLAIN_LABELS: dict[Status, str] = {
    Status.NOT_STARTED: "Not Started",
    Status.IN_PROGRESS: "In Progress",
    Status.COMPLETED: "Completed",
    Status.BLOCKED: "Blocked",
}

for _table in (_LABELS, _PLAIN_LABELS):
    _missing = [s.value for s in Status if s not in _table]
    if _missing:
        raise RuntimeError(f"Status labels missing for: {_missing}")
del _table, _missing


def status_label(status: Status) -> str:
    """Display label such as "Completed ✓"."""
    return _LABELS[Status(status)]


def status_plain_label(status: Status) -> str:
    """ASCII-only label such as "Completed"."""
    return _PLAIN_LABELS[Status(status)]
