"""
Theme definitions for rendered roadmap snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass

from roadmap_toolkit.core.models import Status


DEFAULT_THEME = "azure"


@dataclass(frozen=True)
class Theme:
    name: str

    # Backgrounds
    background: str
    surface: str
    surface_active: str

    # Text
    text_primary: str
    text_secondary: str

    # Borders & Dividers
    border: str
    divider: str

    # Progress bars
    bar_track: str
    bar_fill: str

    # Status
    not_started: str
    in_progress: str
    completed: str
    blocked: str

    def status_color(self, status: Status) -> str:
        """Badge color for a status."""
        if status is Status.NOT_STARTED:
            return self.not_started
        if status is Status.IN_PROGRESS:
            return self.in_progress
        if status is Status.COMPLETED:
            return self.completed
        if status is Status.BLOCKED:
            return self.blocked
        raise ValueError(f"No color for status {status!r}")


THEMES: dict[str, Theme] = {
    "azure": Theme(
        name="azure",
        background="#0b1220",
        surface="#111a2e",
        surface_active="#1a2a4a",
        text_primary="#e6edf7",
        text_secondary="#8b9bb4",
        border="#23314f",
        divider="#1c2740",
        bar_track="#1c2740",
        bar_fill="#28A8EA",
        not_started="#5c6b82",
        in_progress="#1976d2",
        completed="#388e3c",
        blocked="#d32f2f",
    ),
    "midnight": Theme(
        name="midnight",
        background="#0d0d12",
        surface="#17171f",
        surface_active="#252533",
        text_primary="#f0f0f5",
        text_secondary="#9a9ab0",
        border="#30363D",
        divider="#23232e",
        bar_track="#23232e",
        bar_fill="#9c6ade",
        not_started="#616170",
        in_progress="#7c4dff",
        completed="#2e7d32",
        blocked="#c62828",
    ),
    "paper": Theme(
        name="paper",
        background="#f5f5f5",
        surface="#ffffff",
        surface_active="#F0F9FF",
        text_primary="#1f1f1f",
        text_secondary="#666666",
        border="#e0e0e0",
        divider="#eeeeee",
        bar_track="#e0e0e0",
        bar_fill="#0364B8",
        not_started="#757575",
        in_progress="#f57c00",
        completed="#388e3c",
        blocked="#d32f2f",
    ),
}


def get_theme(name: str) -> Theme:
    """
    Look up a theme by name.

    Raises:
        KeyError: If the theme does not exist
    """
    try:
        return THEMES[name]
    except KeyError:
        raise KeyError(f"Unknown theme {name!r} (available: {', '.join(sorted(THEMES))})") from None
