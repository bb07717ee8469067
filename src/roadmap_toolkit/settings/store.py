"""
Settings persistence for display and export preferences.

Any malformed data results in a graceful fallback to defaults; loading
settings never raises.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Optional

from roadmap_toolkit.export.config import (
    DEFAULT_MARGIN_PT,
    DEFAULT_SCALE,
    PAGE_SIZES,
    ExportConfig,
)
from roadmap_toolkit.store.file_locking import locked_read_text, locked_write_text

from .theme import DEFAULT_THEME, THEMES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserSettings:
    theme: str = DEFAULT_THEME
    edit_mode: bool = False
    # Export defaults
    page_size: str = "letter"
    margin_pt: float = DEFAULT_MARGIN_PT
    scale: int = DEFAULT_SCALE

    def export_config(self) -> ExportConfig:
        """ExportConfig built from these preferences."""
        return ExportConfig(
            page_size=self.page_size,
            margin_pt=self.margin_pt,
            scale=self.scale,
            theme=self.theme,
        )


def _parse_settings(raw: Any) -> UserSettings:
    """Build UserSettings from raw JSON, dropping any field that is malformed."""
    defaults = UserSettings()
    if not isinstance(raw, dict):
        return defaults

    values: dict[str, Any] = {}

    theme = raw.get("theme")
    if isinstance(theme, str) and theme in THEMES:
        values["theme"] = theme
    elif theme is not None:
        logger.warning(f"Ignoring unknown theme {theme!r} in settings")

    edit_mode = raw.get("edit_mode")
    if isinstance(edit_mode, bool):
        values["edit_mode"] = edit_mode

    page_size = raw.get("page_size")
    if isinstance(page_size, str) and page_size in PAGE_SIZES:
        values["page_size"] = page_size

    margin = raw.get("margin_pt")
    if isinstance(margin, (int, float)) and not isinstance(margin, bool) and margin >= 0:
        values["margin_pt"] = margin

    scale = raw.get("scale")
    if isinstance(scale, int) and not isinstance(scale, bool) and scale >= 1:
        values["scale"] = scale

    return replace(defaults, **values)


class SettingsStore:
    """Lightweight JSON-backed store for persisting user preferences."""

    CURRENT_VERSION = 1

    def __init__(self, path: Path) -> None:
        self.path = path
        self.settings = UserSettings()
        self._load_error: Optional[str] = None
        self._load()

    @property
    def load_error(self) -> Optional[str]:
        """Reason the settings file could not be read, if any."""
        return self._load_error

    def _load(self) -> None:
        try:
            text = locked_read_text(self.path)
        except (OSError, UnicodeDecodeError) as e:
            self._load_error = f"Failed to read settings: {e}"
            logger.warning(self._load_error)
            return

        if text is None:
            return

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            self._load_error = f"Settings file is corrupted: {e}"
            logger.warning(f"{self._load_error}; using defaults")
            return

        self.settings = _parse_settings(raw)

    def save(self) -> None:
        data = {"version": self.CURRENT_VERSION, **asdict(self.settings)}
        locked_write_text(self.path, json.dumps(data, indent=2))
        self._load_error = None

    def update(self, **changes: Any) -> UserSettings:
        """
        Change one or more preferences and save.

        Raises:
            ValueError: If a theme or page size is unknown
        """
        theme = changes.get("theme")
        if theme is not None and theme not in THEMES:
            raise ValueError(f"Unknown theme {theme!r} (available: {', '.join(sorted(THEMES))})")
        page_size = changes.get("page_size")
        if page_size is not None and page_size not in PAGE_SIZES:
            raise ValueError(f"Unknown page size {page_size!r}")

        self.settings = replace(self.settings, **changes)
        self.save()
        return self.settings

    def get_theme(self) -> str:
        return self.settings.theme

    def set_theme(self, name: str) -> None:
        self.update(theme=name)

    def get_edit_mode(self) -> bool:
        return self.settings.edit_mode

    def set_edit_mode(self, enabled: bool) -> None:
        self.update(edit_mode=enabled)
