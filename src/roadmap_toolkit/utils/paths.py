"""
Default locations for the roadmap data file and the settings file.

Windows: %LOCALAPPDATA%/roadmap_toolkit
macOS:   ~/Library/Application Support/roadmap_toolkit
Linux:   $XDG_DATA_HOME/roadmap_toolkit (~/.local/share/roadmap_toolkit)

ROADMAP_TOOLKIT_HOME overrides all of the above.
"""
from __future__ import annotations

import os
import platform
from pathlib import Path

APP_DIR_NAME = "roadmap_toolkit"
DATA_FILENAME = "roadmap.json"
SETTINGS_FILENAME = "settings.json"


def get_app_data_dir() -> Path:
    """Directory holding the data and settings files (not created)."""
    override = os.environ.get("ROADMAP_TOOLKIT_HOME")
    if override:
        return Path(override)

    system = platform.system()
    if system == "Windows":
        base = os.environ.get("LOCALAPPDATA", os.environ.get("APPDATA"))
        return Path(base) / APP_DIR_NAME if base else Path.home() / f".{APP_DIR_NAME}"
    if system == "Darwin":
        return Path.home() / "Library/Application Support" / APP_DIR_NAME

    xdg = os.environ.get("XDG_DATA_HOME")
    base_dir = Path(xdg) if xdg else Path.home() / ".local/share"
    return base_dir / APP_DIR_NAME


def default_data_path() -> Path:
    return get_app_data_dir() / DATA_FILENAME


def default_settings_path() -> Path:
    return get_app_data_dir() / SETTINGS_FILENAME
