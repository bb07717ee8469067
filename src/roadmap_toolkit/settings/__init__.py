"""User preferences: themes and the settings file."""

from .theme import Theme, THEMES, DEFAULT_THEME, get_theme
from .store import UserSettings, SettingsStore

__all__ = [
    "Theme",
    "THEMES",
    "DEFAULT_THEME",
    "get_theme",
    "UserSettings",
    "SettingsStore",
]
