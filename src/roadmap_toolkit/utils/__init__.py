"""Shared utilities: logging setup and data paths."""

from .logging_utils import (
    configure_logging,
    reset_logging,
)
from .paths import get_app_data_dir, default_data_path, default_settings_path

__all__ = [
    "configure_logging",
    "reset_logging",
    "get_app_data_dir",
    "default_data_path",
    "default_settings_path",
]
