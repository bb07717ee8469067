"""
Tests for logging and path utilities.
"""

import logging
from pathlib import Path

from roadmap_toolkit.utils import (
    configure_logging,
    reset_logging,
    default_data_path,
    default_settings_path,
    get_app_data_dir,
)


def test_app_data_dir_override(monkeypatch, tmp_path):
    monkeypatch.setenv("ROADMAP_TOOLKIT_HOME", str(tmp_path))

    assert get_app_data_dir() == tmp_path
    assert default_data_path() == tmp_path / "roadmap.json"
    assert default_settings_path() == tmp_path / "settings.json"


def test_app_data_dir_linux_xdg(monkeypatch, tmp_path):
    monkeypatch.delenv("ROADMAP_TOOLKIT_HOME", raising=False)
    monkeypatch.setattr("platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    assert get_app_data_dir() == Path(tmp_path) / "roadmap_toolkit"


def test_configure_logging_replaces_previous_handler():
    package_logger = logging.getLogger("roadmap_toolkit")
    try:
        first = configure_logging(verbose=True)
        second = configure_logging(verbose=False)

        assert first not in package_logger.handlers
        assert second in package_logger.handlers
        assert package_logger.level == logging.WARNING
    finally:
        reset_logging()

    assert second not in package_logger.handlers
    assert package_logger.level == logging.NOTSET
