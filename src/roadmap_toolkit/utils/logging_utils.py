"""
Console logging setup for the command line.
"""
from __future__ import annotations

import logging
from typing import Optional

PACKAGE_LOGGER = "roadmap_toolkit"

_console_handler: Optional[logging.Handler] = None


def configure_logging(verbose: bool = False) -> logging.Handler:
    """
    Configure console logging for the CLI.

    Replaces any handler installed by a previous call, so repeated calls
    (e.g. several main() invocations in one process) never duplicate output.

    Args:
        verbose: Show DEBUG messages from roadmap_toolkit when True,
            otherwise only warnings and errors.

    Returns:
        The installed console handler.
    """
    global _console_handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _console_handler is not None:
        logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler()
    _console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(_console_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return _console_handler


def reset_logging() -> None:
    """Remove the console handler installed by configure_logging()."""
    global _console_handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _console_handler is not None:
        logger.removeHandler(_console_handler)
        _console_handler = None
    logger.setLevel(logging.NOTSET)
