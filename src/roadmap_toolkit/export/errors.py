"""
Module: export.errors

Purpose:
    Exceptions raised by the export pipeline. Every error carries the
    offending dimension or collaborator name so callers can show a
    user-facing message.

Key Classes:
    - ExportError: Base class for export failures
    - GeometryError: Invalid or degenerate page/bitmap dimensions
    - MissingDependencyError: Rendering or encoding collaborator absent
"""

from __future__ import annotations

from typing import Any


class ExportError(Exception):
    """Error during export; no output file is produced."""
    pass


class GeometryError(ExportError, ValueError):
    """
    Page or bitmap dimensions cannot be paginated.

    Attributes:
        field: Name of the offending dimension, e.g. "width_px"
        value: The rejected value
    """

    def __init__(self, message: str, *, field: str, value: Any):
        super().__init__(message)
        self.field = field
        self.value = value


class MissingDependencyError(ExportError):
    """
    A required collaborator is not available.

    Attributes:
        dependency: Name of the missing renderer, encoder or library
    """

    def __init__(self, dependency: str, message: str | None = None):
        super().__init__(message or f"Required export dependency not available: {dependency}")
        self.dependency = dependency
