"""Roadmap document schemas and validation."""

from .validator import ValidationError, validate_roadmap

__all__ = [
    "ValidationError",
    "validate_roadmap",
]
