"""
Schema Validation Utilities

Validates roadmap documents before they replace the current tree.

Two levels:
- Basic (default): the document is a mapping and ``phases`` is a list.
  This is the import gate; anything else keeps the previous state.
- Strict: full JSON Schema check with ``jsonschema`` against
  ``roadmap.schema.json``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when a roadmap document fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_roadmap(data: Any, *, strict: bool = False) -> None:
    """
    Validate a roadmap document.

    Args:
        data: Parsed JSON document
        strict: If True, also validate against the JSON Schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(
            f"Roadmap document must be an object, got {type(data).__name__}",
            path="",
        )

    if "phases" not in data:
        raise ValidationError(
            "Missing required field: phases",
            path="phases",
            errors=["Missing field: phases"],
        )

    if not isinstance(data["phases"], list):
        raise ValidationError(
            f"phases must be a list, got {type(data['phases']).__name__}",
            path="phases",
        )

    if strict:
        schema = _load_schema("roadmap")
        validator = jsonschema.Draft7Validator(schema)
        errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
        if errors:
            first = errors[0]
            raise ValidationError(
                f"Schema validation failed: {first.message}",
                path=".".join(str(p) for p in first.absolute_path),
                errors=[e.message for e in errors],
            )
