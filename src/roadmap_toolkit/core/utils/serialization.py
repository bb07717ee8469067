"""
Serialization Utilities

To/from JSON for the roadmap document.

The wire format is the camelCase document written by earlier versions of
the tool::

    {"meta": {"createdAt", "updatedAt", "title"},
     "phases": [{"id", "title", "steps": [{"id", "title",
         "tasks": [{"id", "title", "status", "updatedAt"}]}]}],
     "activePhaseId": id | null}

Serialization is a structural passthrough: no derived values (aggregates)
are written, and unknown task statuses survive a load/save round-trip.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Union

from ..models.roadmap import Phase, Roadmap, RoadmapMeta, Step, Task
from ..models.status import Status
from ..schemas.validator import ValidationError, validate_roadmap

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Roadmap Serialization
# ─────────────────────────────────────────────────────────────────────────────

def serialize_roadmap(roadmap: Roadmap) -> dict[str, Any]:
    """
    Serialize a Roadmap to a JSON-ready dictionary.

    Args:
        roadmap: Roadmap to serialize

    Returns:
        Dictionary in the document wire format
    """
    return {
        "meta": {
            "createdAt": roadmap.meta.created_at,
            "updatedAt": roadmap.meta.updated_at,
            "title": roadmap.meta.title,
        },
        "phases": [_serialize_phase(p) for p in roadmap.phases],
        "activePhaseId": roadmap.active_phase_id,
    }


def _serialize_phase(phase: Phase) -> dict[str, Any]:
    return {
        "id": phase.id,
        "title": phase.title,
        "steps": [_serialize_step(s) for s in phase.steps],
    }


def _serialize_step(step: Step) -> dict[str, Any]:
    return {
        "id": step.id,
        "title": step.title,
        "tasks": [_serialize_task(t) for t in step.tasks],
    }


def _serialize_task(task: Task) -> dict[str, Any]:
    status = task.status.value if isinstance(task.status, Status) else task.status
    return {
        "id": task.id,
        "title": task.title,
        "status": status,
        "updatedAt": task.updated_at,
    }


def deserialize_roadmap(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> Roadmap:
    """
    Deserialize a Roadmap from a parsed JSON document.

    Missing optional fields fall back to defaults (empty titles, empty
    collections, ``not_started``).

    Args:
        data: Dictionary from JSON
        validate: Whether to run import validation first
        strict: Whether validation includes the full JSON Schema

    Returns:
        Roadmap instance

    Raises:
        ValidationError: If the document is malformed or has duplicate ids
    """
    if validate:
        validate_roadmap(data, strict=strict)

    meta_raw = data.get("meta")
    if not isinstance(meta_raw, dict):
        meta_raw = {}
    meta = RoadmapMeta(
        created_at=str(meta_raw.get("createdAt", "")),
        updated_at=str(meta_raw.get("updatedAt", "")),
        title=str(meta_raw.get("title", "")),
    )

    try:
        phases = tuple(
            _deserialize_phase(p, f"phases[{i}]")
            for i, p in enumerate(data.get("phases", []))
        )
        return Roadmap(
            phases=phases,
            active_phase_id=data.get("activePhaseId"),
            meta=meta,
        )
    except ValueError as e:
        raise ValidationError(str(e), path="phases") from e


def _deserialize_phase(data: Any, path: str) -> Phase:
    _require_mapping(data, path)
    steps = tuple(
        _deserialize_step(s, f"{path}.steps[{i}]")
        for i, s in enumerate(_list_field(data, "steps", path))
    )
    return Phase(id=str(data.get("id", "")), title=str(data.get("title", "")), steps=steps)


def _deserialize_step(data: Any, path: str) -> Step:
    _require_mapping(data, path)
    tasks = tuple(
        _deserialize_task(t, f"{path}.tasks[{i}]")
        for i, t in enumerate(_list_field(data, "tasks", path))
    )
    return Step(id=str(data.get("id", "")), title=str(data.get("title", "")), tasks=tasks)


def _deserialize_task(data: Any, path: str) -> Task:
    _require_mapping(data, path)
    return Task(
        id=str(data.get("id", "")),
        title=str(data.get("title", "")),
        status=_parse_status(data.get("status")),
        updated_at=str(data.get("updatedAt", "")),
    )


def _parse_status(raw: Any) -> Union[Status, str]:
    """Map a wire status to Status, keeping unknown values verbatim."""
    if raw is None:
        return Status.NOT_STARTED
    known = Status.coerce(raw)
    if known is not None:
        return known
    logger.debug(f"Keeping unrecognised task status {raw!r}")
    return str(raw)


def _require_mapping(data: Any, path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"{path} must be an object", path=path)


def _list_field(data: dict[str, Any], key: str, path: str) -> list[Any]:
    """Child collection under ``key``; missing or null means empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{path}.{key} must be an array", path=f"{path}.{key}")
    return value


# ─────────────────────────────────────────────────────────────────────────────
# File I/O
# ─────────────────────────────────────────────────────────────────────────────

def dumps_roadmap(roadmap: Roadmap) -> str:
    """Serialize a Roadmap to pretty-printed JSON text."""
    return json.dumps(serialize_roadmap(roadmap), indent=2, ensure_ascii=False)


def save_roadmap_json(roadmap: Roadmap, path: Path) -> Path:
    """
    Write a Roadmap to a JSON file atomically.

    The document is written to a temporary file in the target directory
    and renamed over ``path``, so readers never see a partial file.

    Args:
        roadmap: Roadmap to write
        path: Destination file

    Returns:
        The written path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        suffix=".json",
        dir=path.parent,
        delete=False,
    ) as f:
        f.write(dumps_roadmap(roadmap))
        temp_path = Path(f.name)

    temp_path.replace(path)
    logger.debug(f"Saved roadmap to {path}")
    return path


def load_roadmap_json(path: Path, *, strict: bool = False) -> Roadmap:
    """
    Load a Roadmap from a JSON file.

    Args:
        path: JSON file to read
        strict: Whether to validate against the full JSON Schema

    Returns:
        Roadmap instance

    Raises:
        FileNotFoundError: If path does not exist
        ValidationError: If the file is not valid JSON or not a roadmap
    """
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path.name}: {e}", path="") from e
    return deserialize_roadmap(data, strict=strict)
