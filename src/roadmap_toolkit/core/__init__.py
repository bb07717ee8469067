"""
Roadmap Toolkit Core Package

Shared data models, schema validation and serialization.

1. **Immutable Tree**
   - Task / Step / Phase / Roadmap are frozen dataclasses
   - Edit operations (store.editing) return new trees

2. **Derived Values Never Stored**
   - Step and phase status/percentage are always recomputed
     by progress.aggregator

3. **Wire Format Passthrough**
   - The JSON document keeps camelCase keys
   - Unrecognised task statuses survive a load/save round-trip
"""

from .models import (
    Status,
    Task,
    Step,
    Phase,
    RoadmapMeta,
    Roadmap,
    Aggregate,
)

__all__ = [
    "Status",
    "Task",
    "Step",
    "Phase",
    "RoadmapMeta",
    "Roadmap",
    "Aggregate",
]
