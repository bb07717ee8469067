"""
Module: store

Purpose:
    Persistence and editing of the roadmap tree.

Key Classes:
    - AppContext: Current snapshot plus collaborators
    - RoadmapRepository, JsonFileRepository, InMemoryRepository
    - RoadmapNotFound

Key Functions:
    - Edit operations (add_phase, set_task_status, ...)
    - default_roadmap
"""

from .repository import (
    RoadmapNotFound,
    RoadmapRepository,
    JsonFileRepository,
    InMemoryRepository,
)
from .editing import (
    default_roadmap,
    add_phase,
    rename_phase,
    delete_phase,
    select_phase,
    add_step,
    rename_step,
    delete_step,
    add_task,
    rename_task,
    delete_task,
    set_task_status,
)
from .context import AppContext

__all__ = [
    "RoadmapNotFound",
    "RoadmapRepository",
    "JsonFileRepository",
    "InMemoryRepository",
    "default_roadmap",
    "add_phase",
    "rename_phase",
    "delete_phase",
    "select_phase",
    "add_step",
    "rename_step",
    "delete_step",
    "add_task",
    "rename_task",
    "delete_task",
    "set_task_status",
    "AppContext",
]
