"""
Core Models Package

Immutable data models for the roadmap tree and its derived values.

All models in this package are frozen dataclasses. Edits produce new
instances, so a snapshot handed to the aggregator or the exporter can
never change underneath it.
"""

from .status import Status, status_label, status_plain_label
from .roadmap import Task, Step, Phase, RoadmapMeta, Roadmap
from .aggregate import Aggregate

__all__ = [
    "Status",
    "status_label",
    "status_plain_label",
    "Task",
    "Step",
    "Phase",
    "RoadmapMeta",
    "Roadmap",
    "Aggregate",
]
