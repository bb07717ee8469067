"""
Module: progress

Purpose:
    Status roll-up from tasks to steps to phases.

Key Functions:
    - aggregate_tasks(), aggregate_step(), aggregate_phase()
    - summarize_roadmap(): Aggregates for every node of a snapshot

Used By:
    - export.renderer
    - cli
"""

from .aggregator import (
    aggregate_tasks,
    aggregate_step,
    aggregate_phase,
    summarize_phase,
    summarize_roadmap,
    StepSummary,
    PhaseSummary,
    RoadmapSummary,
)

__all__ = [
    "aggregate_tasks",
    "aggregate_step",
    "aggregate_phase",
    "summarize_phase",
    "summarize_roadmap",
    "StepSummary",
    "PhaseSummary",
    "RoadmapSummary",
]
