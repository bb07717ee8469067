"""
Module: progress.aggregator

Purpose:
    Roll task states up through steps and phases into a single
    (status, pct) Aggregate. Pure functions: no I/O, no mutation,
    safe to call repeatedly on the same snapshot.

Key Functions:
    - aggregate_tasks(): Count-weighted roll-up of a task sequence
    - aggregate_step(): Roll-up of one step's tasks
    - aggregate_phase(): Unweighted roll-up of a phase's steps
    - summarize_roadmap(): Aggregates for every phase and step

Algorithm:
    Tasks (first match wins):
    1. blocked      if any task is blocked
    2. completed    if every task is completed
    3. in_progress  if any task is in progress, or some but not all are completed
    4. not_started  otherwise
    pct = round(completed / total * 100)

    Phases (first match wins):
    1. blocked      if any step is blocked
    2. completed    if every step is completed
    3. in_progress  if any step is in_progress
    4. not_started  otherwise
    pct = round(mean(step pct)), each step weighted equally

    A completed step next to not-started steps leaves the phase
    not_started; only an in_progress step moves the phase along.

Dependencies:
    - core.models: Task, Step, Phase, Roadmap, Aggregate, Status

Used By:
    - export.renderer: Badges and progress bars
    - cli: status command
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from roadmap_toolkit.core.models import Aggregate, Phase, Roadmap, Status, Step, Task

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from zero for non-negative input."""
    return int(math.floor(value + 0.5))


def aggregate_tasks(tasks: Iterable[Task]) -> Aggregate:
    """
    Aggregate a task sequence into a status and percentage.

    Tasks whose status is not one of the four known values are left out
    of both the counts and the denominator.

    Args:
        tasks: Tasks of a single step

    Returns:
        Aggregate; (not_started, 0) when there are no countable tasks

    Example:
        >>> aggregate_tasks([])
        Aggregate(not_started, 0%)
    """
    counts: Counter[Status] = Counter()
    skipped = 0
    for task in tasks:
        status = task.known_status
        if status is None:
            skipped += 1
            continue
        counts[status] += 1

    if skipped:
        logger.warning(f"Ignored {skipped} task(s) with unrecognised status")

    total = sum(counts.values())
    if total == 0:
        return Aggregate.empty()

    completed = counts[Status.COMPLETED]

    if counts[Status.BLOCKED] > 0:
        status = Status.BLOCKED
    elif completed == total:
        status = Status.COMPLETED
    elif counts[Status.IN_PROGRESS] > 0 or 0 < completed < total:
        status = Status.IN_PROGRESS
    else:
        status = Status.NOT_STARTED

    pct = _round_half_up(completed / total * 100)
    return Aggregate(status=status, pct=pct)


def aggregate_step(step: Step) -> Aggregate:
    """Aggregate of a step's tasks."""
    return aggregate_tasks(step.tasks)


def aggregate_phase(phase: Phase) -> Aggregate:
    """
    Aggregate a phase from its steps.

    The percentage is the plain mean of step percentages, independent of
    how many tasks each step holds.

    Args:
        phase: Phase to aggregate

    Returns:
        Aggregate; (not_started, 0) when the phase has no steps
    """
    if not phase.steps:
        return Aggregate.empty()

    step_aggs = [aggregate_step(step) for step in phase.steps]
    return _combine_steps(step_aggs)


def _combine_steps(step_aggs: Sequence[Aggregate]) -> Aggregate:
    pct = _round_half_up(sum(a.pct for a in step_aggs) / len(step_aggs))

    if any(a.status is Status.BLOCKED for a in step_aggs):
        status = Status.BLOCKED
    elif all(a.status is Status.COMPLETED for a in step_aggs):
        status = Status.COMPLETED
    elif any(a.status is Status.IN_PROGRESS for a in step_aggs):
        status = Status.IN_PROGRESS
    else:
        status = Status.NOT_STARTED

    return Aggregate(status=status, pct=pct)


# ─────────────────────────────────────────────────────────────────────────────
# Whole-roadmap summary
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class StepSummary:
    """A step together with its aggregate."""
    step: Step
    aggregate: Aggregate


@dataclass(frozen=True)
class PhaseSummary:
    """A phase together with its aggregate and per-step aggregates."""
    phase: Phase
    aggregate: Aggregate
    steps: tuple[StepSummary, ...]


@dataclass(frozen=True)
class RoadmapSummary:
    """
    Aggregates for a whole roadmap snapshot, in tree order.

    Attributes:
        phases: One PhaseSummary per phase
        active_phase_id: Id of the resolved active phase, or None
    """
    phases: tuple[PhaseSummary, ...]
    active_phase_id: Optional[str]

    @property
    def active(self) -> Optional[PhaseSummary]:
        """Summary of the resolved active phase."""
        for summary in self.phases:
            if summary.phase.id == self.active_phase_id:
                return summary
        return None


def summarize_phase(phase: Phase) -> PhaseSummary:
    """Aggregate a phase and keep the per-step results."""
    steps = tuple(StepSummary(step, aggregate_step(step)) for step in phase.steps)
    if steps:
        aggregate = _combine_steps([s.aggregate for s in steps])
    else:
        aggregate = Aggregate.empty()
    return PhaseSummary(phase=phase, aggregate=aggregate, steps=steps)


def summarize_roadmap(roadmap: Roadmap) -> RoadmapSummary:
    """
    Aggregate every phase and step of a roadmap.

    Args:
        roadmap: Snapshot to summarise

    Returns:
        RoadmapSummary with the active phase already resolved
    """
    active = roadmap.resolve_active_phase()
    return RoadmapSummary(
        phases=tuple(summarize_phase(p) for p in roadmap.phases),
        active_phase_id=active.id if active is not None else None,
    )
