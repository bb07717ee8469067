"""
Module: roadmap

Purpose:
    Immutable tree models for the phase → step → task hierarchy.
    Edits never mutate a node; they build a new one with
    dataclasses.replace() (see store.editing).

Key Classes:
    - Task: Leaf work item carrying a status
    - Step: Ordered group of tasks
    - Phase: Ordered group of steps
    - RoadmapMeta: Document title and timestamps
    - Roadmap: Root document with the active phase reference

Dependencies:
    - dataclasses (std)
    - .status.Status

Used By:
    - core.utils.serialization
    - progress.aggregator
    - store.editing, store.context
    - export.renderer
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union

from .status import Status


@dataclass(frozen=True, slots=True)
class Task:
    """
    Leaf work item.

    ``status`` holds a Status for recognised values. Unrecognised wire
    strings are kept verbatim so that import/export stays a passthrough;
    the aggregator excludes them from counts.

    Attributes:
        id: Identifier, unique within the owning step
        title: Display title
        status: Status, or the raw string when not recognised
        updated_at: ISO-8601 timestamp of the last change
    """

    id: str
    title: str
    status: Union[Status, str] = Status.NOT_STARTED
    updated_at: str = ""

    @property
    def known_status(self) -> Optional[Status]:
        """The Status for this task, or None if the stored value is unrecognised."""
        return Status.coerce(self.status)


def _check_unique(kind: str, owner: str, ids: list[str]) -> None:
    seen: set[str] = set()
    for item_id in ids:
        if item_id in seen:
            raise ValueError(f"Duplicate {kind} id {item_id!r} in {owner}")
        seen.add(item_id)


@dataclass(frozen=True, slots=True)
class Step:
    """
    Ordered group of tasks inside a phase.

    Invariants:
        - Task ids are unique within the step
    """

    id: str
    title: str
    tasks: Tuple[Task, ...] = ()

    def __post_init__(self) -> None:
        """Validate task id uniqueness."""
        _check_unique("task", f"step {self.id!r}", [t.id for t in self.tasks])

    def find_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None


@dataclass(frozen=True, slots=True)
class Phase:
    """
    Top-level group of steps.

    Invariants:
        - Step ids are unique within the phase
    """

    id: str
    title: str
    steps: Tuple[Step, ...] = ()

    def __post_init__(self) -> None:
        """Validate step id uniqueness."""
        _check_unique("step", f"phase {self.id!r}", [s.id for s in self.steps])

    def find_step(self, step_id: str) -> Optional[Step]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def iter_tasks(self) -> Iterator[Task]:
        """Iterate over every task in step order."""
        for step in self.steps:
            yield from step.tasks


@dataclass(frozen=True, slots=True)
class RoadmapMeta:
    """Document-level metadata."""

    created_at: str = ""
    updated_at: str = ""
    title: str = ""


@dataclass(frozen=True, slots=True)
class Roadmap:
    """
    Root of the completion tree.

    ``active_phase_id`` may briefly point at a phase that no longer
    exists; callers resolve it with :meth:`resolve_active_phase`.

    Attributes:
        phases: Ordered phases
        active_phase_id: Id of the selected phase, or None
        meta: Title and timestamps

    Example:
        >>> roadmap = Roadmap(phases=(Phase("p1", "Phase 1"),))
        >>> roadmap.resolve_active_phase().id
        'p1'
    """

    phases: Tuple[Phase, ...] = ()
    active_phase_id: Optional[str] = None
    meta: RoadmapMeta = field(default_factory=RoadmapMeta)

    def __post_init__(self) -> None:
        """Validate phase id uniqueness."""
        _check_unique("phase", "roadmap", [p.id for p in self.phases])

    def find_phase(self, phase_id: Optional[str]) -> Optional[Phase]:
        if phase_id is None:
            return None
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def resolve_active_phase(self) -> Optional[Phase]:
        """
        Get the active phase, falling back to the first phase.

        Returns:
            The phase named by active_phase_id if it exists, else the
            first phase, else None for an empty roadmap
        """
        active = self.find_phase(self.active_phase_id)
        if active is not None:
            return active
        return self.phases[0] if self.phases else None

    @property
    def task_count(self) -> int:
        """Total number of tasks across all phases."""
        return sum(1 for phase in self.phases for _ in phase.iter_tasks())
