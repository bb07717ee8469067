"""
Module: store.editing

Purpose:
    Pure edit operations on the roadmap tree. Each operation takes a
    Roadmap and returns a new one built with dataclasses.replace(); the
    input is never modified.

Key Functions:
    - add_phase / rename_phase / delete_phase / select_phase
    - add_step / rename_step / delete_step
    - add_task / rename_task / delete_task / set_task_status
    - default_roadmap: Starting document for an empty store

Conventions:
    - Titles are stripped; a blank title raises ValueError
    - An unknown phase, step or task id raises KeyError
    - Operations that create ids take an IdGenerator
    - Operations that touch a task take a Clock for updated_at

Used By:
    - store.context: AppContext.apply()
    - cli
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Union

from roadmap_toolkit.core.models import Phase, Roadmap, RoadmapMeta, Status, Step, Task
from roadmap_toolkit.core.utils.clock import Clock
from roadmap_toolkit.core.utils.ids import IdGenerator

DEFAULT_TITLE = "Program Status — Roadmap"
DEFAULT_PHASE_COUNT = 4


def default_roadmap(ids: IdGenerator, clock: Clock) -> Roadmap:
    """
    Starting roadmap: four empty phases with the first one active.

    Example:
        >>> roadmap = default_roadmap(CounterIdGenerator("p"), fixed_clock("t0"))
        >>> [p.title for p in roadmap.phases]
        ['Phase 1', 'Phase 2', 'Phase 3', 'Phase 4']
    """
    now = clock()
    phases = tuple(
        Phase(id=ids.new_id(), title=f"Phase {n}")
        for n in range(1, DEFAULT_PHASE_COUNT + 1)
    )
    return Roadmap(
        phases=phases,
        active_phase_id=phases[0].id,
        meta=RoadmapMeta(created_at=now, updated_at=now, title=DEFAULT_TITLE),
    )


def _clean_title(title: str) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValueError("Title must not be blank")
    return cleaned


def _phase_index(roadmap: Roadmap, phase_id: str) -> int:
    for i, phase in enumerate(roadmap.phases):
        if phase.id == phase_id:
            return i
    raise KeyError(f"Unknown phase {phase_id!r}")


def _step_index(phase: Phase, step_id: str) -> int:
    for i, step in enumerate(phase.steps):
        if step.id == step_id:
            return i
    raise KeyError(f"Unknown step {step_id!r} in phase {phase.id!r}")


def _task_index(step: Step, task_id: str) -> int:
    for i, task in enumerate(step.tasks):
        if task.id == task_id:
            return i
    raise KeyError(f"Unknown task {task_id!r} in step {step.id!r}")


def _with_phase(roadmap: Roadmap, phase_id: str, edit: Callable[[Phase], Phase]) -> Roadmap:
    index = _phase_index(roadmap, phase_id)
    phases = list(roadmap.phases)
    phases[index] = edit(phases[index])
    return replace(roadmap, phases=tuple(phases))


def _with_step(
    roadmap: Roadmap,
    phase_id: str,
    step_id: str,
    edit: Callable[[Step], Step],
) -> Roadmap:
    def edit_phase(phase: Phase) -> Phase:
        index = _step_index(phase, step_id)
        steps = list(phase.steps)
        steps[index] = edit(steps[index])
        return replace(phase, steps=tuple(steps))

    return _with_phase(roadmap, phase_id, edit_phase)


def _with_task(
    roadmap: Roadmap,
    phase_id: str,
    step_id: str,
    task_id: str,
    edit: Callable[[Task], Task],
) -> Roadmap:
    def edit_step(step: Step) -> Step:
        index = _task_index(step, task_id)
        tasks = list(step.tasks)
        tasks[index] = edit(tasks[index])
        return replace(step, tasks=tuple(tasks))

    return _with_step(roadmap, phase_id, step_id, edit_step)


# -----------------------------------------------------------------------------
# Phases
# -----------------------------------------------------------------------------

def add_phase(roadmap: Roadmap, title: str, ids: IdGenerator) -> Roadmap:
    """Append a phase and make it the active one."""
    phase = Phase(id=ids.new_id(), title=_clean_title(title))
    return replace(roadmap, phases=roadmap.phases + (phase,), active_phase_id=phase.id)


def rename_phase(roadmap: Roadmap, phase_id: str, title: str) -> Roadmap:
    cleaned = _clean_title(title)
    return _with_phase(roadmap, phase_id, lambda p: replace(p, title=cleaned))


def delete_phase(roadmap: Roadmap, phase_id: str) -> Roadmap:
    """
    Remove a phase and everything under it.

    Deleting the active phase moves the selection to the first remaining
    phase (or None when no phases remain).
    """
    index = _phase_index(roadmap, phase_id)
    phases = roadmap.phases[:index] + roadmap.phases[index + 1:]

    active_id = roadmap.active_phase_id
    if active_id == phase_id:
        active_id = phases[0].id if phases else None

    return replace(roadmap, phases=phases, active_phase_id=active_id)


def select_phase(roadmap: Roadmap, phase_id: str) -> Roadmap:
    _phase_index(roadmap, phase_id)
    return replace(roadmap, active_phase_id=phase_id)


# -----------------------------------------------------------------------------
# Steps
# -----------------------------------------------------------------------------

def add_step(roadmap: Roadmap, phase_id: str, title: str, ids: IdGenerator) -> Roadmap:
    step = Step(id=ids.new_id(), title=_clean_title(title))
    return _with_phase(roadmap, phase_id, lambda p: replace(p, steps=p.steps + (step,)))


def rename_step(roadmap: Roadmap, phase_id: str, step_id: str, title: str) -> Roadmap:
    cleaned = _clean_title(title)
    return _with_step(roadmap, phase_id, step_id, lambda s: replace(s, title=cleaned))


def delete_step(roadmap: Roadmap, phase_id: str, step_id: str) -> Roadmap:
    def edit_phase(phase: Phase) -> Phase:
        index = _step_index(phase, step_id)
        return replace(phase, steps=phase.steps[:index] + phase.steps[index + 1:])

    return _with_phase(roadmap, phase_id, edit_phase)


# -----------------------------------------------------------------------------
# Tasks
# -----------------------------------------------------------------------------

def add_task(
    roadmap: Roadmap,
    phase_id: str,
    step_id: str,
    title: str,
    ids: IdGenerator,
    clock: Clock,
) -> Roadmap:
    """Append a not-started task to a step."""
    task = Task(
        id=ids.new_id(),
        title=_clean_title(title),
        status=Status.NOT_STARTED,
        updated_at=clock(),
    )
    return _with_step(roadmap, phase_id, step_id, lambda s: replace(s, tasks=s.tasks + (task,)))


def rename_task(
    roadmap: Roadmap,
    phase_id: str,
    step_id: str,
    task_id: str,
    title: str,
    clock: Clock,
) -> Roadmap:
    cleaned = _clean_title(title)
    return _with_task(
        roadmap, phase_id, step_id, task_id,
        lambda t: replace(t, title=cleaned, updated_at=clock()),
    )


def delete_task(roadmap: Roadmap, phase_id: str, step_id: str, task_id: str) -> Roadmap:
    def edit_step(step: Step) -> Step:
        index = _task_index(step, task_id)
        return replace(step, tasks=step.tasks[:index] + step.tasks[index + 1:])

    return _with_step(roadmap, phase_id, step_id, edit_step)


def set_task_status(
    roadmap: Roadmap,
    phase_id: str,
    step_id: str,
    task_id: str,
    status: Union[Status, str],
    clock: Clock,
) -> Roadmap:
    """
    Change a task's status.

    Raises:
        ValueError: If status is not one of the four status values
        KeyError: If any id is unknown
    """
    known = Status.coerce(status)
    if known is None:
        allowed = ", ".join(s.value for s in Status)
        raise ValueError(f"Unknown status {status!r} (expected one of: {allowed})")

    return _with_task(
        roadmap, phase_id, step_id, task_id,
        lambda t: replace(t, status=known, updated_at=clock()),
    )
