import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import roadmap_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from roadmap_toolkit.core.models import Phase, Roadmap, RoadmapMeta, Status, Step, Task
from roadmap_toolkit.core.utils import CounterIdGenerator, fixed_clock


FIXED_TS = "2026-01-02T03:04:05.000Z"


# Common test fixtures
@pytest.fixture
def ids():
    """Deterministic id generator producing n-1, n-2, ..."""
    return CounterIdGenerator("n")


@pytest.fixture
def clock():
    """Clock frozen at FIXED_TS."""
    return fixed_clock(FIXED_TS)


def make_task(task_id: str, status=Status.NOT_STARTED, title: str = "") -> Task:
    return Task(id=task_id, title=title or f"Task {task_id}", status=status, updated_at=FIXED_TS)


@pytest.fixture
def sample_roadmap() -> Roadmap:
    """
    Two phases; the first has a finished step and a blocked step.

    p1: s1 = [completed, completed]        -> (completed, 100)
        s2 = [in_progress, blocked]        -> (blocked, 0)
    p2: no steps                           -> (not_started, 0)
    """
    s1 = Step("s1", "Design", (
        make_task("t1", Status.COMPLETED),
        make_task("t2", Status.COMPLETED),
    ))
    s2 = Step("s2", "Build", (
        make_task("t3", Status.IN_PROGRESS),
        make_task("t4", Status.BLOCKED),
    ))
    return Roadmap(
        phases=(Phase("p1", "Phase 1", (s1, s2)), Phase("p2", "Phase 2")),
        active_phase_id="p1",
        meta=RoadmapMeta(created_at=FIXED_TS, updated_at=FIXED_TS, title="Sample Roadmap"),
    )


@pytest.fixture
def tall_roadmap() -> Roadmap:
    """Enough steps and tasks that the rendered view spans several pages."""
    steps = tuple(
        Step(f"s{i}", f"Step {i}", tuple(
            make_task(f"t{i}-{j}", Status.COMPLETED if j % 2 else Status.NOT_STARTED)
            for j in range(6)
        ))
        for i in range(12)
    )
    return Roadmap(
        phases=(Phase("p1", "Long Phase", steps),),
        active_phase_id="p1",
        meta=RoadmapMeta(title="Tall Roadmap"),
    )
