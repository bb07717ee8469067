"""
Unit Tests for Core Models

Tests for Status, the tree models and Aggregate.
"""

import dataclasses
import pytest

from roadmap_toolkit.core.models import (
    Aggregate,
    Phase,
    Roadmap,
    Status,
    Step,
    Task,
    status_label,
    status_plain_label,
)


class TestStatus:
    """Tests for the Status enum and its labels."""

    def test_status_values_are_wire_strings(self):
        assert [s.value for s in Status] == ["not_started", "in_progress", "completed", "blocked"]
        assert Status.COMPLETED == "completed"
        assert str(Status.BLOCKED) == "blocked"

    @pytest.mark.parametrize("raw,expected", [
        ("completed", Status.COMPLETED),
        (Status.BLOCKED, Status.BLOCKED),
        ("done", None),
        (None, None),
        (3, None),
    ])
    def test_coerce(self, raw, expected):
        assert Status.coerce(raw) is expected

    def test_status_label_when_every_status_then_has_label(self):
        """Every status has both a display label and a plain label."""
        assert status_label(Status.NOT_STARTED) == "Not Started •"
        assert status_label(Status.IN_PROGRESS) == "In Progress ➜"
        assert status_label(Status.COMPLETED) == "Completed ✓"
        assert status_label(Status.BLOCKED) == "Blocked ✗"
        for status in Status:
            assert status_plain_label(status).isascii()


class TestTreeModels:
    """Tests for Task, Step, Phase and Roadmap."""

    def test_task_when_created_then_immutable(self):
        task = Task("t1", "Write docs")

        assert task.status is Status.NOT_STARTED
        with pytest.raises(dataclasses.FrozenInstanceError):
            task.title = "Other"  # type: ignore[misc]

    def test_step_when_duplicate_task_ids_then_raises(self):
        with pytest.raises(ValueError, match="Duplicate task id 't1'"):
            Step("s1", "Step", (Task("t1", "a"), Task("t1", "b")))

    def test_phase_when_duplicate_step_ids_then_raises(self):
        with pytest.raises(ValueError, match="Duplicate step id"):
            Phase("p1", "Phase", (Step("s1", "a"), Step("s1", "b")))

    def test_roadmap_when_duplicate_phase_ids_then_raises(self):
        with pytest.raises(ValueError, match="Duplicate phase id"):
            Roadmap(phases=(Phase("p1", "a"), Phase("p1", "b")))

    def test_ids_only_unique_within_parent(self):
        """The same task id may appear under different steps."""
        phase = Phase("p1", "Phase", (
            Step("s1", "a", (Task("t1", "x"),)),
            Step("s2", "b", (Task("t1", "y"),)),
        ))
        assert [t.title for t in phase.iter_tasks()] == ["x", "y"]

    def test_find_helpers(self, sample_roadmap):
        phase = sample_roadmap.find_phase("p1")

        assert phase is not None
        assert phase.find_step("s2").title == "Build"
        assert phase.find_step("s2").find_task("t4").status is Status.BLOCKED
        assert phase.find_step("missing") is None
        assert sample_roadmap.find_phase(None) is None
        assert sample_roadmap.task_count == 4

    def test_resolve_active_phase_when_id_valid_then_returns_it(self, sample_roadmap):
        roadmap = dataclasses.replace(sample_roadmap, active_phase_id="p2")
        assert roadmap.resolve_active_phase().id == "p2"

    def test_resolve_active_phase_when_id_dangling_then_first_phase(self, sample_roadmap):
        roadmap = dataclasses.replace(sample_roadmap, active_phase_id="deleted")
        assert roadmap.resolve_active_phase().id == "p1"

    def test_resolve_active_phase_when_no_phases_then_none(self):
        assert Roadmap(active_phase_id="p1").resolve_active_phase() is None


class TestAggregate:
    """Tests for the Aggregate value."""

    def test_empty_is_not_started_zero(self):
        assert Aggregate.empty() == Aggregate(Status.NOT_STARTED, 0)
        assert repr(Aggregate.empty()) == "Aggregate(not_started, 0%)"

    @pytest.mark.parametrize("pct", [-1, 101, 50.5])
    def test_aggregate_when_pct_invalid_then_raises(self, pct):
        with pytest.raises(ValueError, match="pct"):
            Aggregate(Status.IN_PROGRESS, pct)

    def test_aggregate_when_status_not_enum_then_raises(self):
        with pytest.raises(ValueError, match="status"):
            Aggregate("completed", 100)  # type: ignore[arg-type]
