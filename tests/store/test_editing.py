"""
Unit tests for the pure edit operations.
"""

import pytest

from roadmap_toolkit.core.models import Roadmap, Status
from roadmap_toolkit.store import editing

TS = "2026-01-02T03:04:05.000Z"


class TestDefaultRoadmap:

    def test_four_phases_first_active(self, ids, clock):
        roadmap = editing.default_roadmap(ids, clock)

        assert [p.title for p in roadmap.phases] == ["Phase 1", "Phase 2", "Phase 3", "Phase 4"]
        assert [p.id for p in roadmap.phases] == ["n-1", "n-2", "n-3", "n-4"]
        assert roadmap.active_phase_id == "n-1"
        assert roadmap.meta.title == "Program Status — Roadmap"
        assert roadmap.meta.created_at == roadmap.meta.updated_at == TS
        assert all(p.steps == () for p in roadmap.phases)


class TestPhaseOperations:

    def test_add_phase_appends_and_selects(self, sample_roadmap, ids):
        updated = editing.add_phase(sample_roadmap, "  Launch  ", ids)

        assert [p.title for p in updated.phases][-1] == "Launch"
        assert updated.active_phase_id == "n-1"
        # Original snapshot is untouched
        assert len(sample_roadmap.phases) == 2
        assert sample_roadmap.active_phase_id == "p1"

    @pytest.mark.parametrize("title", ["", "   ", None])
    def test_add_phase_when_blank_title_then_raises(self, sample_roadmap, ids, title):
        with pytest.raises(ValueError, match="blank"):
            editing.add_phase(sample_roadmap, title, ids)

    def test_rename_phase(self, sample_roadmap):
        updated = editing.rename_phase(sample_roadmap, "p2", "Rollout")
        assert updated.find_phase("p2").title == "Rollout"
        assert updated.find_phase("p1") == sample_roadmap.find_phase("p1")

    def test_rename_phase_when_unknown_then_key_error(self, sample_roadmap):
        with pytest.raises(KeyError, match="p9"):
            editing.rename_phase(sample_roadmap, "p9", "x")

    def test_delete_active_phase_selects_first_remaining(self, sample_roadmap):
        updated = editing.delete_phase(sample_roadmap, "p1")

        assert [p.id for p in updated.phases] == ["p2"]
        assert updated.active_phase_id == "p2"

    def test_delete_inactive_phase_keeps_selection(self, sample_roadmap):
        updated = editing.delete_phase(sample_roadmap, "p2")
        assert updated.active_phase_id == "p1"

    def test_delete_last_phase_clears_selection(self):
        from roadmap_toolkit.core.models import Phase

        roadmap = Roadmap(phases=(Phase("p1", "Only"),), active_phase_id="p1")
        updated = editing.delete_phase(roadmap, "p1")

        assert updated.phases == ()
        assert updated.active_phase_id is None

    def test_select_phase(self, sample_roadmap):
        assert editing.select_phase(sample_roadmap, "p2").active_phase_id == "p2"
        with pytest.raises(KeyError):
            editing.select_phase(sample_roadmap, "nope")


class TestStepOperations:

    def test_add_step(self, sample_roadmap, ids):
        updated = editing.add_step(sample_roadmap, "p2", "Plan", ids)

        steps = updated.find_phase("p2").steps
        assert [(s.id, s.title, s.tasks) for s in steps] == [("n-1", "Plan", ())]

    def test_rename_and_delete_step(self, sample_roadmap):
        renamed = editing.rename_step(sample_roadmap, "p1", "s2", "Implement")
        assert renamed.find_phase("p1").find_step("s2").title == "Implement"

        deleted = editing.delete_step(renamed, "p1", "s1")
        assert [s.id for s in deleted.find_phase("p1").steps] == ["s2"]

    def test_step_when_unknown_ids_then_key_error(self, sample_roadmap, ids):
        with pytest.raises(KeyError):
            editing.add_step(sample_roadmap, "p9", "x", ids)
        with pytest.raises(KeyError):
            editing.delete_step(sample_roadmap, "p1", "s9")


class TestTaskOperations:

    def test_add_task_starts_not_started(self, sample_roadmap, ids, clock):
        updated = editing.add_task(sample_roadmap, "p1", "s1", "Review", ids, clock)

        task = updated.find_phase("p1").find_step("s1").tasks[-1]
        assert (task.id, task.title, task.status, task.updated_at) == ("n-1", "Review", Status.NOT_STARTED, TS)

    def test_set_task_status_stamps_updated_at(self, sample_roadmap):
        def later():
            return "2026-02-01T00:00:00.000Z"

        updated = editing.set_task_status(sample_roadmap, "p1", "s2", "t4", "completed", later)

        task = updated.find_phase("p1").find_step("s2").find_task("t4")
        assert task.status is Status.COMPLETED
        assert task.updated_at == "2026-02-01T00:00:00.000Z"

    def test_set_task_status_when_unknown_status_then_value_error(self, sample_roadmap, clock):
        with pytest.raises(ValueError, match="Unknown status"):
            editing.set_task_status(sample_roadmap, "p1", "s1", "t1", "done", clock)

    def test_set_task_status_when_unknown_task_then_key_error(self, sample_roadmap, clock):
        with pytest.raises(KeyError, match="t9"):
            editing.set_task_status(sample_roadmap, "p1", "s1", "t9", Status.BLOCKED, clock)

    def test_rename_task(self, sample_roadmap, clock):
        updated = editing.rename_task(sample_roadmap, "p1", "s1", "t1", "Sketch UI", clock)
        assert updated.find_phase("p1").find_step("s1").find_task("t1").title == "Sketch UI"

    def test_rename_task_when_blank_then_value_error(self, sample_roadmap, clock):
        with pytest.raises(ValueError):
            editing.rename_task(sample_roadmap, "p1", "s1", "t1", "  ", clock)

    def test_delete_task(self, sample_roadmap):
        updated = editing.delete_task(sample_roadmap, "p1", "s1", "t1")
        assert [t.id for t in updated.find_phase("p1").find_step("s1").tasks] == ["t2"]
