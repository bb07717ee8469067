"""
Unit Tests for Schema Validation

Tests for the roadmap document validator.
"""

import pytest

from roadmap_toolkit.core.schemas.validator import (
    validate_roadmap,
    ValidationError,
)


class TestValidateRoadmap:
    """Tests for validate_roadmap function."""

    @pytest.fixture
    def valid_document(self) -> dict:
        """Create a valid roadmap document for testing."""
        return {
            "meta": {
                "createdAt": "2026-01-02T03:04:05.000Z",
                "updatedAt": "2026-01-02T03:04:05.000Z",
                "title": "Program Status — Roadmap",
            },
            "phases": [
                {
                    "id": "p1",
                    "title": "Phase 1",
                    "steps": [
                        {
                            "id": "s1",
                            "title": "Design",
                            "tasks": [
                                {"id": "t1", "title": "Sketch", "status": "completed", "updatedAt": ""},
                            ],
                        }
                    ],
                }
            ],
            "activePhaseId": "p1",
        }

    def test_validate_when_valid_data_then_no_error(self, valid_document):
        """Valid document should pass both levels of validation."""
        validate_roadmap(valid_document, strict=False)
        validate_roadmap(valid_document, strict=True)

    def test_validate_when_phases_missing_then_raises_error(self, valid_document):
        del valid_document["phases"]

        with pytest.raises(ValidationError, match="Missing required field: phases") as exc_info:
            validate_roadmap(valid_document)
        assert exc_info.value.path == "phases"

    def test_validate_when_phases_not_list_then_raises_error(self, valid_document):
        valid_document["phases"] = {"p1": {}}

        with pytest.raises(ValidationError, match="phases must be a list"):
            validate_roadmap(valid_document)

    def test_validate_when_not_object_then_raises_error(self):
        with pytest.raises(ValidationError, match="must be an object"):
            validate_roadmap([1, 2, 3])

    def test_validate_when_empty_phases_then_accepted(self):
        validate_roadmap({"phases": []})

    def test_validate_strict_when_status_unknown_then_raises(self, valid_document):
        """Strict mode only accepts the four status values."""
        valid_document["phases"][0]["steps"][0]["tasks"][0]["status"] = "on_hold"

        validate_roadmap(valid_document, strict=False)
        with pytest.raises(ValidationError, match="Schema validation failed") as exc_info:
            validate_roadmap(valid_document, strict=True)
        assert exc_info.value.errors

    def test_validate_strict_when_task_id_wrong_type_then_raises(self, valid_document):
        valid_document["phases"][0]["steps"][0]["tasks"][0]["id"] = 42

        with pytest.raises(ValidationError) as exc_info:
            validate_roadmap(valid_document, strict=True)
        assert "tasks" in exc_info.value.path
