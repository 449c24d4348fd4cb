"""Tests for the tutorial content stores."""

from __future__ import annotations

import pytest

from combat_tracker.core.exceptions import NotFoundError, ValidationError
from combat_tracker.storage import TutorialStore


class TestTutorialStore:
    """CRUD over versioned tutorial steps, for both backends."""

    def test_create_and_list_in_step_order(self, tutorial_store: TutorialStore) -> None:
        """Steps list by step_id regardless of insertion order."""
        tutorial_store.create({"stepId": 2, "title": "Running Combat"})
        tutorial_store.create({"stepId": 0, "title": "Welcome", "content": {"intro": "Hi"}})

        steps = tutorial_store.list_all()

        assert [s.title for s in steps] == ["Welcome", "Running Combat"]
        assert steps[0].content == {"intro": "Hi"}
        assert all(s.version == 1 for s in steps)

    def test_update_bumps_version(self, tutorial_store: TutorialStore) -> None:
        """Each update increments the version and keeps other fields."""
        step = tutorial_store.create({"stepId": 0, "title": "Welcome", "description": "d"})

        updated = tutorial_store.update(step.id, {"content": {"bullets": ["a", "b"]}})
        updated = tutorial_store.update(step.id, {"title": "Hello"})

        assert updated.version == 3
        assert updated.title == "Hello"
        assert updated.description == "d"
        assert updated.content == {"bullets": ["a", "b"]}
        assert tutorial_store.get(step.id) == updated

    def test_invalid_input(self, tutorial_store: TutorialStore) -> None:
        """Missing title and empty updates are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            tutorial_store.create({"stepId": 0})
        assert exc_info.value.field_name == "title"

        step = tutorial_store.create({"stepId": 0, "title": "Welcome"})
        with pytest.raises(ValidationError):
            tutorial_store.update(step.id, {})

    def test_missing_ids(self, tutorial_store: TutorialStore) -> None:
        """Absent ids are NotFoundError for get, update and delete."""
        with pytest.raises(NotFoundError):
            tutorial_store.get(5)
        with pytest.raises(NotFoundError):
            tutorial_store.update(5, {"title": "x"})
        with pytest.raises(NotFoundError):
            tutorial_store.delete(5)

    def test_delete(self, tutorial_store: TutorialStore) -> None:
        """Deleted steps disappear from the list."""
        step = tutorial_store.create({"stepId": 0, "title": "Welcome"})

        tutorial_store.delete(step.id)

        assert tutorial_store.list_all() == []
