"""Unit tests for todo input schemas and validate_input."""

from __future__ import annotations

import pytest

from todo_service.application.todos import (
    AddTagInput,
    CreateTodoInput,
    PriorityLevel,
    SetPriorityInput,
    TodoStatus,
    UpdateTodoInput,
    validate_input,
)
from todo_service.kernel.types import ValidationFailure


def messages(failure: object) -> dict[str, str]:
    assert isinstance(failure, ValidationFailure)
    return {f.field: f.message for f in failure.fields}


class TestCreateTodoInput:
    def test_valid_input(self) -> None:
        result = validate_input(
            CreateTodoInput, {"title": "Buy milk", "description": "2 litres", "dueDate": "2026-02-01"}
        )
        assert isinstance(result, CreateTodoInput)
        assert result.title == "Buy milk"
        assert result.due_date == "2026-02-01"

    def test_title_too_short(self) -> None:
        result = validate_input(CreateTodoInput, {"title": "ab"})
        assert messages(result) == {"title": "Title must be at least 3 characters"}

    def test_title_boundaries(self) -> None:
        assert isinstance(validate_input(CreateTodoInput, {"title": "abc"}), CreateTodoInput)
        assert isinstance(validate_input(CreateTodoInput, {"title": "x" * 200}), CreateTodoInput)
        assert messages(validate_input(CreateTodoInput, {"title": "x" * 201})) == {
            "title": "Title must not exceed 200 characters"
        }

    def test_missing_title(self) -> None:
        result = validate_input(CreateTodoInput, {})
        assert messages(result).keys() == {"title"}

    def test_description_too_long(self) -> None:
        result = validate_input(CreateTodoInput, {"title": "Valid", "description": "d" * 1001})
        assert messages(result) == {"description": "Description must not exceed 1000 characters"}

    def test_bad_due_date(self) -> None:
        result = validate_input(CreateTodoInput, {"title": "Valid", "dueDate": "01/02/2026"})
        assert messages(result) == {"dueDate": "Must be YYYY-MM-DD format"}

    def test_one_error_per_invalid_field(self) -> None:
        result = validate_input(
            CreateTodoInput, {"title": "ab", "description": "d" * 1001, "dueDate": "tomorrow"}
        )
        assert isinstance(result, ValidationFailure)
        assert sorted(result.field_names()) == ["description", "dueDate", "title"]
        assert result.code == "VALIDATION_ERROR"

    def test_unknown_fields_ignored(self) -> None:
        assert isinstance(validate_input(CreateTodoInput, {"title": "Valid", "x": 1}), CreateTodoInput)


class TestUpdateTodoInput:
    def test_all_fields_optional(self) -> None:
        result = validate_input(UpdateTodoInput, {})
        assert isinstance(result, UpdateTodoInput)
        assert result.changes() == {}

    def test_changes_only_supplied_fields(self) -> None:
        result = validate_input(UpdateTodoInput, {"status": "IN_PROGRESS"})
        assert isinstance(result, UpdateTodoInput)
        assert result.changes() == {"status": TodoStatus.IN_PROGRESS}

    def test_invalid_status(self) -> None:
        result = validate_input(UpdateTodoInput, {"status": "DONE"})
        assert messages(result) == {
            "status": "Status must be one of: PENDING, IN_PROGRESS, COMPLETED, ARCHIVED"
        }

    def test_short_title_rejected(self) -> None:
        assert messages(validate_input(UpdateTodoInput, {"title": "x"})) == {
            "title": "Title must be at least 3 characters"
        }


class TestSetPriorityInput:
    @pytest.mark.parametrize("level", ["LOW", "MEDIUM", "HIGH", "URGENT"])
    def test_valid_levels(self, level: str) -> None:
        result = validate_input(SetPriorityInput, {"level": level})
        assert isinstance(result, SetPriorityInput)
        assert result.level is PriorityLevel(level)

    def test_invalid_level(self) -> None:
        assert messages(validate_input(SetPriorityInput, {"level": "CRITICAL"})) == {
            "level": "Priority must be one of: LOW, MEDIUM, HIGH, URGENT"
        }


class TestAddTagInput:
    def test_valid_tag(self) -> None:
        result = validate_input(AddTagInput, {"tagName": "home", "tagColor": "#1A2B3C"})
        assert isinstance(result, AddTagInput)
        assert (result.name, result.color) == ("home", "#1A2B3C")

    def test_invalid_color_and_empty_name(self) -> None:
        result = validate_input(AddTagInput, {"tagName": " ", "tagColor": "red"})
        assert messages(result) == {
            "tagName": "Tag name must not be empty",
            "tagColor": "Tag color must be a hex color like #1A2B3C",
        }
