"""Unit tests for TodoService business operations."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from structlog.testing import capture_logs

from todo_service.application.todos import (
    PriorityLevel,
    TodoService,
    TodoStatus,
    technical_code,
)
from todo_service.kernel.errors import (
    FailureKind,
    InfrastructureTimeoutError,
    PersistenceError,
    TechnicalFailure,
)
from todo_service.kernel.types import NotFound, Success, ValidationFailure
from todo_service.observability.correlation import CorrelationContext, RequestContext
from todo_service.resilience import CircuitOpenError
from todo_service.testing.fakes import FakeClock, InMemoryTodoRepository, RecordingEventSink

MISSING = "00000000-0000-0000-0000-000000000000"


class Harness:
    def __init__(self) -> None:
        self.repository = InMemoryTodoRepository()
        self.events = RecordingEventSink()
        self.clock = FakeClock()
        self.service = TodoService(self.repository, self.events, self.clock)

    def run(self, coro: Any) -> Any:
        return asyncio.run(coro)

    def create(self, title: str = "Write report") -> str:
        outcome = self.run(self.service.create({"title": title}))
        assert isinstance(outcome, Success)
        return outcome.value.id


@pytest.fixture()
def h() -> Harness:
    return Harness()


class TestCreate:
    def test_creates_pending_todo_with_equal_timestamps(self, h: Harness) -> None:
        outcome = h.run(h.service.create({"title": "Buy milk", "dueDate": "2026-02-01"}))
        assert isinstance(outcome, Success)
        todo = outcome.value
        assert todo.status is TodoStatus.PENDING
        assert todo.created_at == todo.updated_at == "2026-01-01T12:00:00.000Z"
        assert todo.due_date == "2026-02-01"
        assert todo.completed_at is None

    def test_invalid_title_not_persisted(self, h: Harness) -> None:
        outcome = h.run(h.service.create({"title": "ab"}))
        assert isinstance(outcome, ValidationFailure)
        assert outcome.field_names() == ["title"]
        assert h.repository.calls == []
        assert h.events.notifications == []

    def test_emits_created_event(self, h: Harness) -> None:
        todo_id = h.create()
        [note] = h.events.notifications
        assert note.event_type == "todos.todo.created.v1"
        assert note.subject == f"todo/{todo_id}"
        assert note.data["todoId"] == todo_id
        assert note.data["status"] == "PENDING"

    def test_validation_failure_logged_as_warning(self, h: Harness) -> None:
        with capture_logs() as logs:
            h.run(h.service.create({"title": ""}))
        [entry] = [e for e in logs if e["event"] == "todo.validation_failed"]
        assert entry["log_level"] == "warning"
        assert entry["fields"][0]["field"] == "title"


class TestQueries:
    def test_get_existing(self, h: Harness) -> None:
        todo_id = h.create()
        outcome = h.run(h.service.get_todo(todo_id))
        assert isinstance(outcome, Success)
        assert outcome.value.id == todo_id

    def test_get_missing(self, h: Harness) -> None:
        outcome = h.run(h.service.get_todo(MISSING))
        assert outcome == NotFound(MISSING)
        assert outcome.code == "TODO_NOT_FOUND"

    def test_list_newest_first_and_filter(self, h: Harness) -> None:
        first = h.create("First todo")
        h.clock.advance(seconds=1)
        second = h.create("Second todo")
        h.run(h.service.complete(first))
        todos = h.run(h.service.list_todos())
        assert [t.id for t in todos] == [second, first]
        completed = h.run(h.service.list_todos(TodoStatus.COMPLETED))
        assert [t.id for t in completed] == [first]

    def test_list_tags_of_missing_todo(self, h: Harness) -> None:
        assert isinstance(h.run(h.service.list_tags(MISSING)), NotFound)


class TestUpdate:
    def test_updates_fields_and_stamps_updated_at(self, h: Harness) -> None:
        todo_id = h.create()
        h.clock.advance(minutes=5)
        outcome = h.run(h.service.update(todo_id, {"title": "Renamed", "status": "IN_PROGRESS"}))
        assert isinstance(outcome, Success)
        todo = outcome.value
        assert (todo.title, todo.status) == ("Renamed", TodoStatus.IN_PROGRESS)
        assert todo.updated_at == "2026-01-01T12:05:00.000Z"
        assert todo.created_at == "2026-01-01T12:00:00.000Z"
        assert h.events.of_type("todos.todo.updated.v1")

    def test_missing_todo_no_write(self, h: Harness) -> None:
        outcome = h.run(h.service.update(MISSING, {"title": "Valid title"}))
        assert isinstance(outcome, NotFound)
        assert h.repository.writes == []
        assert h.events.notifications == []

    def test_validation_precedes_existence_check(self, h: Harness) -> None:
        outcome = h.run(h.service.update(MISSING, {"status": "DONE"}))
        assert isinstance(outcome, ValidationFailure)
        assert h.repository.calls == []


class TestDelete:
    def test_returns_deleted_todo(self, h: Harness) -> None:
        todo_id = h.create()
        outcome = h.run(h.service.delete(todo_id))
        assert isinstance(outcome, Success)
        assert outcome.value.id == todo_id
        assert isinstance(h.run(h.service.get_todo(todo_id)), NotFound)
        assert h.events.of_type("todos.todo.deleted.v1")

    def test_missing(self, h: Harness) -> None:
        assert isinstance(h.run(h.service.delete(MISSING)), NotFound)
        assert h.repository.writes == []


class TestComplete:
    def test_completed_at_equals_updated_at(self, h: Harness) -> None:
        todo_id = h.create()
        h.clock.advance(hours=1)
        outcome = h.run(h.service.complete(todo_id))
        assert isinstance(outcome, Success)
        todo = outcome.value
        assert todo.status is TodoStatus.COMPLETED
        assert todo.completed_at == todo.updated_at == "2026-01-01T13:00:00.000Z"
        completed = h.events.of_type("todos.todo.completed.v1")
        assert len(completed) == 1
        assert completed[0].data["completedAt"] == todo.completed_at

    def test_missing(self, h: Harness) -> None:
        assert isinstance(h.run(h.service.complete(MISSING)), NotFound)
        assert h.events.notifications == []


class TestSetPriority:
    def test_sets_level_and_timestamp(self, h: Harness) -> None:
        todo_id = h.create()
        h.clock.advance(seconds=30)
        outcome = h.run(h.service.set_priority(todo_id, {"level": "URGENT"}))
        assert isinstance(outcome, Success)
        todo = outcome.value
        assert todo.priority_level is PriorityLevel.URGENT
        assert todo.priority_set_at == todo.updated_at == "2026-01-01T12:00:30.000Z"
        [note] = h.events.of_type("todos.todo.priority_changed.v1")
        assert note.data["priorityLevel"] == "URGENT"

    def test_invalid_level(self, h: Harness) -> None:
        todo_id = h.create()
        assert isinstance(h.run(h.service.set_priority(todo_id, {"level": "SOON"})), ValidationFailure)

    def test_missing(self, h: Harness) -> None:
        assert isinstance(h.run(h.service.set_priority(MISSING, {"level": "LOW"})), NotFound)


class TestAddTag:
    def test_adds_tag(self, h: Harness) -> None:
        todo_id = h.create()
        outcome = h.run(h.service.add_tag(todo_id, {"tagName": "work", "tagColor": "#00FF00"}))
        assert isinstance(outcome, Success)
        tag = outcome.value
        assert (tag.todo_id, tag.name, tag.color) == (todo_id, "work", "#00FF00")
        tags = h.run(h.service.list_tags(todo_id))
        assert isinstance(tags, Success)
        assert [t.id for t in tags.value] == [tag.id]
        [note] = h.events.of_type("todos.todo.tagged.v1")
        assert note.data["tagName"] == "work"

    def test_missing_todo(self, h: Harness) -> None:
        outcome = h.run(h.service.add_tag(MISSING, {"tagName": "work", "tagColor": "#00FF00"}))
        assert isinstance(outcome, NotFound)
        assert "add_tag" not in h.repository.calls


class TestTechnicalFailure:
    def test_persistence_failure_becomes_technical_failure(self, h: Harness) -> None:
        h.repository.fail_with = PersistenceError("password authentication failed for user postgres")
        CorrelationContext.set(RequestContext(correlation_id="corr-1"))
        try:
            with pytest.raises(TechnicalFailure) as info:
                h.run(h.service.create({"title": "Valid title"}))
        finally:
            CorrelationContext.clear()
        failure = info.value
        assert failure.code == "INTERNAL_ERROR"
        assert failure.to_dict() == {
            "code": "INTERNAL_ERROR",
            "message": "Internal server error",
            "correlation_id": "corr-1",
        }
        assert isinstance(failure.__cause__, PersistenceError)
        assert h.events.notifications == []

    def test_failure_logged_with_detail(self, h: Harness) -> None:
        h.repository.fail_with = PersistenceError("relation todos does not exist")
        with capture_logs() as logs, pytest.raises(TechnicalFailure):
            h.run(h.service.list_todos())
        [entry] = [e for e in logs if e["event"] == "todo.persistence_failed"]
        assert entry["log_level"] == "error"
        assert entry["error"] == "relation todos does not exist"
        assert entry["operation"] == "list_todos"

    @pytest.mark.parametrize(
        ("exc", "code"),
        [
            (CircuitOpenError("database"), "DEPENDENCY_UNAVAILABLE"),
            (PersistenceError("reset", kind=FailureKind.CONNECTION_RESET), "DEPENDENCY_UNAVAILABLE"),
            (PersistenceError("refused", kind=FailureKind.CONNECTION_REFUSED), "DEPENDENCY_UNAVAILABLE"),
            (InfrastructureTimeoutError("slow"), "DEPENDENCY_TIMEOUT"),
            (RuntimeError("bug"), "INTERNAL_ERROR"),
        ],
    )
    def test_technical_code(self, exc: BaseException, code: str) -> None:
        assert technical_code(exc) == code
