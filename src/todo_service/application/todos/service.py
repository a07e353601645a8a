"""TodoService – the business operations behind the API.

Every mutating operation follows the same sequence:

1. validate the input (``ValidationFailure`` short-circuits, nothing persisted);
2. check that the targeted todo exists (``NotFound`` short-circuits);
3. run the persistence call (retry ∘ circuit breaker live in the repository);
4. return ``Success`` and publish a fire-and-forget notification.

Outcomes never raise.  A failure that escapes the persistence layer is
logged in full and re-raised as :class:`TechnicalFailure` carrying only a
coarse code and the request's correlation id.
"""
from __future__ import annotations

import uuid
from typing import Any, Awaitable, Callable, TypeVar

from todo_service.application.todos.events import TodoEventKind, event_payload
from todo_service.application.todos.inputs import (
    AddTagInput,
    CreateTodoInput,
    SetPriorityInput,
    UpdateTodoInput,
    validate_input,
)
from todo_service.application.todos.models import Tag, Todo, TodoStatus
from todo_service.application.todos.ports import TodoRepository
from todo_service.kernel.errors import FailureKind, TechnicalFailure
from todo_service.kernel.time import Clock, SystemClock, isoformat_utc
from todo_service.kernel.types import NotFound, Success, ValidationFailure
from todo_service.observability.correlation import CorrelationContext
from todo_service.observability.events import EventSink
from todo_service.observability.logging import get_logger
from todo_service.resilience.circuit_breaker import CircuitOpenError
from todo_service.resilience.retry import failure_kind

T = TypeVar("T")
logger = get_logger(__name__)

DEPENDENCY_UNAVAILABLE = "DEPENDENCY_UNAVAILABLE"
DEPENDENCY_TIMEOUT = "DEPENDENCY_TIMEOUT"
INTERNAL_ERROR = "INTERNAL_ERROR"


def technical_code(exc: BaseException) -> str:
    """Coarse, non-leaking classification of an infrastructure failure."""
    if isinstance(exc, CircuitOpenError):
        return DEPENDENCY_UNAVAILABLE
    kind = failure_kind(exc)
    if kind is FailureKind.TIMEOUT:
        return DEPENDENCY_TIMEOUT
    if kind in (FailureKind.CONNECTION_RESET, FailureKind.CONNECTION_REFUSED):
        return DEPENDENCY_UNAVAILABLE
    return INTERNAL_ERROR


class TodoService:
    def __init__(
        self,
        repository: TodoRepository,
        notifier: EventSink,
        clock: Clock | None = None,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._clock = clock or SystemClock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_todos(self, status: TodoStatus | None = None) -> list[Todo]:
        logger.info("todos.fetching", status=status.value if status else None)
        todos = await self._persist("list_todos", lambda: self._repository.find_all(status))
        logger.info("todos.fetched", count=len(todos))
        return todos

    async def get_todo(self, todo_id: str) -> Success[Todo] | NotFound:
        todo = await self._persist("get_todo", lambda: self._repository.get(todo_id))
        if todo is None:
            return self._not_found("get_todo", todo_id)
        return Success(todo)

    async def list_tags(self, todo_id: str) -> Success[list[Tag]] | NotFound:
        if await self._persist("list_tags", lambda: self._repository.get(todo_id)) is None:
            return self._not_found("list_tags", todo_id)
        tags = await self._persist("list_tags", lambda: self._repository.list_tags(todo_id))
        return Success(tags)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(self, data: Any) -> Success[Todo] | ValidationFailure:
        logger.info("todo.creating")
        validated = validate_input(CreateTodoInput, data)
        if isinstance(validated, ValidationFailure):
            return self._invalid("create", validated)

        now = self._now()
        todo = Todo(
            id=str(uuid.uuid4()),
            title=validated.title,
            description=validated.description,
            status=TodoStatus.PENDING,
            due_date=validated.due_date,
            created_at=now,
            updated_at=now,
        )
        created = await self._persist("create", lambda: self._repository.insert(todo))
        self._notify(TodoEventKind.CREATED, created)
        logger.info("todo.created", todo_id=created.id)
        return Success(created)

    async def update(self, todo_id: str, data: Any) -> Success[Todo] | ValidationFailure | NotFound:
        logger.info("todo.updating", todo_id=todo_id)
        validated = validate_input(UpdateTodoInput, data)
        if isinstance(validated, ValidationFailure):
            return self._invalid("update", validated)
        if not await self._exists("update", todo_id):
            return self._not_found("update", todo_id)

        now = self._now()
        updated = await self._persist(
            "update", lambda: self._repository.update(todo_id, validated.changes(), now)
        )
        if updated is None:
            return self._not_found("update", todo_id)
        self._notify(TodoEventKind.UPDATED, updated)
        logger.info("todo.updated", todo_id=todo_id)
        return Success(updated)

    async def delete(self, todo_id: str) -> Success[Todo] | NotFound:
        logger.info("todo.deleting", todo_id=todo_id)
        existing = await self._persist("delete", lambda: self._repository.get(todo_id))
        if existing is None:
            return self._not_found("delete", todo_id)

        if not await self._persist("delete", lambda: self._repository.delete(todo_id)):
            return self._not_found("delete", todo_id)
        self._notify(TodoEventKind.DELETED, existing)
        logger.info("todo.deleted", todo_id=todo_id)
        return Success(existing)

    async def complete(self, todo_id: str) -> Success[Todo] | NotFound:
        logger.info("todo.completing", todo_id=todo_id)
        if not await self._exists("complete", todo_id):
            return self._not_found("complete", todo_id)

        now = self._now()
        completed = await self._persist("complete", lambda: self._repository.complete(todo_id, now))
        if completed is None:
            return self._not_found("complete", todo_id)
        self._notify(TodoEventKind.COMPLETED, completed)
        logger.info("todo.completed", todo_id=todo_id)
        return Success(completed)

    async def set_priority(self, todo_id: str, data: Any) -> Success[Todo] | ValidationFailure | NotFound:
        logger.info("todo.setting_priority", todo_id=todo_id)
        validated = validate_input(SetPriorityInput, data)
        if isinstance(validated, ValidationFailure):
            return self._invalid("set_priority", validated)
        if not await self._exists("set_priority", todo_id):
            return self._not_found("set_priority", todo_id)

        now = self._now()
        updated = await self._persist(
            "set_priority", lambda: self._repository.set_priority(todo_id, validated.level, now)
        )
        if updated is None:
            return self._not_found("set_priority", todo_id)
        self._notify(TodoEventKind.PRIORITY_CHANGED, updated)
        logger.info("todo.priority_set", todo_id=todo_id, priority_level=validated.level.value)
        return Success(updated)

    async def add_tag(self, todo_id: str, data: Any) -> Success[Tag] | ValidationFailure | NotFound:
        logger.info("todo.tagging", todo_id=todo_id)
        validated = validate_input(AddTagInput, data)
        if isinstance(validated, ValidationFailure):
            return self._invalid("add_tag", validated)
        todo = await self._persist("add_tag", lambda: self._repository.get(todo_id))
        if todo is None:
            return self._not_found("add_tag", todo_id)

        tag = Tag(
            id=str(uuid.uuid4()),
            todo_id=todo_id,
            name=validated.name,
            color=validated.color,
            created_at=self._now(),
        )
        added = await self._persist("add_tag", lambda: self._repository.add_tag(tag))
        self._notify(TodoEventKind.TAGGED, todo, added)
        logger.info("todo.tagged", todo_id=todo_id, tag_id=added.id)
        return Success(added)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _now(self) -> str:
        return isoformat_utc(self._clock.now())

    async def _exists(self, operation: str, todo_id: str) -> bool:
        return await self._persist(operation, lambda: self._repository.get(todo_id)) is not None

    async def _persist(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        try:
            return await call()
        except Exception as exc:
            correlation_id = CorrelationContext.get_or_new().correlation_id
            code = technical_code(exc)
            logger.error(
                "todo.persistence_failed",
                operation=operation,
                code=code,
                error=str(exc),
                error_type=type(exc).__name__,
                exc_info=exc,
            )
            raise TechnicalFailure(
                code, correlation_id=correlation_id, operation=operation, cause=exc
            ) from exc

    def _notify(self, kind: TodoEventKind, todo: Todo, tag: Tag | None = None) -> None:
        self._notifier.notify(kind.event_type, event_payload(kind, todo, tag), subject=f"todo/{todo.id}")

    def _invalid(self, operation: str, failure: ValidationFailure) -> ValidationFailure:
        logger.warning(
            "todo.validation_failed",
            operation=operation,
            fields=[f.to_dict() for f in failure.fields],
        )
        return failure

    def _not_found(self, operation: str, todo_id: str) -> NotFound:
        logger.warning("todo.not_found", operation=operation, todo_id=todo_id)
        return NotFound(todo_id)


__all__ = [
    "DEPENDENCY_TIMEOUT",
    "DEPENDENCY_UNAVAILABLE",
    "INTERNAL_ERROR",
    "TodoService",
    "technical_code",
]
