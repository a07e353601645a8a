"""Todo repository port – the persistence collaborator seen by the service."""
from __future__ import annotations

from typing import Any, Protocol

from todo_service.application.todos.models import PriorityLevel, Tag, Todo, TodoStatus


class TodoRepository(Protocol):
    """Each method is one protected persistence call.

    Implementations raise infrastructure errors for failures that survive
    their resilience policy; ``None`` / ``False`` means the row is absent.
    """

    async def find_all(self, status: TodoStatus | None = None) -> list[Todo]: ...

    async def get(self, todo_id: str) -> Todo | None: ...

    async def insert(self, todo: Todo) -> Todo: ...

    async def update(self, todo_id: str, changes: dict[str, Any], updated_at: str) -> Todo | None: ...

    async def delete(self, todo_id: str) -> bool: ...

    async def complete(self, todo_id: str, completed_at: str) -> Todo | None: ...

    async def set_priority(self, todo_id: str, level: PriorityLevel, set_at: str) -> Todo | None: ...

    async def add_tag(self, tag: Tag) -> Tag: ...

    async def list_tags(self, todo_id: str) -> list[Tag]: ...


__all__ = ["TodoRepository"]
