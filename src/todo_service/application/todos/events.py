"""Todo event kinds and their CloudEvent payloads."""
from __future__ import annotations

from enum import Enum
from typing import Any

from todo_service.application.todos.models import Tag, Todo


class TodoEventKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    COMPLETED = "completed"
    DELETED = "deleted"
    PRIORITY_CHANGED = "priority_changed"
    TAGGED = "tagged"

    @property
    def event_type(self) -> str:
        """CloudEvent ``type``: ``<domain>.<entity>.<action>.v<version>``."""
        return f"todos.todo.{self.value}.v1"


def event_payload(kind: TodoEventKind, todo: Todo, tag: Tag | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {"todoId": todo.id, "title": todo.title}
    match kind:
        case TodoEventKind.CREATED:
            data.update(status=todo.status.value, createdAt=todo.created_at)
        case TodoEventKind.UPDATED:
            data.update(status=todo.status.value, updatedAt=todo.updated_at)
        case TodoEventKind.COMPLETED:
            data.update(completedAt=todo.completed_at)
        case TodoEventKind.PRIORITY_CHANGED:
            data.update(
                priorityLevel=todo.priority_level.value if todo.priority_level else None,
                prioritySetAt=todo.priority_set_at,
            )
        case TodoEventKind.TAGGED if tag is not None:
            data.update(tagId=tag.id, tagName=tag.name, tagColor=tag.color)
    return data


__all__ = ["TodoEventKind", "event_payload"]
