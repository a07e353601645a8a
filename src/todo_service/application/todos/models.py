"""Todo domain types."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any


class TodoStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class PriorityLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


@dataclasses.dataclass(frozen=True)
class Todo:
    """A todo item; timestamps are canonical UTC strings (``...T..:..:..mmmZ``)."""

    id: str
    title: str
    status: TodoStatus
    created_at: str
    updated_at: str
    description: str | None = None
    due_date: str | None = None
    completed_at: str | None = None
    priority_level: PriorityLevel | None = None
    priority_set_at: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "dueDate": self.due_date,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "completedAt": self.completed_at,
            "priorityLevel": self.priority_level.value if self.priority_level else None,
            "prioritySetAt": self.priority_set_at,
            # deprecated alias of ``description`` kept for older clients
            "notes": self.description,
        }


@dataclasses.dataclass(frozen=True)
class Tag:
    id: str
    todo_id: str
    name: str
    color: str
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "todoId": self.todo_id,
            "tagName": self.name,
            "tagColor": self.color,
            "createdAt": self.created_at,
        }


__all__ = ["PriorityLevel", "Tag", "Todo", "TodoStatus"]
