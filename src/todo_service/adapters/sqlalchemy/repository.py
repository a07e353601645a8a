"""SQLAlchemy adapter – SqlAlchemyTodoRepository.

Every statement is executed through the shared :class:`ResiliencePipeline`,
so each repository call is one retry-and-breaker protected persistence call.
"""
from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import delete, insert, select, update
from sqlalchemy.sql import Executable

from todo_service.adapters.sqlalchemy.database import Database
from todo_service.adapters.sqlalchemy.schema import todo_tags, todos
from todo_service.application.todos.models import PriorityLevel, Tag, Todo, TodoStatus
from todo_service.resilience import ResiliencePipeline


def _to_todo(row: Mapping[str, Any]) -> Todo:
    return Todo(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        status=TodoStatus(row["status"]),
        due_date=row["due_date"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        completed_at=row["completed_at"],
        priority_level=PriorityLevel(row["priority_level"]) if row["priority_level"] else None,
        priority_set_at=row["priority_set_at"],
    )


def _to_tag(row: Mapping[str, Any]) -> Tag:
    return Tag(
        id=row["id"],
        todo_id=row["todo_id"],
        name=row["tag_name"],
        color=row["tag_color"],
        created_at=row["created_at"],
    )


class SqlAlchemyTodoRepository:
    def __init__(self, database: Database, pipeline: ResiliencePipeline) -> None:
        self._database = database
        self._pipeline = pipeline

    async def _run(self, statement: Executable) -> list[dict[str, Any]]:
        return await self._pipeline.execute(lambda: self._database.execute(statement))

    async def find_all(self, status: TodoStatus | None = None) -> list[Todo]:
        stmt = select(todos).order_by(todos.c.created_at.desc())
        if status is not None:
            stmt = stmt.where(todos.c.status == status.value)
        return [_to_todo(row) for row in await self._run(stmt)]

    async def get(self, todo_id: str) -> Todo | None:
        rows = await self._run(select(todos).where(todos.c.id == todo_id))
        return _to_todo(rows[0]) if rows else None

    async def insert(self, todo: Todo) -> Todo:
        stmt = (
            insert(todos)
            .values(
                id=todo.id,
                title=todo.title,
                description=todo.description,
                status=todo.status.value,
                due_date=todo.due_date,
                created_at=todo.created_at,
                updated_at=todo.updated_at,
            )
            .returning(*todos.c)
        )
        rows = await self._run(stmt)
        return _to_todo(rows[0])

    async def update(self, todo_id: str, changes: dict[str, Any], updated_at: str) -> Todo | None:
        values: dict[str, Any] = {
            key: (value.value if isinstance(value, TodoStatus) else value)
            for key, value in changes.items()
            if key in ("title", "description", "status", "due_date")
        }
        values["updated_at"] = updated_at
        rows = await self._run(
            update(todos).where(todos.c.id == todo_id).values(**values).returning(*todos.c)
        )
        return _to_todo(rows[0]) if rows else None

    async def delete(self, todo_id: str) -> bool:
        rows = await self._run(delete(todos).where(todos.c.id == todo_id).returning(todos.c.id))
        return bool(rows)

    async def complete(self, todo_id: str, completed_at: str) -> Todo | None:
        rows = await self._run(
            update(todos)
            .where(todos.c.id == todo_id)
            .values(
                status=TodoStatus.COMPLETED.value,
                completed_at=completed_at,
                updated_at=completed_at,
            )
            .returning(*todos.c)
        )
        return _to_todo(rows[0]) if rows else None

    async def set_priority(self, todo_id: str, level: PriorityLevel, set_at: str) -> Todo | None:
        rows = await self._run(
            update(todos)
            .where(todos.c.id == todo_id)
            .values(priority_level=level.value, priority_set_at=set_at, updated_at=set_at)
            .returning(*todos.c)
        )
        return _to_todo(rows[0]) if rows else None

    async def add_tag(self, tag: Tag) -> Tag:
        rows = await self._run(
            insert(todo_tags)
            .values(
                id=tag.id,
                todo_id=tag.todo_id,
                tag_name=tag.name,
                tag_color=tag.color,
                created_at=tag.created_at,
            )
            .returning(*todo_tags.c)
        )
        return _to_tag(rows[0])

    async def list_tags(self, todo_id: str) -> list[Tag]:
        stmt = (
            select(todo_tags)
            .where(todo_tags.c.todo_id == todo_id)
            .order_by(todo_tags.c.created_at)
        )
        return [_to_tag(row) for row in await self._run(stmt)]


__all__ = ["SqlAlchemyTodoRepository"]
