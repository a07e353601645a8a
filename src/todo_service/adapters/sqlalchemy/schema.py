"""SQLAlchemy adapter – table definitions.

Timestamps are stored as canonical UTC strings (``YYYY-MM-DDTHH:MM:SS.mmmZ``)
so every backend returns exactly what the service stamped.
"""
from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
)

metadata = MetaData()

todos = Table(
    "todos",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=True),
    Column("status", String(20), nullable=False, server_default="PENDING"),
    Column("due_date", String(10), nullable=True),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    Column("completed_at", String(32), nullable=True),
    Column("priority_level", String(10), nullable=True),
    Column("priority_set_at", String(32), nullable=True),
    CheckConstraint(
        "status IN ('PENDING', 'IN_PROGRESS', 'COMPLETED', 'ARCHIVED')",
        name="valid_status",
    ),
    Index("idx_todos_status", "status"),
    Index("idx_todos_created_at", "created_at"),
)

todo_tags = Table(
    "todo_tags",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "todo_id",
        String(36),
        ForeignKey("todos.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("tag_name", String(50), nullable=False),
    Column("tag_color", String(7), nullable=False),
    Column("created_at", String(32), nullable=False),
)


__all__ = ["metadata", "todo_tags", "todos"]
