"""SQLAlchemy adapter – schema, database collaborator, todo repository."""
from todo_service.adapters.sqlalchemy.database import Database, classify_driver_error
from todo_service.adapters.sqlalchemy.repository import SqlAlchemyTodoRepository
from todo_service.adapters.sqlalchemy.schema import metadata, todo_tags, todos

__all__ = [
    "Database",
    "SqlAlchemyTodoRepository",
    "classify_driver_error",
    "metadata",
    "todo_tags",
    "todos",
]
