"""SQLAlchemy adapter – Database, the persistence collaborator.

``execute`` runs one statement in its own transaction and returns the rows
as plain dicts.  Driver failures are translated into
:class:`PersistenceError` with a :class:`FailureKind`, which is what the
retry policy classifies on.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql import Executable

from todo_service.adapters.sqlalchemy.schema import metadata
from todo_service.kernel.errors import FailureKind, PersistenceError
from todo_service.observability.logging import get_logger
from todo_service.resilience.retry import failure_kind

logger = get_logger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:  # noqa: ARG001
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def classify_driver_error(exc: BaseException) -> FailureKind:
    """Find the first transient condition in the driver exception chain."""
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return FailureKind.CONNECTION_RESET
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        kind = failure_kind(current)
        if kind is not FailureKind.OTHER:
            return kind
        current = getattr(current, "orig", None) or current.__cause__ or current.__context__
    return FailureKind.OTHER


class Database:
    """Async SQLAlchemy engine wrapper."""

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        self._engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
        if self._engine.dialect.name == "sqlite":
            event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def execute(self, statement: Executable) -> list[dict[str, Any]]:
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(statement)
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except (DBAPIError, OSError) as exc:
            kind = classify_driver_error(exc)
            raise PersistenceError(
                str(getattr(exc, "orig", None) or exc), kind=kind, cause=exc
            ) from exc

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_schema(self) -> None:
        async with self._engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
        logger.info("database.initialized")

    async def dispose(self) -> None:
        await self._engine.dispose()


__all__ = ["Database", "classify_driver_error"]
