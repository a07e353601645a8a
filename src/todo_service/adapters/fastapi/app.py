"""FastAPI adapter – application factory."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

from fastapi import FastAPI

from todo_service import __version__
from todo_service.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from todo_service.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from todo_service.adapters.fastapi.routers import FastAPIHealthRouter, FastAPITodoRouter
from todo_service.observability.logging import get_logger

if TYPE_CHECKING:
    from todo_service.bootstrap import Container

logger = get_logger(__name__)


def create_app(container: "Container", *, create_schema: bool = True) -> FastAPI:
    """Build the HTTP application around an already wired *container*.

    Startup creates the schema (unless disabled); shutdown drains pending
    event notifications and disposes the database engine.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
        if create_schema:
            await container.database.create_schema()
        logger.info("service.started", service=container.settings.service_name)
        try:
            yield
        finally:
            await container.notifier.drain()
            await container.database.dispose()
            logger.info("service.stopped", service=container.settings.service_name)

    app = FastAPI(title=container.settings.service_name, version=__version__, lifespan=lifespan)
    app.state.container = container
    app.add_middleware(FastAPICorrelationIdMiddleware)
    FastAPIExceptionMapper().register(app)
    app.include_router(FastAPIHealthRouter(container.health, clock=container.clock))
    app.include_router(FastAPITodoRouter())
    return app


__all__ = ["create_app"]
