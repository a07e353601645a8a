"""FastAPI adapter – middleware, exception mapper, routers, app factory."""
from todo_service.adapters.fastapi.app import create_app
from todo_service.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from todo_service.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from todo_service.adapters.fastapi.routers import (
    FastAPIHealthRouter,
    FastAPITodoRouter,
    render_outcome,
)

__all__ = [
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIHealthRouter",
    "FastAPITodoRouter",
    "create_app",
    "render_outcome",
]
