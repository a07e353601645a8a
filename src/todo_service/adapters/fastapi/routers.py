"""FastAPI adapter – todo and health routers.

Business outcomes are rendered here, one branch per variant; technical
failures propagate to :class:`FastAPIExceptionMapper`.
"""
from __future__ import annotations

import time
from typing import Annotated, Any, Callable, assert_never

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from todo_service.adapters.fastapi.exception_mapper import validation_body
from todo_service.application.todos import Tag, Todo, TodoService, TodoStatus
from todo_service.kernel.time import Clock, SystemClock, isoformat_utc
from todo_service.kernel.types import NotFound, Outcome, Success, ValidationFailure
from todo_service.observability.health import HealthRegistry

Payload = Annotated[dict[str, Any], Body()]


def get_todo_service(request: Request) -> TodoService:
    return request.app.state.container.service


Service = Annotated[TodoService, Depends(get_todo_service)]


def _todo(todo: Todo) -> dict[str, Any]:
    return {"__typename": "Todo", **todo.to_dict()}


def _tag(tag: Tag) -> dict[str, Any]:
    return {"__typename": "Tag", **tag.to_dict()}


def _not_found_body(outcome: NotFound) -> dict[str, Any]:
    return {
        "__typename": "TodoNotFoundError",
        "code": outcome.code,
        "message": outcome.message,
        "todoId": outcome.identifier,
    }


def render_outcome(
    outcome: Outcome[Any],
    render: Callable[[Any], Any],
    status_code: int = 200,
) -> JSONResponse:
    """Map an outcome onto its HTTP response."""
    match outcome:
        case Success(value=value):
            return JSONResponse(status_code=status_code, content=render(value))
        case ValidationFailure():
            return JSONResponse(status_code=400, content=validation_body(outcome))
        case NotFound():
            return JSONResponse(status_code=404, content=_not_found_body(outcome))
        case _:
            assert_never(outcome)


def FastAPITodoRouter(prefix: str = "/todos", tags: list[str] | None = None) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=tags or ["todos"])

    @router.get("")
    async def list_todos(service: Service, status: TodoStatus | None = None) -> list[dict[str, Any]]:
        return [_todo(t) for t in await service.list_todos(status)]

    @router.get("/{todo_id}")
    async def get_todo(todo_id: str, service: Service) -> JSONResponse:
        return render_outcome(await service.get_todo(todo_id), _todo)

    @router.post("")
    async def create_todo(data: Payload, service: Service) -> JSONResponse:
        return render_outcome(
            await service.create(data),
            lambda todo: {"__typename": "CreateTodoSuccess", "todo": _todo(todo)},
            status_code=201,
        )

    @router.patch("/{todo_id}")
    async def update_todo(todo_id: str, data: Payload, service: Service) -> JSONResponse:
        return render_outcome(await service.update(todo_id, data), _todo)

    @router.delete("/{todo_id}")
    async def delete_todo(todo_id: str, service: Service) -> JSONResponse:
        return render_outcome(await service.delete(todo_id), _todo)

    @router.post("/{todo_id}/complete")
    async def complete_todo(todo_id: str, service: Service) -> JSONResponse:
        return render_outcome(await service.complete(todo_id), _todo)

    @router.put("/{todo_id}/priority")
    async def set_priority(todo_id: str, data: Payload, service: Service) -> JSONResponse:
        return render_outcome(
            await service.set_priority(todo_id, data),
            lambda todo: {"__typename": "SetPrioritySuccess", "todo": _todo(todo)},
        )

    @router.get("/{todo_id}/tags")
    async def list_tags(todo_id: str, service: Service) -> JSONResponse:
        return render_outcome(
            await service.list_tags(todo_id), lambda tags: [_tag(t) for t in tags]
        )

    @router.post("/{todo_id}/tags")
    async def add_tag(todo_id: str, data: Payload, service: Service) -> JSONResponse:
        return render_outcome(
            await service.add_tag(todo_id, data),
            lambda tag: {"__typename": "AddTagSuccess", "tag": _tag(tag)},
            status_code=201,
        )

    return router


def FastAPIHealthRouter(
    registry: HealthRegistry,
    path: str = "/health",
    clock: Clock | None = None,
    tags: list[str] | None = None,
) -> APIRouter:
    """Return a liveness + readiness health-check router.

    Liveness is at ``{path}/live`` and always answers while the process is
    up.  Readiness at ``{path}/ready`` runs every check in *registry* and
    answers 503 unless all of them pass.
    """
    router = APIRouter(tags=tags or ["ops"])
    clock = clock or SystemClock()
    started = time.monotonic()

    @router.get(f"{path}/live")
    async def liveness() -> dict[str, Any]:
        return {
            "status": "alive",
            "timestamp": isoformat_utc(clock.now()),
            "uptime": round(time.monotonic() - started, 3),
        }

    @router.get(f"{path}/ready")
    async def readiness() -> JSONResponse:
        report = await registry.run_all()
        return JSONResponse(
            status_code=200 if report.overall else 503,
            content={
                "status": "ready" if report.overall else "not ready",
                "timestamp": isoformat_utc(clock.now()),
                "checks": report.to_dict(),
            },
        )

    return router


__all__ = ["FastAPIHealthRouter", "FastAPITodoRouter", "get_todo_service", "render_outcome"]
