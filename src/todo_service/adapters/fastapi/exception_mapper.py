"""FastAPI adapter – FastAPIExceptionMapper.

Error body schema::

    {"code": "DEPENDENCY_UNAVAILABLE", "message": "Internal server error", "correlation_id": "..."}

Mappings
--------
``RequestValidationError`` → 400 (``ValidationError`` body)
``TechnicalFailure``       → 503 for ``DEPENDENCY_*`` codes, else 500
``Exception``              → 500

Technical bodies never carry the underlying error text; that only goes to
the logs.
"""
from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_service.application.todos.service import (
    DEPENDENCY_TIMEOUT,
    DEPENDENCY_UNAVAILABLE,
    INTERNAL_ERROR,
)
from todo_service.kernel.errors import TechnicalFailure
from todo_service.kernel.types import FieldError, ValidationFailure
from todo_service.observability.correlation import CorrelationContext
from todo_service.observability.logging import get_logger

logger = get_logger(__name__)

_SERVICE_UNAVAILABLE_CODES = frozenset({DEPENDENCY_UNAVAILABLE, DEPENDENCY_TIMEOUT})


def _correlation_id() -> str | None:
    ctx = CorrelationContext.get()
    return ctx.correlation_id if ctx is not None else None


def validation_body(failure: ValidationFailure) -> dict[str, Any]:
    return {"__typename": "ValidationError", **failure.to_dict()}


class FastAPIExceptionMapper:
    """Register error → HTTP status-code mappings on a FastAPI app."""

    def register(self, app: FastAPI) -> None:
        app.add_exception_handler(RequestValidationError, self._request_validation)
        app.add_exception_handler(TechnicalFailure, self._technical_failure)
        app.add_exception_handler(Exception, self._unhandled)

    @staticmethod
    async def _request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: ARG004
        failure = ValidationFailure(
            fields=tuple(
                FieldError(
                    field=".".join(str(part) for part in err["loc"] if part not in ("body", "query", "path")),
                    message=err["msg"],
                )
                for err in exc.errors()
            )
        )
        return JSONResponse(status_code=400, content=validation_body(failure))

    @staticmethod
    async def _technical_failure(request: Request, exc: TechnicalFailure) -> JSONResponse:  # noqa: ARG004
        status = 503 if exc.code in _SERVICE_UNAVAILABLE_CODES else 500
        body = exc.to_dict()
        if body["correlation_id"] is None:
            body["correlation_id"] = _correlation_id()
        return JSONResponse(status_code=status, content=body)

    @staticmethod
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "http.unhandled_error",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "code": INTERNAL_ERROR,
                "message": TechnicalFailure.public_message,
                "correlation_id": _correlation_id(),
            },
        )


__all__ = ["FastAPIExceptionMapper", "validation_body"]
