"""Application-layer errors – the technical failure channel."""

from __future__ import annotations

from typing import Any

from todo_service.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class TechnicalFailure(ApplicationError):
    """An infrastructure failure that escaped retry and circuit-breaker protection.

    Raised by business operations instead of returning an outcome.  The public
    representation carries only a coarse ``code`` and the request's
    ``correlation_id``; the underlying exception stays on ``__cause__`` for
    the logs.
    """

    default_code = "INTERNAL_ERROR"
    public_message = "Internal server error"

    def __init__(
        self,
        code: str | None = None,
        *,
        correlation_id: str | None = None,
        operation: str | None = None,
        **kwargs: Any,
    ) -> None:
        message = f"{operation} failed" if operation else "Operation failed"
        super().__init__(message, code=code, **kwargs)
        self.correlation_id = correlation_id
        self.operation = operation

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.public_message,
            "correlation_id": self.correlation_id,
        }


__all__ = ["ApplicationError", "TechnicalFailure"]
