"""Infrastructure errors – I/O failures of the persistence dependency."""

from __future__ import annotations

from enum import Enum
from typing import Any

from todo_service.kernel.errors.base import BaseError


class FailureKind(str, Enum):
    """How a call to the persistence collaborator failed."""

    CONNECTION_RESET = "connection_reset"
    TIMEOUT = "timeout"
    CONNECTION_REFUSED = "connection_refused"
    OTHER = "other"


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"
    default_kind = FailureKind.OTHER

    def __init__(self, message: str, *, kind: FailureKind | None = None, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.kind = kind or self.default_kind

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["kind"] = self.kind.value
        return base


class PersistenceError(InfrastructureError):
    """A database statement failed."""

    default_code = "persistence_error"


class TimeoutError(InfrastructureError):  # noqa: A001
    """An I/O operation exceeded its deadline."""

    default_code = "infrastructure_timeout"
    default_kind = FailureKind.TIMEOUT


__all__ = ["FailureKind", "InfrastructureError", "PersistenceError", "TimeoutError"]
