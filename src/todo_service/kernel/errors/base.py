"""Root error class for the todo_service error hierarchy."""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the service's exceptions.

    ``code`` is a stable, machine-readable slug.  ``message`` may carry
    internal detail (driver messages, statement text) and is meant for logs;
    API bodies are built from ``code`` only.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        if cause is not None:
            self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Log-safe representation; includes the internal message."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.__cause__ is not None:
            payload["cause"] = type(self.__cause__).__name__
        return payload


__all__ = ["BaseError"]
