"""Outcome[T] – the result of a business operation.

Exactly one of three variants:

* :class:`Success` – the operation completed; ``value`` carries the payload.
* :class:`ValidationFailure` – the caller's input was rejected; one
  :class:`FieldError` per invalid field, nothing was persisted.
* :class:`NotFound` – the targeted entity does not exist; nothing was mutated.

Technical failures are *not* outcomes: they are raised as
:class:`~todo_service.kernel.errors.TechnicalFailure`.

Example::

    match outcome:
        case Success(value=todo):
            ...
        case ValidationFailure(fields=fields):
            ...
        case NotFound(identifier=todo_id):
            ...
        case _:
            assert_never(outcome)
"""

from __future__ import annotations

import dataclasses
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True, slots=True)
class FieldError:
    """One rejected input field, addressed by its dotted path."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclasses.dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True


@dataclasses.dataclass(frozen=True, slots=True)
class ValidationFailure:
    fields: tuple[FieldError, ...]
    message: str = "Input validation failed"
    code: str = "VALIDATION_ERROR"

    def is_success(self) -> bool:
        return False

    def field_names(self) -> list[str]:
        return [f.field for f in self.fields]

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "fields": [f.to_dict() for f in self.fields],
        }


@dataclasses.dataclass(frozen=True, slots=True)
class NotFound:
    identifier: str
    resource: str = "Todo"
    code: str = "TODO_NOT_FOUND"

    def is_success(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return f"{self.resource} not found"


type Outcome[T] = Success[T] | ValidationFailure | NotFound

__all__ = ["FieldError", "NotFound", "Outcome", "Success", "ValidationFailure"]
