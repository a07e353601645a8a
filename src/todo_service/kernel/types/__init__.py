"""Kernel value types – public re-export surface.

Modules:
  outcome.py – Success, ValidationFailure, NotFound, FieldError, Outcome
"""

from todo_service.kernel.types.outcome import (
    FieldError,
    NotFound,
    Outcome,
    Success,
    ValidationFailure,
)

__all__ = [
    "FieldError",
    "NotFound",
    "Outcome",
    "Success",
    "ValidationFailure",
]
