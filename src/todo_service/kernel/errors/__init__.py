"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   └── TechnicalFailure
    └── InfrastructureError  (infrastructure.py)
        ├── PersistenceError
        ├── TimeoutError
        └── CircuitOpenError (resilience.circuit_breaker.errors)

Business conditions (invalid input, missing todo) are outcomes, not errors;
see :mod:`todo_service.kernel.types.outcome`.
"""

from todo_service.kernel.errors.application import ApplicationError, TechnicalFailure
from todo_service.kernel.errors.base import BaseError
from todo_service.kernel.errors.infrastructure import (
    FailureKind,
    InfrastructureError,
    PersistenceError,
)
from todo_service.kernel.errors.infrastructure import TimeoutError as InfrastructureTimeoutError

__all__ = [
    "ApplicationError",
    "BaseError",
    "FailureKind",
    "InfrastructureError",
    "InfrastructureTimeoutError",
    "PersistenceError",
    "TechnicalFailure",
]
