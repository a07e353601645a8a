"""Resilience – classification of failures into retryable / non-retryable.

Only transient network conditions are retried: a reset connection, a timeout
and a refused connection.  Everything else (including domain errors and an
open circuit) is surfaced after a single attempt.
"""
from __future__ import annotations

import builtins
import errno

from todo_service.kernel.errors import FailureKind, InfrastructureError

RETRYABLE_KINDS: frozenset[FailureKind] = frozenset(
    {FailureKind.CONNECTION_RESET, FailureKind.TIMEOUT, FailureKind.CONNECTION_REFUSED}
)

_ERRNO_KINDS: dict[int, FailureKind] = {
    errno.ECONNRESET: FailureKind.CONNECTION_RESET,
    errno.ETIMEDOUT: FailureKind.TIMEOUT,
    errno.ECONNREFUSED: FailureKind.CONNECTION_REFUSED,
}


def failure_kind(exc: BaseException) -> FailureKind:
    """Map *exc* onto the persistence collaborator's failure kinds."""
    if isinstance(exc, InfrastructureError):
        return exc.kind
    if isinstance(exc, builtins.ConnectionResetError):
        return FailureKind.CONNECTION_RESET
    if isinstance(exc, builtins.ConnectionRefusedError):
        return FailureKind.CONNECTION_REFUSED
    if isinstance(exc, builtins.TimeoutError):
        return FailureKind.TIMEOUT
    if isinstance(exc, OSError) and exc.errno in _ERRNO_KINDS:
        return _ERRNO_KINDS[exc.errno]
    return FailureKind.OTHER


def is_retryable(exc: BaseException) -> bool:
    return failure_kind(exc) in RETRYABLE_KINDS


__all__ = ["RETRYABLE_KINDS", "failure_kind", "is_retryable"]
