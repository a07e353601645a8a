"""Observability – request correlation.

The correlation id of the request being served lives in a ``ContextVar``;
it follows the request across awaits and into the tasks the request spawns,
since a task copies the context it was created in.
"""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar
from typing import Mapping
from uuid import uuid4


def _trace_id(traceparent: str) -> str | None:
    # W3C traceparent: <version>-<trace-id>-<parent-id>-<flags>
    parts = traceparent.split("-")
    if len(parts) >= 2 and parts[1]:
        return parts[1]
    return None


@dataclasses.dataclass(frozen=True)
class RequestContext:
    correlation_id: str
    trace_id: str | None = None

    @classmethod
    def new(cls) -> "RequestContext":
        return cls(correlation_id=str(uuid4()))

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RequestContext":
        """Resolve the correlation id from inbound HTTP headers.

        ``X-Correlation-ID`` wins, then ``X-Request-ID``, then the trace-id of
        ``traceparent``; otherwise a UUID is generated.  Header names are
        matched case-insensitively.
        """
        norm = {k.lower(): v.strip() for k, v in headers.items()}
        trace_id = _trace_id(norm.get("traceparent", ""))
        correlation_id = (
            norm.get("x-correlation-id") or norm.get("x-request-id") or trace_id or str(uuid4())
        )
        return cls(correlation_id=correlation_id, trace_id=trace_id)


_current: ContextVar[RequestContext | None] = ContextVar("todo_request_context", default=None)


class CorrelationContext:
    """Accessors for the current :class:`RequestContext`."""

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _current.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _current.get()

    @staticmethod
    def get_or_new() -> RequestContext:
        """Current context; outside a request a fresh one is created and stored."""
        ctx = _current.get()
        if ctx is None:
            ctx = RequestContext.new()
            _current.set(ctx)
        return ctx

    @staticmethod
    def clear() -> None:
        _current.set(None)

    @staticmethod
    def set_from_headers(headers: Mapping[str, str]) -> RequestContext:
        ctx = RequestContext.from_headers(headers)
        _current.set(ctx)
        return ctx


__all__ = ["CorrelationContext", "RequestContext"]
