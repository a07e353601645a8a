"""FastAPI adapter – correlation-id middleware.

Header resolution order:

1. ``X-Correlation-ID``
2. ``X-Request-ID``
3. ``traceparent`` (W3C trace-context, trace-id segment)
4. Generated UUID v4

The id is stored in :class:`CorrelationContext`, bound into structlog's
context vars for the request's log lines, and echoed back in the
``X-Correlation-ID`` response header.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from todo_service.observability.correlation import CorrelationContext

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send


class FastAPICorrelationIdMiddleware:
    def __init__(self, app: "ASGIApp", header_name: str = "X-Correlation-ID") -> None:
        self.app = app
        self._response_header = header_name.lower().encode()

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {
            key.decode("latin-1"): value.decode("latin-1")
            for key, value in scope.get("headers", [])
        }
        ctx = CorrelationContext.set_from_headers(headers)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=ctx.correlation_id)

        response_header = self._response_header
        encoded_id = ctx.correlation_id.encode()

        async def send_with_header(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers_list: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                headers_list.append((response_header, encoded_id))
                message = {**message, "headers": headers_list}
            await send(message)

        # context stays set after the call so the outermost 500 handler can still read it
        await self.app(scope, receive, send_with_header)


__all__ = ["FastAPICorrelationIdMiddleware"]
