"""In-process event bus (stands in for a broker such as Kafka)."""
from __future__ import annotations

import inspect
from collections import defaultdict
from typing import Any, Awaitable, Callable

from todo_service.observability.events.cloudevent import CloudEvent
from todo_service.observability.logging import get_logger

__all__ = ["EventHandler", "InMemoryEventBus"]

EventHandler = Callable[[CloudEvent], Awaitable[Any] | Any]

logger = get_logger(__name__)


class InMemoryEventBus:
    """Dispatches each published event to the handlers subscribed to its type.

    A failing handler is logged and skipped; it never affects the publisher
    or the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    async def publish(self, event: CloudEvent) -> None:
        handlers = list(self._handlers.get(event.type, ()))
        logger.info(
            "event.published",
            event_id=event.id,
            event_type=event.type,
            subject=event.subject,
            subscriber_count=len(handlers),
        )
        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:  # noqa: BLE001
                logger.error(
                    "event.handler_failed",
                    event_id=event.id,
                    event_type=event.type,
                    error=str(exc),
                )
