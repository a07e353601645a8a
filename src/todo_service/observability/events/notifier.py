"""Fire-and-forget event notifications."""
from __future__ import annotations

import asyncio
from typing import Any, Protocol

from todo_service.kernel.time import Clock, SystemClock, isoformat_utc
from todo_service.observability.events.cloudevent import CloudEvent
from todo_service.observability.logging import get_logger

__all__ = ["EventNotifier", "EventPublisher", "EventSink"]

logger = get_logger(__name__)


class EventPublisher(Protocol):
    async def publish(self, event: CloudEvent) -> None: ...


class EventSink(Protocol):
    """Port: accepts a typed notification; never raises to the caller."""

    def notify(self, event_type: str, data: dict[str, Any], *, subject: str | None = None) -> None: ...


class EventNotifier:
    """Wraps notifications in :class:`CloudEvent` and publishes them in the background.

    ``notify`` returns immediately; publication runs as its own task so a slow
    or failing bus never blocks or fails the mutation that triggered it.
    Call :meth:`drain` to wait for outstanding notifications (shutdown,
    tests).
    """

    def __init__(
        self,
        publisher: EventPublisher,
        *,
        source: str = "/todo-service",
        clock: Clock | None = None,
    ) -> None:
        self._publisher = publisher
        self._source = source
        self._clock = clock or SystemClock()
        self._pending: set[asyncio.Task[None]] = set()

    def notify(self, event_type: str, data: dict[str, Any], *, subject: str | None = None) -> None:
        event = CloudEvent(
            type=event_type,
            time=isoformat_utc(self._clock.now()),
            data=data,
            source=self._source,
            subject=subject,
        )
        try:
            task = asyncio.get_running_loop().create_task(self._publish(event))
        except RuntimeError:
            logger.error("event.dropped", event_type=event_type, reason="no running event loop")
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _publish(self, event: CloudEvent) -> None:
        try:
            await self._publisher.publish(event)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "event.publish_failed",
                event_id=event.id,
                event_type=event.type,
                error=str(exc),
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending))
