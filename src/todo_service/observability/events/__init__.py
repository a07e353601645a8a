"""Observability – CloudEvents notifications."""
from todo_service.observability.events.bus import EventHandler, InMemoryEventBus
from todo_service.observability.events.cloudevent import CloudEvent
from todo_service.observability.events.notifier import EventNotifier, EventPublisher, EventSink

__all__ = [
    "CloudEvent",
    "EventHandler",
    "EventNotifier",
    "EventPublisher",
    "EventSink",
    "InMemoryEventBus",
]
