"""Testing fakes – in-memory doubles for the service's ports."""
from todo_service.testing.fakes.clock import FakeClock, ManualMonotonic, RecordingSleep
from todo_service.testing.fakes.events import (
    Notification,
    RecordingEventPublisher,
    RecordingEventSink,
)
from todo_service.testing.fakes.repository import InMemoryTodoRepository
from todo_service.kernel.time import FrozenClock

__all__ = [
    "FakeClock",
    "FrozenClock",
    "InMemoryTodoRepository",
    "ManualMonotonic",
    "Notification",
    "RecordingEventPublisher",
    "RecordingEventSink",
    "RecordingSleep",
]
