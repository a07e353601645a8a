"""Todos – models, input validation, business operations, notifications."""
from todo_service.application.todos.events import TodoEventKind, event_payload
from todo_service.application.todos.inputs import (
    AddTagInput,
    CreateTodoInput,
    SetPriorityInput,
    UpdateTodoInput,
    validate_input,
)
from todo_service.application.todos.models import PriorityLevel, Tag, Todo, TodoStatus
from todo_service.application.todos.ports import TodoRepository
from todo_service.application.todos.service import TodoService, technical_code

__all__ = [
    "AddTagInput",
    "CreateTodoInput",
    "PriorityLevel",
    "SetPriorityInput",
    "Tag",
    "Todo",
    "TodoEventKind",
    "TodoRepository",
    "TodoService",
    "TodoStatus",
    "UpdateTodoInput",
    "event_payload",
    "technical_code",
    "validate_input",
]
