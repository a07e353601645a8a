"""Observability – structured logging helpers."""
from todo_service.observability.logging.factory import JsonLoggerFactory
from todo_service.observability.logging.processors import CorrelationProcessor, get_logger

__all__ = ["CorrelationProcessor", "JsonLoggerFactory", "get_logger"]
