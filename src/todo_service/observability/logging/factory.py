"""Observability – JsonLoggerFactory."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from todo_service.observability.logging.processors import CorrelationProcessor


class JsonLoggerFactory:
    """Configure structlog for JSON output on top of stdlib logging.

    Every record carries ``timestamp`` (ISO 8601, UTC), ``level``, ``logger``,
    ``service`` and ``environment``; inside a request also ``correlation_id``.
    """

    @staticmethod
    def configure(
        level: int | str = logging.INFO,
        *,
        service: str = "todo-service",
        environment: str = "development",
        cache_logger_on_first_use: bool = True,
    ) -> None:
        if isinstance(level, str):
            level = logging.getLevelName(level.upper())

        def _service_meta(logger: Any, method: Any, event_dict: dict[str, Any]) -> dict[str, Any]:  # noqa: ARG001
            event_dict.setdefault("service", service)
            event_dict.setdefault("environment", environment)
            return event_dict

        shared_processors: list[Any] = [
            structlog.contextvars.merge_contextvars,
            CorrelationProcessor(),
            _service_meta,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        structlog.configure(
            processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=cache_logger_on_first_use,
        )
        formatter = structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        )
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root = logging.getLogger()
        root.handlers.clear()
        root.addHandler(handler)
        root.setLevel(level)


__all__ = ["JsonLoggerFactory"]
