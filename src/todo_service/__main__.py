"""Entry point: ``python -m todo_service``."""
from __future__ import annotations

import uvicorn

from todo_service.adapters.fastapi import create_app
from todo_service.bootstrap import build_container
from todo_service.config import DotenvSettingsLoader, TodoServiceSettings
from todo_service.observability.logging import JsonLoggerFactory, get_logger


def main() -> None:
    settings = DotenvSettingsLoader().load(TodoServiceSettings)
    JsonLoggerFactory.configure(
        settings.log_level,
        service=settings.service_name,
        environment=settings.environment,
    )
    get_logger(__name__).info("settings.loaded", **settings.redacted())
    app = create_app(build_container(settings))
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
