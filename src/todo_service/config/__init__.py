"""Config – 12-factor settings and loaders."""

from todo_service.config.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from todo_service.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
    TodoServiceSettings,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "TodoServiceSettings",
]
