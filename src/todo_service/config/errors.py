"""Config – errors raised while loading or validating settings."""
from __future__ import annotations

from todo_service.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Configuration is invalid; the process must not start."""

    default_code = "config_error"

    def __init__(self, message: str, *, setting_name: str | None = None) -> None:
        super().__init__(message)
        self.setting_name = setting_name


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"{setting_name} is required but not set", setting_name=setting_name)


class InvalidSettingValueError(ConfigError):
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(f"{setting_name}={value!r} is invalid: {reason}", setting_name=setting_name)
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
