"""Unit tests for TodoServiceSettings and the settings loaders."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path

import pytest

from todo_service.config import (
    ConfigError,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
    TodoServiceSettings,
)


class TestDefaults:
    def test_defaults(self) -> None:
        s = EnvSettingsLoader(environ={}).load(TodoServiceSettings)
        assert s.service_name == "todo-service"
        assert s.port == 4000
        assert s.retry_max_attempts == 3
        assert s.breaker_volume_threshold == 0

    def test_durations_in_seconds(self) -> None:
        s = TodoServiceSettings()
        assert s.retry_base_delay_seconds == 1.0
        assert s.breaker_timeout_seconds == 5.0
        assert s.breaker_reset_timeout_seconds == 30.0
        assert s.breaker_rolling_window_seconds == 10.0


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables_with_coercion(self) -> None:
        s = EnvSettingsLoader(
            environ={
                "TODO_PORT": "8080",
                "TODO_BREAKER_ERROR_THRESHOLD_PERCENTAGE": "75.5",
                "TODO_DATABASE_URL": "sqlite+aiosqlite:///:memory:",
                "PORT": "1",
            }
        ).load(TodoServiceSettings)
        assert s.port == 8080
        assert s.breaker_error_threshold_percentage == 75.5
        assert s.database_url == "sqlite+aiosqlite:///:memory:"

    def test_non_numeric_value_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError) as info:
            EnvSettingsLoader(environ={"TODO_PORT": "eighty"}).load(TodoServiceSettings)
        assert info.value.setting_name == "TODO_PORT"

    @pytest.mark.parametrize(
        "environ",
        [
            {"TODO_BREAKER_ERROR_THRESHOLD_PERCENTAGE": "150"},
            {"TODO_BREAKER_ROLLING_WINDOW_BUCKETS": "0"},
            {"TODO_BREAKER_ROLLING_WINDOW_MS": "0"},
            {"TODO_BREAKER_RESET_TIMEOUT_MS": "-1"},
        ],
    )
    def test_invalid_values_raise_config_error(self, environ: dict[str, str]) -> None:
        with pytest.raises(ConfigError):
            EnvSettingsLoader(environ=environ).load(TodoServiceSettings)

    def test_missing_required_setting(self) -> None:
        @dataclasses.dataclass
        class NeedsSecret(Settings):
            _prefix = "APP"
            secret: str

        with pytest.raises(MissingRequiredSettingError) as info:
            EnvSettingsLoader(environ={}).load(NeedsSecret)
        assert info.value.setting_name == "APP_SECRET"


class TestDotenvSettingsLoader:
    def test_loads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("TODO_SERVICE_NAME=todo-from-dotenv\nTODO_RETRY_MAX_ATTEMPTS=5\n")
        monkeypatch.delenv("TODO_SERVICE_NAME", raising=False)
        monkeypatch.delenv("TODO_RETRY_MAX_ATTEMPTS", raising=False)
        try:
            s = DotenvSettingsLoader(str(env_file)).load(TodoServiceSettings)
        finally:
            os.environ.pop("TODO_SERVICE_NAME", None)
            os.environ.pop("TODO_RETRY_MAX_ATTEMPTS", None)
        assert s.service_name == "todo-from-dotenv"
        assert s.retry_max_attempts == 5

    def test_environment_wins_without_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("TODO_PORT=9000\n")
        monkeypatch.setenv("TODO_PORT", "7000")
        assert DotenvSettingsLoader(str(env_file)).load(TodoServiceSettings).port == 7000


class TestRedactedSettings:
    def test_database_url_is_masked(self) -> None:
        settings = TodoServiceSettings(database_url="postgresql+asyncpg://u:secret@db/todos")
        redacted = settings.redacted()
        assert redacted["database_url"] == "***"
        assert redacted["service_name"] == settings.service_name

    def test_env_key_uses_prefix(self) -> None:
        assert TodoServiceSettings.env_key("database_url") == "TODO_DATABASE_URL"
