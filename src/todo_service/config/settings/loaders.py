"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Mapping, TypeVar

from dotenv import load_dotenv

from todo_service.config.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from todo_service.config.settings.base import Settings

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})


def _coerce(raw: str, annotation: Any) -> Any:
    # annotations arrive as strings under ``from __future__ import annotations``
    name = annotation if isinstance(annotation, str) else getattr(annotation, "__name__", "")
    if name == "bool":
        return raw.strip().lower() in _TRUE
    if name == "int":
        return int(raw)
    if name == "float":
        return float(raw)
    return raw


class SettingsLoader(abc.ABC):
    """Port: build a :class:`Settings` instance from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Read each field from ``<PREFIX>_<FIELD>``; unset fields keep their default."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        values: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):
            key = settings_class.env_key(field.name)
            raw = environ.get(key)
            if raw is None:
                if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                    raise MissingRequiredSettingError(key)
                continue
            try:
                values[field.name] = _coerce(raw, field.type)
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc

        try:
            return settings_class(**values)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Failed to load {settings_class.__name__}: {exc}") from exc


class DotenvSettingsLoader(SettingsLoader):
    """Load a ``.env`` file into the process environment, then read it like :class:`EnvSettingsLoader`.

    Variables already present in the environment win unless ``override``.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
