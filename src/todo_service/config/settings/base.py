"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar


@dataclasses.dataclass
class Settings:
    """Dataclass settings read from ``<PREFIX>_<FIELD>`` environment variables.

    Subclasses set ``_prefix``, may override :meth:`_validate` for
    cross-field rules, and list fields that must never be logged in
    ``_secret_fields``.
    """

    _prefix: ClassVar[str] = ""
    _secret_fields: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Raise :class:`ConfigError` for invalid combinations."""

    @classmethod
    def env_key(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    def redacted(self) -> dict[str, Any]:
        """Field values with secrets masked, for the startup log line."""
        return {
            f.name: "***" if f.name in self._secret_fields else getattr(self, f.name)
            for f in dataclasses.fields(self)
        }


__all__ = ["Settings"]
