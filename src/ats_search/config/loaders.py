"""Config – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, TypeVar

from dotenv import load_dotenv

from ats_search.config.errors import ConfigError, InvalidSettingValueError
from ats_search.config.settings import Settings

T = TypeVar("T", bound=Settings)

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class SettingsLoader(abc.ABC):
    """Port: read raw setting values from an external source."""

    @abc.abstractmethod
    def values(self, settings_class: type[T]) -> dict[str, Any]:
        """Return the fields of *settings_class* this source defines, already coerced."""


class EnvSettingsLoader(SettingsLoader):
    """Read ``<PREFIX>_<FIELD>`` variables from the process environment."""

    def values(self, settings_class: type[T]) -> dict[str, Any]:
        prefix = getattr(settings_class, "_prefix", "").upper()
        found: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = os.environ.get(env_key)
            if raw is None:
                continue
            found[field.name] = self._coerce(env_key, raw, field.type)
        return found

    def _coerce(self, key: str, value: str, type_hint: Any) -> Any:
        if type_hint is bool or type_hint == "bool":
            lowered = value.strip().lower()
            if lowered in _TRUE:
                return True
            if lowered in _FALSE:
                return False
            raise InvalidSettingValueError(key, value, "expected a boolean")
        if type_hint is int or type_hint == "int":
            try:
                return int(value)
            except ValueError as exc:
                raise InvalidSettingValueError(key, value, "expected an integer") from exc
        return value


class DotenvSettingsLoader(EnvSettingsLoader):
    """Load a ``.env`` file into the environment, then read it like ``EnvSettingsLoader``."""

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def values(self, settings_class: type[T]) -> dict[str, Any]:
        try:
            load_dotenv(self._env_file, override=self._override)
        except OSError as exc:
            raise ConfigError(f"Could not read {self._env_file}: {exc}", cause=exc) from exc
        return super().values(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
