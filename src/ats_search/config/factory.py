"""Config – merge loaders and overrides into a settings instance."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from ats_search.config.errors import ConfigError, MissingRequiredSettingError
from ats_search.config.loaders import EnvSettingsLoader, SettingsLoader
from ats_search.config.settings import SearchSettings, Settings

T = TypeVar("T", bound=Settings)


def create_settings(
    settings_cls: type[T],
    loaders: Sequence[SettingsLoader] | None = None,
    overrides: dict[str, Any] | None = None,
) -> T:
    """Build *settings_cls* from *loaders* (later ones win) and *overrides* (win last).

    Raises
    ------
    MissingRequiredSettingError
        When a field without default is absent from every source.
    InvalidSettingValueError
        When a source holds a value that cannot be coerced or fails validation.
    ConfigError
        On any other construction failure.
    """
    merged: dict[str, Any] = {}
    for loader in loaders or []:
        merged.update(loader.values(settings_cls))
    if overrides:
        merged.update(overrides)

    for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
        if field.name in merged:
            continue
        if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:  # type: ignore[misc]
            raise MissingRequiredSettingError(field.name)

    try:
        return settings_cls(**merged)
    except ConfigError:
        raise
    except TypeError as exc:
        raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}", cause=exc) from exc


def load_settings(
    loaders: Sequence[SettingsLoader] | None = None,
    overrides: dict[str, Any] | None = None,
) -> SearchSettings:
    """Shorthand for :func:`create_settings` with :class:`SearchSettings`, reading the environment by default."""
    return create_settings(SearchSettings, loaders if loaders is not None else [EnvSettingsLoader()], overrides)


__all__ = ["create_settings", "load_settings"]
