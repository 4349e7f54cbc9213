"""Config – settings dataclass, loaders and error types."""
from ats_search.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from ats_search.config.factory import create_settings, load_settings
from ats_search.config.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from ats_search.config.settings import SearchSettings, Settings

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SearchSettings",
    "Settings",
    "SettingsLoader",
    "create_settings",
    "load_settings",
]
