"""Config – 12-factor settings, loaders and transaction options."""

from dgraph_http.config.settings import DotenvSettingsLoader, EnvSettingsLoader, Settings, SettingsLoader
from dgraph_http.config.transaction import DEFAULT_TIMEOUT_SECONDS, TransactionOptions
from dgraph_http.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingApiKeyError,
    MissingEndpointError,
    MissingParamsError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DEFAULT_TIMEOUT_SECONDS",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingApiKeyError",
    "MissingEndpointError",
    "MissingParamsError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "TransactionOptions",
]
