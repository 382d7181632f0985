"""Config validation errors."""
from dgraph_http.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingApiKeyError,
    MissingEndpointError,
    MissingParamsError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingApiKeyError",
    "MissingEndpointError",
    "MissingParamsError",
    "MissingRequiredSettingError",
]
