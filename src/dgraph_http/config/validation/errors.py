"""Config validation errors."""
from typing import Any

from dgraph_http.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingParamsError(ConfigError):
    """No options object was handed to the transaction constructor."""
    default_code = "missing_params"

    def __init__(self, params: Any = None) -> None:
        super().__init__(
            "Transaction constructor needs a params object",
            detail={"params": params},
        )


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Required setting '{setting_name}' is missing", **kwargs)
        self.setting_name = setting_name


class MissingApiKeyError(MissingRequiredSettingError):
    default_code = "missing_api_key"

    def __init__(self, api_key: Any = None) -> None:
        super().__init__(
            "api_key",
            "Transaction constructor needs an api_key",
            detail={"api_key": api_key},
        )


class MissingEndpointError(MissingRequiredSettingError):
    default_code = "missing_endpoint"

    def __init__(self, endpoint: Any = None) -> None:
        super().__init__(
            "endpoint",
            "Transaction constructor needs an endpoint",
            detail={"endpoint": endpoint},
        )


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingApiKeyError",
    "MissingEndpointError",
    "MissingParamsError",
    "MissingRequiredSettingError",
]
