"""Infrastructure errors – transport failures talking to the Dgraph endpoint.

Any of these raised from a request makes the transaction abort itself before
the error reaches the caller.
"""

from __future__ import annotations

from typing import Any

from dgraph_http.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a transaction rule violation."""

    default_code = "infrastructure_error"


class ConnectionError(InfrastructureError):  # noqa: A001
    """Failed to reach the Dgraph endpoint."""

    default_code = "connection_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not connect to '{resource}'", **kwargs)
        self.resource = resource


class TimeoutError(InfrastructureError):  # noqa: A001
    """The HTTP exchange exceeded the client deadline."""

    default_code = "infrastructure_timeout"


class SerializationError(InfrastructureError):
    """A response body could not be decoded."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class ExternalServiceError(InfrastructureError):
    """The Dgraph endpoint returned an unexpected response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code


class HttpStatusError(ExternalServiceError):
    """Response status outside ``[200, 300)``.

    ``response`` is the raw ``httpx.Response`` as received, so callers can
    inspect the body Dgraph sent along with the failure.
    """

    default_code = "http_status_error"

    def __init__(self, service: str, response: Any, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            service,
            message or f"HTTP {response.status_code} from {service}",
            status_code=response.status_code,
            **kwargs,
        )
        self.response = response


__all__ = [
    "ConnectionError",
    "ExternalServiceError",
    "HttpStatusError",
    "InfrastructureError",
    "SerializationError",
    "TimeoutError",
]
