"""HTTP adapter – HttpxHttpClient."""
from __future__ import annotations

import json
from typing import Any

import httpx

from dgraph_http.kernel.errors import (
    ConnectionError as AppConnectionError,
    ExternalServiceError,
    HttpStatusError,
    InfrastructureTimeoutError,
    SerializationError,
)
from dgraph_http.observability.logging import get_logger

logger = get_logger(__name__)


class HttpxHttpClient:
    """Thin async httpx wrapper with structured error mapping.

    Any status outside ``[200, 300)`` raises :class:`HttpStatusError`
    carrying the raw response; httpx transport failures are mapped onto the
    infrastructure error hierarchy, so callers only ever see
    :class:`~dgraph_http.kernel.errors.BaseError` subclasses.
    """

    def __init__(self, base_url: str = "", timeout: float | None = 10.0, **kwargs: Any) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)

    async def __aenter__(self) -> "HttpxHttpClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self._request("POST", url, **kwargs)

    async def post_json(self, url: str, **kwargs: Any) -> Any:
        """POST and decode the JSON body of a successful response."""
        response = await self.post(url, **kwargs)
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SerializationError(
                f"Response from POST {url} is not valid JSON",
                payload_type=response.headers.get("content-type"),
                cause=exc,
            ) from exc

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise InfrastructureTimeoutError(f"HTTP request timed out: {method} {url}") from exc
        except httpx.ConnectError as exc:
            raise AppConnectionError(url, f"Could not connect for {method} {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc)) from exc
        except (httpx.InvalidURL, httpx.StreamError) as exc:
            raise ExternalServiceError(service=url, message=f"Could not send {method} {url}: {exc}") from exc

        logger.debug("http.response", method=method, url=url, status_code=response.status_code)
        if not response.is_success:
            raise HttpStatusError(
                url,
                response,
                message=f"HTTP {response.status_code} from {method} {url}",
            )
        return response


HttpClient = HttpxHttpClient

__all__ = ["HttpClient", "HttpxHttpClient"]
