"""Config – TransactionOptions, the construction parameters of a transaction."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from dgraph_http.config.settings.base import Settings
from dgraph_http.config.validation import (
    InvalidSettingValueError,
    MissingApiKeyError,
    MissingEndpointError,
    MissingParamsError,
)

DEFAULT_TIMEOUT_SECONDS = 600


@dataclasses.dataclass(repr=False)
class TransactionOptions(Settings):
    """Connection parameters for one :class:`DgraphTransaction`.

    Environment variables (via :class:`EnvSettingsLoader`)::

        DGRAPH_API_KEY        X-Auth-Token sent with every request (required)
        DGRAPH_ENDPOINT       base URL, e.g. https://x.cloud.dgraph.io (required)
        DGRAPH_READ_ONLY      send ro=true with queries, reject mutations
        DGRAPH_BEST_EFFORT    send be=true with queries
        DGRAPH_TIMEOUT        server-side timeout in seconds, 0 disables it
        DGRAPH_COMMIT_PREDS   commit body carries preds next to keys
    """

    _prefix = "DGRAPH"
    _secret_fields = frozenset({"api_key"})

    api_key: str = ""
    endpoint: str = ""
    read_only: bool = False
    best_effort: bool = False
    timeout: int = DEFAULT_TIMEOUT_SECONDS
    commit_preds: bool = True

    def _validate(self) -> None:
        if not self.api_key:
            raise MissingApiKeyError(self.api_key)
        endpoint = (self.endpoint or "").rstrip("/")
        if not endpoint:
            raise MissingEndpointError(self.endpoint)
        if self.timeout < 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be >= 0")
        self.endpoint = endpoint

    @classmethod
    def coerce(cls, params: "TransactionOptions | Mapping[str, Any] | None") -> "TransactionOptions":
        """Accept an options instance or a mapping of its field names."""
        if isinstance(params, cls):
            return params
        if not params:
            raise MissingParamsError(params)
        return cls.from_mapping(params)


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "TransactionOptions"]
