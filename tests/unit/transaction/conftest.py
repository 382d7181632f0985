"""Shared fixtures for the transaction handle tests.

``txn_payload`` builds a Dgraph response body carrying an ``extensions.txn``
block, the shape every query/mutate response has.
"""

from __future__ import annotations

from typing import Any, Callable

import pytest

ENDPOINT = "https://dgraph.example.com"
API_KEY = "abc"
START_TS = 9
HASH = "hash"


@pytest.fixture
def txn_payload() -> Callable[..., dict[str, Any]]:
    def _build(
        start_ts: int = START_TS,
        hash: str = HASH,
        keys: list[str] | None = None,
        preds: list[str] | None = None,
        data: Any = None,
    ) -> dict[str, Any]:
        return {
            "data": data or {},
            "extensions": {
                "txn": {
                    "start_ts": start_ts,
                    "hash": hash,
                    "keys": keys if keys is not None else ["abc", "def"],
                    "preds": preds if preds is not None else ["abc", "def"],
                }
            },
        }

    return _build


@pytest.fixture
def options() -> dict[str, Any]:
    return {"api_key": API_KEY, "endpoint": ENDPOINT}
