"""Transaction – TxnContext, the ``extensions.txn`` block of a response."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping


@dataclasses.dataclass(frozen=True)
class TxnContext:
    """Server-reported transaction metadata.

    ``start_ts`` identifies the transaction; ``keys`` and ``preds`` are the
    keys and predicates touched by the mutation that produced the response,
    used by Dgraph for conflict and predicate-move detection at commit time.
    """

    start_ts: int = 0
    hash: str = ""
    keys: tuple[str, ...] = ()
    preds: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TxnContext":
        return cls(
            start_ts=int(data.get("start_ts") or 0),
            hash=data.get("hash") or "",
            keys=tuple(data.get("keys") or ()),
            preds=tuple(data.get("preds") or ()),
        )

    @classmethod
    def from_response(cls, response: Any) -> "TxnContext | None":
        """Extract ``extensions.txn`` from a decoded response, if present."""
        if not isinstance(response, Mapping):
            return None
        extensions = response.get("extensions")
        if not isinstance(extensions, Mapping):
            return None
        txn = extensions.get("txn")
        if not isinstance(txn, Mapping):
            return None
        return cls.from_dict(txn)


__all__ = ["TxnContext"]
