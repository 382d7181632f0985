"""Transaction – DgraphTransaction, a client-side handle on one Dgraph transaction.

Raw HTTP protocol (https://dgraph.io/docs/dql/clients/raw-http/)::

    POST /query?startTs=..&hash=..&timeout=..s&ro=true&be=true   application/dql
    POST /mutate?commitNow=true&startTs=..&hash=..               application/rdf
    POST /commit?startTs=..&hash=..                              application/json
    POST /commit?startTs=..&hash=..&abort=true                   (no body)

Every response may carry ``extensions.txn``; the handle adopts its
``start_ts`` once, follows its ``hash`` and accumulates ``keys``/``preds``
for the final commit.
"""
from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

from dgraph_http.adapters.http import HttpxHttpClient
from dgraph_http.config import EnvSettingsLoader, TransactionOptions
from dgraph_http.kernel.ddd import UnitOfWork
from dgraph_http.kernel.errors import (
    AlreadyAbortedError,
    AlreadyClosedError,
    AlreadyCommittedError,
    BaseError,
    ConflictingMutationError,
    EmptyMutationError,
    ReadOnlyViolationError,
    StartTsMismatchError,
)
from dgraph_http.observability.logging import get_logger
from dgraph_http.transaction.content_type import ContentType
from dgraph_http.transaction.state import TransactionState
from dgraph_http.transaction.txn_context import TxnContext

logger = get_logger(__name__)

# Extra seconds granted to the local client on top of the server-side timeout.
_CLIENT_TIMEOUT_GRACE = 5.0

_STATE_ERRORS: dict[TransactionState, type[BaseError]] = {
    TransactionState.ABORTED: AlreadyAbortedError,
    TransactionState.COMMITTED: AlreadyCommittedError,
    TransactionState.CLOSED: AlreadyClosedError,
}


def set_block(mutation: str) -> str:
    return f"{{ set {{ {mutation} }} }}"


def delete_block(remove: str) -> str:
    return f"{{ delete {{ {remove} }} }}"


class DgraphTransaction(UnitOfWork):
    """One Dgraph transaction driven over the raw HTTP API.

    Call :meth:`query` / :meth:`mutate` any number of times, then finish with
    exactly one :meth:`commit` or :meth:`abort`. Each call performs at most
    one request (plus the implicit abort when that request fails). The
    handle holds no lock: callers must await one call before issuing the
    next.

    Usage::

        async with DgraphTransaction({"api_key": key, "endpoint": url}) as txn:
            await txn.mutate(mutation='_:a <name> "Alice" .')
            data = await txn.query(False, "{ q(func: has(name)) { name } }")
        # committed on clean exit, aborted if the block raised

    Args:
        options: :class:`TransactionOptions` or a mapping of its fields.
        client: Optional caller-owned :class:`HttpxHttpClient`. Without one,
            every request opens and closes its own client.
    """

    def __init__(
        self,
        options: TransactionOptions | Mapping[str, Any] | None,
        *,
        client: HttpxHttpClient | None = None,
    ) -> None:
        opts = TransactionOptions.coerce(options)

        self._api_key = opts.api_key
        self._endpoint = opts.endpoint
        self._read_only = opts.read_only
        self._best_effort = opts.best_effort
        self._timeout = opts.timeout
        self._commit_preds = opts.commit_preds
        self._client = client

        self._state = TransactionState.ACTIVE
        self._start_ts = 0
        self._hash = ""
        self._keys: set[str] = set()
        self._preds: set[str] = set()
        self._did_mutate = False

        self._log = logger.bind(endpoint=self._endpoint)

    @classmethod
    def from_env(cls, *, client: HttpxHttpClient | None = None) -> "DgraphTransaction":
        """Build a transaction from ``DGRAPH_*`` environment variables."""
        return cls(EnvSettingsLoader().load(TransactionOptions), client=client)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def read_only(self) -> bool:
        return self._read_only

    @property
    def best_effort(self) -> bool:
        return self._best_effort

    @property
    def timeout(self) -> int:
        return self._timeout

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def start_ts(self) -> int:
        return self._start_ts

    @property
    def hash(self) -> str:
        return self._hash

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(self._keys)

    @property
    def preds(self) -> frozenset[str]:
        return frozenset(self._preds)

    @property
    def did_mutate(self) -> bool:
        return self._did_mutate

    def is_pending(self) -> bool:
        return self._state is TransactionState.ACTIVE

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_val is None:
            await super().__aexit__(exc_type, exc_val, exc_tb)
            return
        # a failed rollback must not replace the exception raised in the block
        await self._abort_quietly(exc_val)

    def __repr__(self) -> str:
        return (
            f"DgraphTransaction(endpoint={self._endpoint!r}, state={self._state.value!r}, "
            f"start_ts={self._start_ts!r})"
        )

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def query(self, close_when_done: bool, query: str) -> Any:
        """Run a DQL query inside the transaction.

        With *close_when_done* the handle moves to ``CLOSED`` once the
        response arrives: nothing is sent to Dgraph for that, but the handle
        accepts no further query, mutation or commit.
        """
        self._ensure_active({"query": query})

        params: list[tuple[str, str]] = []
        if self._start_ts:
            params.append(("startTs", str(self._start_ts)))
        if self._hash:
            params.append(("hash", self._hash))
        if self._timeout > 0:
            params.append(("timeout", f"{self._timeout}s"))
        if self._read_only:
            params.append(("ro", "true"))
        if self._best_effort:
            params.append(("be", "true"))

        response = await self._api("query", params, body=query, content_type=ContentType.DQL)

        if close_when_done:
            self._transition(TransactionState.CLOSED)
        else:
            self._sync(response)
        return response

    async def mutate(
        self,
        *,
        mutation: str | None = None,
        remove: str | None = None,
        commit_now: bool = False,
    ) -> Any:
        """Apply RDF triples: *mutation* as a ``set`` block or *remove* as a ``delete`` block.

        With *commit_now* Dgraph commits in the same request and the handle
        moves straight to ``COMMITTED``.
        """
        if not mutation and not remove:
            raise EmptyMutationError(detail={"mutation": mutation, "remove": remove})
        if mutation and remove:
            raise ConflictingMutationError(detail={"mutation": mutation, "remove": remove})

        detail = {"mutation": mutation, "remove": remove, "commit_now": commit_now}
        self._ensure_active(detail)
        if self._read_only:
            raise ReadOnlyViolationError(detail=detail)

        # recorded before the request so that a failed mutate still rolls back
        self._did_mutate = True

        body = set_block(mutation) if mutation else delete_block(remove)  # type: ignore[arg-type]

        params: list[tuple[str, str]] = []
        if commit_now:
            params.append(("commitNow", "true"))
        if self._start_ts:
            params.append(("startTs", str(self._start_ts)))
        if self._hash:
            params.append(("hash", self._hash))

        response = await self._api("mutate", params, body=body, content_type=ContentType.RDF)

        if commit_now:
            self._transition(TransactionState.COMMITTED)
        else:
            self._sync(response)
        return response

    async def commit(self) -> Any:
        """Commit the transaction.

        Without prior mutations there is nothing to finalise server-side:
        the handle is marked ``COMMITTED`` and ``None`` is returned.
        """
        self._ensure_active({})
        self._transition(TransactionState.COMMITTED)

        if not self._did_mutate:
            return None

        if self._commit_preds:
            payload: Any = {"keys": sorted(self._keys), "preds": sorted(self._preds)}
        else:
            payload = sorted(self._keys)

        params = [("startTs", str(self._start_ts)), ("hash", self._hash)]
        return await self._api("commit", params, body=json.dumps(payload), content_type=ContentType.JSON)

    async def abort(self) -> Any:
        """Abort the transaction; safe to call any number of times.

        Only the first call has an effect. A rollback request is sent only
        when a mutation was attempted.
        """
        if self._state is TransactionState.ABORTED:
            return None
        self._transition(TransactionState.ABORTED)

        if not self._did_mutate:
            return None

        params = [("startTs", str(self._start_ts)), ("hash", self._hash), ("abort", "true")]
        return await self._api("commit", params)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_active(self, detail: dict[str, Any]) -> None:
        if self._state.is_terminal:
            raise _STATE_ERRORS[self._state](detail=detail)

    def _transition(self, state: TransactionState) -> None:
        self._state = state
        self._log.info(f"transaction.{state.value}", start_ts=self._start_ts, did_mutate=self._did_mutate)

    def _sync(self, response: Any) -> None:
        txn = TxnContext.from_response(response)
        if txn is None:
            return

        if txn.hash:
            self._hash = txn.hash

        if self._start_ts == 0:
            self._start_ts = txn.start_ts
        elif txn.start_ts and txn.start_ts != self._start_ts:
            raise StartTsMismatchError(self._start_ts, txn.start_ts)

        self._keys.update(txn.keys)
        self._preds.update(txn.preds)

    def _url(self, path: str, params: list[tuple[str, str]]) -> str:
        url = f"{self._endpoint}/{path}"
        if params:
            url = f"{url}?{httpx.QueryParams(params)}"
        return url

    async def _api(
        self,
        path: str,
        params: list[tuple[str, str]],
        *,
        body: str | None = None,
        content_type: ContentType | None = None,
    ) -> Any:
        headers = {"X-Auth-Token": self._api_key}
        if content_type is not None:
            headers["Content-Type"] = content_type.value

        kwargs: dict[str, Any] = {"headers": headers}
        if body is not None:
            kwargs["content"] = body

        url = self._url(path, params)
        self._log.debug("transaction.request", url=url, content_type=headers.get("Content-Type"))

        try:
            return await self._post(url, **kwargs)
        except Exception as exc:
            self._log.info(
                "transaction.request_failed",
                error=BaseError.code_of(exc),
                status_code=getattr(exc, "status_code", None),
            )
            await self._abort_quietly(exc)
            raise

    async def _post(self, url: str, **kwargs: Any) -> Any:
        if self._client is not None:
            return await self._client.post_json(url, **kwargs)
        client_timeout = self._timeout + _CLIENT_TIMEOUT_GRACE if self._timeout > 0 else None
        async with HttpxHttpClient(timeout=client_timeout) as client:
            return await client.post_json(url, **kwargs)

    async def _abort_quietly(self, exc: BaseException) -> None:
        try:
            await self.abort()
        except Exception as abort_exc:
            # the original failure is what the caller sees
            self._log.warning(
                "transaction.abort_failed",
                error=BaseError.code_of(abort_exc),
                detail=abort_exc.to_dict() if isinstance(abort_exc, BaseError) else repr(abort_exc),
                original_error=BaseError.code_of(exc),
            )


__all__ = ["DgraphTransaction", "delete_block", "set_block"]
