"""Unit tests – DgraphTransaction.commit() / abort() and the implicit abort."""
from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest
import respx

from dgraph_http.adapters.http import HttpxHttpClient
from dgraph_http.kernel.errors import (
    AlreadyAbortedError,
    AlreadyClosedError,
    AlreadyCommittedError,
    ConnectionError,
    ExternalServiceError,
    HttpStatusError,
    SerializationError,
)
from dgraph_http.transaction import DgraphTransaction, TransactionState

ENDPOINT = "https://dgraph.example.com"
MUTATION = '_:a <name> "Alice" .'


# ---------------------------------------------------------------------------
# commit()
# ---------------------------------------------------------------------------


class TestCommit:
    @respx.mock
    def test_without_mutations_makes_no_call(self, options: dict[str, Any]) -> None:
        txn = DgraphTransaction(options)

        assert asyncio.run(txn.commit()) is None
        assert txn.state is TransactionState.COMMITTED
        assert respx.calls.call_count == 0

    @respx.mock
    def test_sends_keys_and_preds(self, options: dict[str, Any], txn_payload: Any) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/mutate").mock(
            side_effect=[
                httpx.Response(200, json=txn_payload(keys=["abc", "def"], preds=["p1"])),
                httpx.Response(200, json=txn_payload(keys=["abc", "def", "ghi", "jkl"], preds=["p1", "p2"])),
            ]
        )
        commit_route = respx.post(url__startswith=f"{ENDPOINT}/commit").mock(
            return_value=httpx.Response(200, json={"data": {"code": "Success", "message": "Done"}})
        )
        txn = DgraphTransaction(options)

        async def run() -> Any:
            await txn.mutate(mutation=MUTATION)
            await txn.mutate(mutation=MUTATION)
            return await txn.commit()

        result = asyncio.run(run())
        assert result == {"data": {"code": "Success", "message": "Done"}}
        assert commit_route.call_count == 1
        sent = commit_route.calls.last.request
        assert str(sent.url) == f"{ENDPOINT}/commit?startTs=9&hash=hash"
        assert sent.headers["content-type"] == "application/json"
        assert json.loads(sent.content) == {"keys": ["abc", "def", "ghi", "jkl"], "preds": ["p1", "p2"]}
        assert txn.state is TransactionState.COMMITTED

    @respx.mock
    def test_keys_only_body(self, options: dict[str, Any], txn_payload: Any) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/mutate").mock(
            return_value=httpx.Response(200, json=txn_payload(keys=["def", "abc"]))
        )
        commit_route = respx.post(url__startswith=f"{ENDPOINT}/commit").mock(
            return_value=httpx.Response(200, json={})
        )
        txn = DgraphTransaction({**options, "commit_preds": False})

        async def run() -> None:
            await txn.mutate(mutation=MUTATION)
            await txn.commit()

        asyncio.run(run())
        assert json.loads(commit_route.calls.last.request.content) == ["abc", "def"]

    @respx.mock
    def test_twice(self, options: dict[str, Any]) -> None:
        txn = DgraphTransaction(options)

        async def run() -> None:
            await txn.commit()
            with pytest.raises(AlreadyCommittedError):
                await txn.commit()

        asyncio.run(run())

    @respx.mock
    def test_after_abort(self, options: dict[str, Any]) -> None:
        txn = DgraphTransaction(options)

        async def run() -> None:
            await txn.abort()
            with pytest.raises(AlreadyAbortedError):
                await txn.commit()

        asyncio.run(run())
        assert txn.state is TransactionState.ABORTED

    @respx.mock
    def test_after_close(self, options: dict[str, Any], txn_payload: Any) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/query").mock(return_value=httpx.Response(200, json=txn_payload()))
        txn = DgraphTransaction(options)

        async def run() -> None:
            await txn.query(True, "{ q(func: uid(0x1)) { uid } }")
            with pytest.raises(AlreadyClosedError):
                await txn.commit()

        asyncio.run(run())
        assert txn.state is TransactionState.CLOSED

    @respx.mock
    def test_failed_commit_triggers_abort(self, options: dict[str, Any], txn_payload: Any) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/mutate").mock(return_value=httpx.Response(200, json=txn_payload()))
        commit_route = respx.post(url__startswith=f"{ENDPOINT}/commit").mock(
            side_effect=[httpx.Response(409, json={"errors": [{"message": "conflict"}]}), httpx.Response(200, json={})]
        )
        txn = DgraphTransaction(options)

        async def run() -> None:
            await txn.mutate(mutation=MUTATION)
            with pytest.raises(HttpStatusError) as exc_info:
                await txn.commit()
            assert exc_info.value.status_code == 409

        asyncio.run(run())
        assert commit_route.call_count == 2
        assert str(commit_route.calls[1].request.url) == f"{ENDPOINT}/commit?startTs=9&hash=hash&abort=true"
        assert txn.state is TransactionState.ABORTED


# ---------------------------------------------------------------------------
# abort()
# ---------------------------------------------------------------------------


class TestAbort:
    @respx.mock
    def test_without_mutations_makes_no_call(self, options: dict[str, Any]) -> None:
        txn = DgraphTransaction(options)

        assert asyncio.run(txn.abort()) is None
        assert txn.state is TransactionState.ABORTED
        assert respx.calls.call_count == 0

    @respx.mock
    def test_after_mutation(self, options: dict[str, Any], txn_payload: Any) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/mutate").mock(return_value=httpx.Response(200, json=txn_payload()))
        abort_route = respx.post(url__startswith=f"{ENDPOINT}/commit").mock(
            return_value=httpx.Response(200, json={"code": "Success", "message": "Done"})
        )
        txn = DgraphTransaction(options)

        async def run() -> Any:
            await txn.mutate(mutation=MUTATION)
            return await txn.abort()

        assert asyncio.run(run()) == {"code": "Success", "message": "Done"}
        sent = abort_route.calls.last.request
        assert str(sent.url) == f"{ENDPOINT}/commit?startTs=9&hash=hash&abort=true"
        assert sent.headers["x-auth-token"] == "abc"
        assert "content-type" not in sent.headers

    @respx.mock
    def test_twice_makes_one_call(self, options: dict[str, Any], txn_payload: Any) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/mutate").mock(return_value=httpx.Response(200, json=txn_payload()))
        abort_route = respx.post(url__startswith=f"{ENDPOINT}/commit").mock(return_value=httpx.Response(200, json={}))
        txn = DgraphTransaction(options)

        async def run() -> Any:
            await txn.mutate(mutation=MUTATION)
            await txn.abort()
            return await txn.abort()

        assert asyncio.run(run()) is None
        assert abort_route.call_count == 1

    @respx.mock
    def test_after_commit_is_allowed(self, options: dict[str, Any]) -> None:
        txn = DgraphTransaction(options)

        async def run() -> None:
            await txn.commit()
            await txn.abort()

        asyncio.run(run())
        assert txn.state is TransactionState.ABORTED


# ---------------------------------------------------------------------------
# Implicit abort on transport failure
# ---------------------------------------------------------------------------


class TestImplicitAbort:
    @respx.mock
    def test_abort_failure_does_not_mask_original_error(
        self, options: dict[str, Any], txn_payload: Any
    ) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/mutate").mock(
            side_effect=[httpx.Response(200, json=txn_payload()), httpx.Response(500)]
        )
        abort_route = respx.post(url__startswith=f"{ENDPOINT}/commit").mock(return_value=httpx.Response(503))
        txn = DgraphTransaction(options)

        async def run() -> None:
            await txn.mutate(mutation=MUTATION)
            with pytest.raises(HttpStatusError) as exc_info:
                await txn.mutate(mutation=MUTATION)
            assert exc_info.value.status_code == 500
            assert exc_info.value.service.startswith(f"{ENDPOINT}/mutate")

        asyncio.run(run())
        assert abort_route.call_count == 1
        assert txn.state is TransactionState.ABORTED

    @respx.mock
    def test_connection_error_aborts(self, options: dict[str, Any]) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/mutate").mock(side_effect=httpx.ConnectError("refused"))
        abort_route = respx.post(url__startswith=f"{ENDPOINT}/commit").mock(return_value=httpx.Response(200, json={}))
        txn = DgraphTransaction(options)

        with pytest.raises(ConnectionError):
            asyncio.run(txn.mutate(mutation=MUTATION))
        assert abort_route.call_count == 1
        assert txn.state is TransactionState.ABORTED

    @respx.mock
    def test_invalid_json_aborts(self, options: dict[str, Any]) -> None:
        respx.post(url__startswith=f"{ENDPOINT}/query").mock(return_value=httpx.Response(200, content=b"<html>"))
        txn = DgraphTransaction(options)

        with pytest.raises(SerializationError):
            asyncio.run(txn.query(False, "{ q(func: uid(0x1)) { uid } }"))
        assert txn.state is TransactionState.ABORTED


# ---------------------------------------------------------------------------
# Caller-owned client
# ---------------------------------------------------------------------------


class TestInjectedClient:
    @respx.mock
    def test_uses_given_client(self, options: dict[str, Any], txn_payload: Any) -> None:
        route = respx.post(url__startswith=f"{ENDPOINT}/query").mock(
            return_value=httpx.Response(200, json=txn_payload())
        )

        async def run() -> None:
            async with HttpxHttpClient() as client:
                txn = DgraphTransaction(options, client=client)
                await txn.query(False, "{ a(func: uid(0x1)) { uid } }")
                await txn.query(True, "{ b(func: uid(0x1)) { uid } }")

        asyncio.run(run())
        assert route.call_count == 2

    def test_client_exception_still_aborts(self, options: dict[str, Any], txn_payload: Any) -> None:
        class FlakyClient:
            def __init__(self) -> None:
                self.urls: list[str] = []

            async def post_json(self, url: str, **kwargs: Any) -> Any:
                self.urls.append(url)
                if len(self.urls) == 2:
                    raise RuntimeError("socket closed")
                return txn_payload()

        client = FlakyClient()
        txn = DgraphTransaction(options, client=client)  # type: ignore[arg-type]

        async def run() -> None:
            await txn.mutate(mutation=MUTATION)
            await txn.mutate(mutation=MUTATION)

        with pytest.raises(RuntimeError, match="socket closed"):
            asyncio.run(run())
        assert txn.state is TransactionState.ABORTED
        assert client.urls[-1] == f"{ENDPOINT}/commit?startTs=9&hash=hash&abort=true"
        assert len(client.urls) == 3


class TestMalformedEndpoint:
    def test_invalid_url_is_mapped_and_aborts(self) -> None:
        txn = DgraphTransaction({"api_key": "k", "endpoint": "https://dgraph.example.com/\x01"})

        with pytest.raises(ExternalServiceError):
            asyncio.run(txn.query(False, "{ q(func: uid(0x1)) { uid } }"))
        assert txn.state is TransactionState.ABORTED
