from __future__ import annotations

import json
from typing import Any, Mapping

import httpx
import pytest

from userpager.client.query_client import NETWORK_ONLY, QueryClient
from userpager.client.transport import HttpTransport, LocalTransport
from userpager.errors import TransportError, UserPagerError, ValidationError

ENDPOINT = "http://testserver/graphql"


class _CountingTransport(LocalTransport):
    def __init__(self, gateway) -> None:
        super().__init__(gateway)
        self.calls: list[tuple[str, dict]] = []

    async def request(self, operation: str, variables: Mapping[str, Any]):
        self.calls.append((operation, dict(variables)))
        return await super().request(operation, variables)


@pytest.mark.asyncio
async def test_cache_first_reuses_answered_queries(gateway) -> None:
    transport = _CountingTransport(gateway)
    client = QueryClient(transport)

    first = await client.list_page(3)
    second = await client.list_page(3)
    await client.list_page(4)

    assert first == second
    assert transport.calls == [("listPage", {"page": 3}), ("listPage", {"page": 4})]
    assert client.is_cached("listPage", {"page": 3})


@pytest.mark.asyncio
async def test_network_only_always_hits_transport(gateway) -> None:
    transport = _CountingTransport(gateway)
    client = QueryClient(transport, fetch_policy=NETWORK_ONLY)

    await client.find_by_key("user5")
    await client.find_by_key("user5")

    assert len(transport.calls) == 2


@pytest.mark.asyncio
async def test_clear_cache_forces_refetch(gateway) -> None:
    transport = _CountingTransport(gateway)
    client = QueryClient(transport)

    await client.spammy_users()
    client.clear_cache()
    await client.spammy_users()

    assert len(transport.calls) == 2


@pytest.mark.asyncio
async def test_absent_user_is_none(client) -> None:
    assert await client.find_by_key("user999") is None
    found = await client.find_by_key("user57")
    assert found is not None and found.username == "user57"


@pytest.mark.asyncio
async def test_validation_errors_raise_and_are_not_cached(gateway) -> None:
    transport = _CountingTransport(gateway)
    client = QueryClient(transport)

    with pytest.raises(ValidationError):
        await client.query("listPage", {"page": "x"})

    assert not client.is_cached("listPage", {"page": "x"})


def test_unknown_fetch_policy_rejected(gateway) -> None:
    with pytest.raises(ValueError):
        QueryClient(LocalTransport(gateway), fetch_policy="cache-and-network")


def _http_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_http_transport_posts_operation_and_variables() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"data": {"findByKey": None}})

    async with _http_client(handler) as http:
        client = QueryClient(HttpTransport(ENDPOINT, client=http))
        assert await client.find_by_key("user999") is None

    assert seen == [{"operationName": "findByKey", "variables": {"username": "user999"}}]


@pytest.mark.asyncio
async def test_http_transport_maps_bad_request_envelope_to_validation_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={
                "data": None,
                "errors": [{"message": "bad page", "extensions": {"code": "BAD_USER_INPUT"}}],
            },
        )

    async with _http_client(handler) as http:
        client = QueryClient(HttpTransport(ENDPOINT, client=http))
        with pytest.raises(ValidationError, match="bad page"):
            await client.list_page(1)


@pytest.mark.asyncio
async def test_http_transport_wraps_connection_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _http_client(handler) as http:
        client = QueryClient(HttpTransport(ENDPOINT, client=http))
        with pytest.raises(TransportError, match="connection refused"):
            await client.list_page(1)


@pytest.mark.asyncio
async def test_http_transport_server_error_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    async with _http_client(handler) as http:
        transport = HttpTransport(ENDPOINT, client=http)
        with pytest.raises(TransportError, match="HTTP 502"):
            await transport.request("listPage", {"page": 1})


@pytest.mark.asyncio
async def test_http_transport_does_not_retry_by_default() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        raise httpx.ConnectError("down", request=request)

    async with _http_client(handler) as http:
        with pytest.raises(TransportError):
            await HttpTransport(ENDPOINT, client=http).request("listPage", {"page": 1})

    assert calls == 1


@pytest.mark.asyncio
async def test_http_transport_retries_when_configured() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        if calls < 3:
            raise httpx.ConnectError("flaky", request=request)
        return httpx.Response(200, json={"data": {"listPage": []}})

    async with _http_client(handler) as http:
        envelope = await HttpTransport(ENDPOINT, attempts=3, backoff=0, client=http).request(
            "listPage", {"page": 11}
        )

    assert envelope == {"data": {"listPage": []}}
    assert calls == 3


@pytest.mark.asyncio
async def test_non_validation_errors_raise_base_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": None, "errors": [{"message": "boom"}]})

    async with _http_client(handler) as http:
        client = QueryClient(HttpTransport(ENDPOINT, client=http))
        with pytest.raises(UserPagerError, match="boom") as excinfo:
            await client.spammy_users()

    assert not isinstance(excinfo.value, ValidationError)
