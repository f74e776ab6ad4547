"""Tests for the cached session resolver."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from milton_client.models import UserInfo
from milton_client.result import Just, Nothing
from milton_client.session import (
    Available,
    NotAvailable,
    NotRequested,
    SessionResolver,
)

IDENTIFY = "/api/auth/identify"

SESSION_PAYLOAD = {
    "roles": [{"id": "r1", "name": "admin"}],
    "user": {
        "user_id": "u-1",
        "picture": "https://example.com/u-1.png",
        "nickname": "milton",
        "email": "milton@example.com",
    },
}


def _identify_response(session: dict | None) -> httpx.Response:
    body = {"ok": True, "timestamp": "2024-01-01T00:00:00Z"}
    if session is not None:
        body["session"] = session
    return httpx.Response(200, json=body)


@pytest.mark.asyncio
async def test_logged_in_user_is_cached(backend) -> None:
    """The first call resolves the user; later calls reuse the cached state."""

    backend.route("GET", IDENTIFY, _identify_response(SESSION_PAYLOAD))
    resolver = SessionResolver(backend.client())
    assert resolver.state == NotRequested()

    first = await resolver.async_current()
    second = await resolver.async_current()

    expected = UserInfo.model_validate(SESSION_PAYLOAD)
    assert first == Just(expected)
    assert second == Just(expected)
    assert resolver.state == Available(expected)
    assert len(backend.calls("GET", IDENTIFY)) == 1


@pytest.mark.asyncio
async def test_absent_session_is_not_available(backend) -> None:
    """A successful response without a session resolves to Nothing."""

    backend.route("GET", IDENTIFY, _identify_response(None))
    resolver = SessionResolver(backend.client())

    assert await resolver.async_current() == Nothing()
    assert resolver.state == NotAvailable()


@pytest.mark.asyncio
async def test_null_session_is_not_available(backend) -> None:
    """An explicit null session resolves to Nothing."""

    backend.route(
        "GET",
        IDENTIFY,
        httpx.Response(200, json={"ok": False, "timestamp": "t", "session": None}),
    )
    resolver = SessionResolver(backend.client())

    assert await resolver.async_current() == Nothing()
    assert resolver.state == NotAvailable()


@pytest.mark.asyncio
async def test_non_200_status_is_cached_as_not_available(backend) -> None:
    """A rejecting status code yields Nothing without further requests."""

    backend.route("GET", IDENTIFY, httpx.Response(401, json={"ok": False}))
    resolver = SessionResolver(backend.client())

    assert await resolver.async_current() == Nothing()
    assert await resolver.async_current() == Nothing()
    assert await resolver.async_current() == Nothing()
    assert resolver.state == NotAvailable()
    assert len(backend.calls("GET", IDENTIFY)) == 1


@pytest.mark.asyncio
async def test_malformed_payload_is_not_available(backend) -> None:
    """A body that is not valid JSON is treated as having no session."""

    backend.route("GET", IDENTIFY, httpx.Response(200, content=b"<html>"))
    resolver = SessionResolver(backend.client())

    assert await resolver.async_current() == Nothing()
    assert resolver.state == NotAvailable()


@pytest.mark.asyncio
async def test_invalid_session_shape_is_not_available(backend) -> None:
    """A session object missing required fields is treated as absent."""

    backend.route("GET", IDENTIFY, _identify_response({"roles": []}))
    resolver = SessionResolver(backend.client())

    assert await resolver.async_current() == Nothing()
    assert resolver.state == NotAvailable()


@pytest.mark.asyncio
async def test_transport_failure_is_swallowed(backend) -> None:
    """Connection errors resolve to Nothing rather than raising."""

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    backend.route("GET", IDENTIFY, refuse)
    resolver = SessionResolver(backend.client())

    assert await resolver.async_current() == Nothing()
    assert await resolver.async_current() == Nothing()
    assert resolver.state == NotAvailable()
    assert len(backend.calls("GET", IDENTIFY)) == 1


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_request() -> None:
    """Callers racing the first resolution await the same request."""

    release = asyncio.Event()
    requests: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        await release.wait()
        return _identify_response(SESSION_PAYLOAD)

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://milton.test/api/"
    )
    resolver = SessionResolver(client)

    waiters = [asyncio.ensure_future(resolver.async_current()) for _ in range(5)]
    await asyncio.sleep(0)
    release.set()
    results = await asyncio.gather(*waiters)

    expected = Just(UserInfo.model_validate(SESSION_PAYLOAD))
    assert results == [expected] * 5
    assert len(requests) == 1


@pytest.mark.asyncio
async def test_cancelled_caller_does_not_cancel_shared_request() -> None:
    """Cancelling one waiting caller leaves the shared resolution running."""

    release = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        await release.wait()
        return _identify_response(SESSION_PAYLOAD)

    client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="http://milton.test/api/"
    )
    resolver = SessionResolver(client)

    cancelled = asyncio.ensure_future(resolver.async_current())
    survivor = asyncio.ensure_future(resolver.async_current())
    await asyncio.sleep(0)
    cancelled.cancel()
    release.set()

    assert await survivor == Just(UserInfo.model_validate(SESSION_PAYLOAD))
    assert cancelled.cancelled()
    assert isinstance(resolver.state, Available)


def test_session_state_case_of_is_exhaustive() -> None:
    """Each session variant dispatches to its own handler."""

    user = UserInfo.model_validate(SESSION_PAYLOAD)
    handlers = {
        "not_requested": lambda: "not-requested",
        "available": lambda info: f"available:{info.user.user_id}",
        "not_available": lambda: "not-available",
    }

    assert NotRequested().case_of(**handlers) == "not-requested"
    assert Available(user).case_of(**handlers) == "available:u-1"
    assert NotAvailable().case_of(**handlers) == "not-available"
