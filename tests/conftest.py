"""Pytest configuration for the Milton client tests."""

from __future__ import annotations

import asyncio
import inspect
import json
import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from milton_client.config import ApiConfig  # noqa: E402

API_ROOT = "http://milton.test/api/"


def pytest_configure(config: pytest.Config) -> None:
    """Register markers used throughout the test suite."""

    config.addinivalue_line(
        "markers", "asyncio: mark coroutine tests to execute via asyncio loop"
    )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute coroutine tests within a dedicated event loop."""

    test_function = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_function):
        return None

    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        funcargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames
        }
        loop.run_until_complete(test_function(**funcargs))
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True


class RecordingBackend:
    """Route requests to canned responses and record what was sent."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = {}

    def route(
        self,
        method: str,
        path: str,
        handler: Callable[[httpx.Request], httpx.Response] | httpx.Response,
    ) -> None:
        if isinstance(handler, httpx.Response):
            response = handler
            self._routes[(method, path)] = lambda _request: response
        else:
            self._routes[(method, path)] = handler

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.method == method and request.url.path == path
        ]

    def bodies(self, method: str, path: str) -> list[dict]:
        return [json.loads(request.content) for request in self.calls(method, path)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "not-found"})
        return route(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler), base_url=API_ROOT
        )


@pytest.fixture
def backend() -> RecordingBackend:
    """Return a recording backend with no routes configured."""

    return RecordingBackend()


@pytest.fixture
def api_config() -> ApiConfig:
    """Return a configuration pointing at the mock backend."""

    return ApiConfig(
        root_url=API_ROOT,
        login_url="http://milton.test/auth/start",
        snapshot_url="http://milton.test/control/snapshot",
    )
