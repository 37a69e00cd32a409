"""Shared pytest fixtures for the codeforces-mcp test suite."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from codeforces_mcp.codeforces_client import CodeforcesClient


def envelope_response(
    result: Any = None,
    *,
    status: str = "OK",
    comment: str | None = None,
    status_code: int = 200,
) -> httpx.Response:
    body: dict[str, Any] = {"status": status}
    if comment is not None:
        body["comment"] = comment
    if status == "OK":
        body["result"] = result
    return httpx.Response(
        status_code=status_code,
        content=json.dumps(body).encode(),
        headers={"content-type": "application/json"},
    )


class FakeCodeforces:
    """Mock transport handler: canned responses per endpoint, records requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def ok(self, endpoint: str, result: Any) -> None:
        self.routes[endpoint] = lambda request: envelope_response(result)

    def failed(self, endpoint: str, comment: str | None, status_code: int = 400) -> None:
        self.routes[endpoint] = lambda request: envelope_response(
            status="FAILED", comment=comment, status_code=status_code
        )

    def raw(self, endpoint: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[endpoint] = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        endpoint = request.url.path.rsplit("/", 1)[-1]
        handler = self.routes.get(endpoint)
        if handler is None:
            return httpx.Response(404, text="not found")
        return handler(request)

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def fake_api() -> FakeCodeforces:
    return FakeCodeforces()


@pytest_asyncio.fixture
async def client(fake_api: FakeCodeforces) -> AsyncIterator[CodeforcesClient]:
    """A CodeforcesClient whose HTTP traffic goes to *fake_api*."""
    async with httpx.AsyncClient(
        base_url="https://codeforces.com/api",
        transport=httpx.MockTransport(fake_api),
    ) as http:
        yield CodeforcesClient(http)
