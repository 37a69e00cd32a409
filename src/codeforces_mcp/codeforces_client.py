"""Async Codeforces REST API client using httpx.

Features:
- One long-lived AsyncClient, owned by the caller or created on demand
- Envelope check: every response is ``{status, comment?, result?}``
- Protocol failures (status != OK) kept apart from transport failures
- Single attempt per call, no retries
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

_CODEFORCES_API = "https://codeforces.com/api"
_DEFAULT_TIMEOUT = 10.0
_USER_AGENT = "Codeforces-MCP-Server/1.0.0"

log = logging.getLogger("codeforces-mcp")


class CodeforcesError(Exception):
    """Base class for every failure reported by :class:`CodeforcesClient`."""


class CodeforcesAPIError(CodeforcesError):
    """The API answered with an envelope whose status is not ``OK``."""

    def __init__(self, comment: str | None) -> None:
        self.comment = comment
        super().__init__(f"API Error: {comment or 'Unknown error'}")


class CodeforcesTransportError(CodeforcesError):
    """The request never produced a usable envelope."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Request failed: {reason}")


def _make_http_client(base_url: str, timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        headers={"User-Agent": _USER_AGENT},
        timeout=timeout,
    )


def _flag(value: bool) -> str:
    return "true" if value else "false"


class CodeforcesClient:
    """Thin wrapper around the Codeforces API.

    Pass an existing ``httpx.AsyncClient`` to share a connection pool or to
    substitute a mock transport; otherwise one is created and closed by
    :meth:`aclose`. *base_url* and *timeout* only apply to a client created
    here.
    """

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        *,
        base_url: str = _CODEFORCES_API,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_http = http is None
        self._http = http if http is not None else _make_http_client(base_url, timeout)

    async def __aenter__(self) -> CodeforcesClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def call(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET ``/<endpoint>`` and return the envelope's ``result``.

        Raises:
            CodeforcesAPIError: the envelope status is not ``OK``.
            CodeforcesTransportError: network failure, or a response without
                a decodable envelope.
        """
        log.debug("GET %s params=%s", endpoint, params)
        try:
            resp = await self._http.get(endpoint, params=dict(params or {}))
        except httpx.HTTPError as exc:
            log.warning("Codeforces %s failed: %s", endpoint, type(exc).__name__)
            raise CodeforcesTransportError(str(exc) or type(exc).__name__) from exc

        envelope = _decode_envelope(resp)
        if envelope is None:
            if resp.is_success:
                raise CodeforcesTransportError(f"invalid JSON envelope from {endpoint}")
            raise CodeforcesTransportError(f"HTTP {resp.status_code} {resp.reason_phrase}".strip())

        if envelope.get("status") != "OK":
            log.warning("Codeforces %s returned %s: %s", endpoint, envelope.get("status"), envelope.get("comment"))
            raise CodeforcesAPIError(envelope.get("comment"))
        return envelope.get("result")

    # -- endpoint wrappers ---------------------------------------------------

    async def user_info(self, handles: Iterable[str]) -> Any:
        handles = list(handles)
        if not handles:
            raise ValueError("handles must not be empty")
        return await self.call("user.info", {"handles": ";".join(handles)})

    async def user_status(self, handle: str, from_: int = 1, count: int = 10) -> Any:
        return await self.call("user.status", {"handle": handle, "from": from_, "count": count})

    async def user_rating(self, handle: str) -> Any:
        return await self.call("user.rating", {"handle": handle})

    async def contest_list(self, gym: bool = False) -> Any:
        return await self.call("contest.list", {"gym": _flag(gym)})

    async def contest_standings(self, contest_id: int, from_: int = 1, count: int = 10) -> Any:
        return await self.call(
            "contest.standings",
            {"contestId": contest_id, "from": from_, "count": count},
        )

    async def problemset_problems(self, tags: Iterable[str] = ()) -> Any:
        params: dict[str, Any] = {}
        tags = list(tags)
        if tags:
            params["tags"] = ";".join(tags)
        return await self.call("problemset.problems", params)


def _decode_envelope(resp: httpx.Response) -> dict[str, Any] | None:
    """Return the response body if it is a Codeforces envelope, else None."""
    try:
        data = resp.json()
    except ValueError:
        return None
    if not isinstance(data, dict) or "status" not in data:
        return None
    return data
