"""Shared utilities for retrieving the raw dataset over HTTP."""

from __future__ import annotations

from typing import Any, Mapping

import httpx
from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential
from tenacity.wait import wait_base

DEFAULT_TIMEOUT_SECONDS = 30.0
# The dashboard loads its dataset once; a failed fetch is terminal unless configured otherwise.
DEFAULT_ATTEMPTS = 1
_DEFAULT_WAIT = wait_exponential(min=1, max=16)


Headers = Mapping[str, str] | None
Params = Mapping[str, Any] | None


async def _get(
    url: str,
    *,
    headers: Headers,
    params: Params,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None,
) -> httpx.Response:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        response = await client.get(url, headers=headers, params=params)

    response.raise_for_status()
    return response


async def fetch_response(
    url: str,
    *,
    headers: Headers = None,
    params: Params = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    attempts: int = DEFAULT_ATTEMPTS,
    wait: wait_base = _DEFAULT_WAIT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """Execute a GET request, retrying with exponential backoff up to ``attempts`` times.

    Non-success statuses raise ``httpx.HTTPStatusError`` and transport problems
    raise ``httpx.TransportError`` once the attempts are exhausted. ``transport``
    is forwarded to ``httpx.AsyncClient`` so callers can substitute a mock.
    """

    if attempts < 1:
        raise ValueError("attempts must be at least 1")
    async for attempt in AsyncRetrying(
        wait=wait, stop=stop_after_attempt(attempts), reraise=True
    ):
        with attempt:
            return await _get(
                url, headers=headers, params=params, timeout=timeout, transport=transport
            )
    raise AssertionError("unreachable")  # pragma: no cover


async def fetch_json(url: str, **kwargs: Any) -> Any:
    """Fetch ``url`` and return the decoded JSON payload."""

    response = await fetch_response(url, **kwargs)
    return response.json()


async def fetch_text(url: str, **kwargs: Any) -> str:
    """Fetch ``url`` and return the body decoded as text."""

    response = await fetch_response(url, **kwargs)
    return response.text


__all__ = [
    "DEFAULT_ATTEMPTS",
    "DEFAULT_TIMEOUT_SECONDS",
    "fetch_json",
    "fetch_response",
    "fetch_text",
]
