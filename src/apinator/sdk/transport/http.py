"""Signed HTTP transport via httpx with connection pooling."""

from __future__ import annotations

import asyncio
import json
import logging
import math
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Optional

import httpx

from apinator.protocol.errors import (
    ApiError,
    AuthenticationError,
    RealtimeError,
    ValidationError,
)
from apinator.sdk.request_auth import build_auth_headers
from apinator.sdk.transport.base import TransportBase

logger = logging.getLogger(__name__)

_AUTH_STATUSES = {401, 403}
_VALIDATION_STATUSES = {400, 422}


def _problem_message(text: str) -> str:
    """Extract a message from an RFC 7807 problem document, else the raw text."""
    try:
        problem = json.loads(text)
    except ValueError:
        return text
    if not isinstance(problem, dict):
        return text
    detail = problem.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    title = problem.get("title")
    if isinstance(title, str) and title:
        return title
    return text


def raise_for_response(status: int, text: str) -> None:
    """Map a non-2xx response onto the SDK exception hierarchy."""
    message = _problem_message(text)
    if status in _AUTH_STATUSES:
        raise AuthenticationError(
            message or "Authentication failed", status=status, body=text
        )
    if status in _VALIDATION_STATUSES:
        raise ValidationError(message or "Validation failed", status=status, body=text)
    raise ApiError(message or f"Request failed with status {status}", status, text)


class HTTPTransport(TransportBase):
    """Signed REST transport using httpx AsyncClient.

    Every request carries ``X-Realtime-Key``, ``X-Realtime-Timestamp`` and
    ``X-Realtime-Signature``.  The query string is sent on the wire but
    never signed.

    ``connect()`` creates a single ``httpx.AsyncClient`` reused for all
    requests (connection pooling).  Requests made before ``connect()`` use
    a short-lived client for that one call, which keeps the sync wrappers
    safe across event loops.
    """

    def __init__(
        self,
        host: str,
        key: str,
        secret: str,
        *,
        timeout: float = 30.0,
        clock: Optional[Callable[[], float]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._host = host
        self._key = key
        self._secret = secret
        self._timeout = timeout
        self._clock = clock or time.time
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    def _new_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._host,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def connect(self) -> None:
        """Create the shared httpx AsyncClient."""
        if self._client is None:
            self._client = self._new_client()
            self._loop = asyncio.get_running_loop()

    async def disconnect(self) -> None:
        """Close the httpx client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            self._loop = None

    @property
    def bound_loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with self._new_client() as client:
            yield client

    async def request(self, method: str, path: str, body: str = "") -> dict[str, Any]:
        """Send a signed request and return the decoded JSON response.

        Raises:
            AuthenticationError: 401 or 403.
            ValidationError: 400 or 422.
            ApiError: Any other non-2xx status.
            RealtimeError: Network failure or an unparsable success body.
        """
        timestamp = math.floor(self._clock())
        headers = build_auth_headers(self._key, self._secret, method, path, body, timestamp)
        if body:
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, path)
        try:
            async with self._session() as client:
                resp = await client.request(
                    method,
                    path,
                    headers=headers,
                    content=body.encode("utf-8") if body else None,
                )
        except httpx.HTTPError as exc:
            raise RealtimeError(f"Network error: {exc}") from exc

        text = resp.text
        if not resp.is_success:
            logger.warning(
                "Apinator API %s %s failed with status %d", method, path, resp.status_code
            )
            raise_for_response(resp.status_code, text)

        if text == "":
            return {}
        try:
            return json.loads(text)
        except ValueError:
            raise RealtimeError(f"Failed to parse response: {text}") from None
