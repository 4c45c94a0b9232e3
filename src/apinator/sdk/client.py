"""Apinator client -- the primary SDK interface.

Triggers events, authorizes channel subscriptions, reads channel state,
and verifies webhooks for one app.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx

from apinator.protocol.types import ChannelAuthResponse, ChannelInfo, TriggerParams
from apinator.sdk._sync import _run_sync
from apinator.sdk.auth import authenticate_channel
from apinator.sdk.config import ClientConfig
from apinator.sdk.transport import TransportBase, create_transport
from apinator.sdk.webhook_verify import parse_webhook, verify_webhook

logger = logging.getLogger(__name__)


def _encode_component(value: str) -> str:
    """Percent-encode a single path or query component."""
    return quote(value, safe="!'()*")


class Apinator:
    """Server-side client for one Apinator app.

    Usage::

        client = Apinator(app_id="123", key="my-key", secret="my-secret", cluster="eu")
        await client.trigger("order-placed", {"id": 1}, channel="orders")
        auth = client.authenticate_channel(socket_id, "private-chat")

    Async context manager (pooled connections)::

        async with Apinator() as client:  # credentials from APINATOR_* env vars
            channels = await client.get_channels(prefix="presence-")

    Sync usage::

        client = Apinator()
        client.trigger_sync("order-placed", "{}", channel="orders")
    """

    def __init__(
        self,
        app_id: str | None = None,
        key: str | None = None,
        secret: str | None = None,
        cluster: str | None = None,
        *,
        host: str | None = None,
        timeout: float | None = None,
        clock: Optional[Callable[[], float]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Create a client.  No I/O happens here."""
        self._config = ClientConfig(
            app_id=app_id,
            key=key,
            secret=secret,
            cluster=cluster,
            host=host,
            timeout=timeout,
        )
        self._clock = clock or time.time
        self._transport: TransportBase = create_transport(
            self._config, clock=self._clock, transport=transport
        )

    # -- Properties ----------------------------------------------------------

    @property
    def app_id(self) -> str:
        return self._config.app_id

    @property
    def key(self) -> str:
        return self._config.key

    @property
    def host(self) -> str:
        """Base URL of the REST API (e.g. ``https://ws-eu.apinator.io``)."""
        return self._config.host

    # -- Lifecycle -----------------------------------------------------------

    async def connect(self) -> None:
        """Open a pooled HTTP client.  Optional -- requests work without it."""
        await self._transport.connect()

    async def close(self) -> None:
        """Close pooled connections."""
        await self._transport.disconnect()

    async def __aenter__(self) -> Apinator:
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # -- Events --------------------------------------------------------------

    async def trigger(
        self,
        name: str,
        data: Any,
        *,
        channel: str | None = None,
        channels: list[str] | None = None,
        socket_id: str | None = None,
    ) -> None:
        """Trigger event *name* on one channel or several.

        Args:
            name: Event name.
            data: Event payload.  Strings are sent as-is; anything else is
                encoded as compact JSON.
            channel: Single channel (mutually exclusive with ``channels``).
            channels: Several channels (mutually exclusive with ``channel``).
            socket_id: Connection to exclude from delivery, usually the
                socket that caused the event.

        Raises:
            ValidationError: Neither or both of ``channel``/``channels``
                given (raised before any request), or the API returned 400/422.
            AuthenticationError: The API rejected the request signature.
            ApiError: Any other error status.
        """
        params = TriggerParams(
            name=name,
            data=data,
            channel=channel,
            channels=channels,
            socket_id=socket_id,
        )
        body = params.to_body()
        await self._transport.request("POST", f"/apps/{self.app_id}/events", body)
        logger.debug("Triggered %s", name)

    # -- Channels ------------------------------------------------------------

    def authenticate_channel(
        self,
        socket_id: str,
        channel_name: str,
        channel_data: str | None = None,
    ) -> ChannelAuthResponse:
        """Authorize a private or presence channel subscription.

        Send ``result.to_dict()`` back to the subscribing client as JSON.
        """
        return authenticate_channel(
            self._config.secret, self.key, socket_id, channel_name, channel_data
        )

    async def get_channels(self, prefix: str | None = None) -> list[ChannelInfo]:
        """List occupied channels, optionally only those starting with *prefix*."""
        path = f"/apps/{self.app_id}/channels"
        if prefix:
            path += f"?filter_by_prefix={_encode_component(prefix)}"
        data = await self._transport.request("GET", path)
        return [ChannelInfo.from_dict(c) for c in data.get("channels") or []]

    async def get_channel(self, channel_name: str) -> ChannelInfo:
        """Fetch a single channel.  A missing channel raises ``ApiError`` (404)."""
        path = f"/apps/{self.app_id}/channels/{_encode_component(channel_name)}"
        data = await self._transport.request("GET", path)
        return ChannelInfo.from_dict(data)

    # -- Webhooks ------------------------------------------------------------

    def verify_webhook(
        self,
        headers: Any,
        body: str | bytes,
        max_age: float | None = None,
    ) -> bool:
        """Return ``True`` if the webhook was signed with this app's secret."""
        return verify_webhook(
            self._config.secret, headers, body, max_age, now=self._clock
        )

    def parse_webhook(
        self,
        headers: Any,
        body: str | bytes,
        max_age: float | None = None,
    ) -> Any:
        """Verify a webhook and return its decoded JSON body."""
        return parse_webhook(
            self._config.secret, headers, body, max_age, now=self._clock
        )

    # -- Sync wrappers -------------------------------------------------------
    # Unavailable between connect() and close(): the pooled client belongs
    # to the loop connect() ran on.

    def trigger_sync(self, name: str, data: Any, **kwargs) -> None:
        """Synchronous wrapper for :meth:`trigger`."""
        _run_sync(self.trigger(name, data, **kwargs), bound_loop=self._transport.bound_loop)

    def get_channels_sync(self, prefix: str | None = None) -> list[ChannelInfo]:
        """Synchronous wrapper for :meth:`get_channels`."""
        return _run_sync(
            self.get_channels(prefix), bound_loop=self._transport.bound_loop
        )

    def get_channel_sync(self, channel_name: str) -> ChannelInfo:
        """Synchronous wrapper for :meth:`get_channel`."""
        return _run_sync(
            self.get_channel(channel_name), bound_loop=self._transport.bound_loop
        )

    def close_sync(self) -> None:
        """Synchronous wrapper for :meth:`close`."""
        _run_sync(self.close(), bound_loop=self._transport.bound_loop)

    def __repr__(self) -> str:
        return f"Apinator(app_id={self.app_id!r}, key={self.key!r}, host={self.host!r})"
