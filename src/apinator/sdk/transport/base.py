"""Abstract transport interface for REST API communication."""

from __future__ import annotations

import abc
import asyncio
from typing import Any, Optional


class TransportBase(abc.ABC):
    """Abstract transport layer for the Apinator REST API.

    Implementations own request signing headers, the network call, and
    mapping of HTTP failures onto the SDK exception hierarchy.
    """

    @abc.abstractmethod
    async def connect(self) -> None:
        """Open pooled connections to the API host."""

    @abc.abstractmethod
    async def disconnect(self) -> None:
        """Close pooled connections."""

    @property
    def bound_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        """Event loop pooled connections are tied to, or ``None`` if unpooled."""
        return None

    @abc.abstractmethod
    async def request(self, method: str, path: str, body: str = "") -> dict[str, Any]:
        """Send a signed request and return the decoded JSON response."""
