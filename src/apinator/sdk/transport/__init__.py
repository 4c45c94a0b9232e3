"""Apinator SDK transport layer."""

from apinator.sdk.transport.base import TransportBase
from apinator.sdk.transport.http import HTTPTransport


def create_transport(config, clock=None, transport=None) -> TransportBase:
    """Factory to create the HTTP transport for a :class:`ClientConfig`."""
    return HTTPTransport(
        host=config.host,
        key=config.key,
        secret=config.secret,
        timeout=config.timeout,
        clock=clock,
        transport=transport,
    )


__all__ = [
    "TransportBase",
    "HTTPTransport",
    "create_transport",
]
