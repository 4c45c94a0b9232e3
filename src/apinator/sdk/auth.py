"""Channel subscription authorization.

The returned token is relayed by the application to a subscribing client
socket, which presents it when joining a private or presence channel.

Usage::

    from apinator.sdk.auth import authenticate_channel

    response = authenticate_channel(secret, key, socket_id, "private-chat")
    return JSONResponse(response.to_dict())
"""

from __future__ import annotations

from typing import Optional

from apinator.protocol.signing import Secret, sign_channel
from apinator.protocol.types import ChannelAuthResponse


def authenticate_channel(
    secret: Secret,
    key: str,
    socket_id: str,
    channel_name: str,
    channel_data: Optional[str] = None,
) -> ChannelAuthResponse:
    """Authorize *socket_id* to subscribe to *channel_name*.

    Args:
        secret: App secret.
        key: App key, embedded in the token as ``"{key}:{signature}"``.
        socket_id: Socket id reported by the subscribing client.
        channel_name: Channel to authorize (``private-*`` or ``presence-*``).
        channel_data: Presence payload (a JSON string with ``user_id`` and
            optional ``user_info``).  Signed and echoed back verbatim.

    Returns:
        A :class:`ChannelAuthResponse`.  ``channel_data`` is carried only
        when it was supplied, even if it is the empty string.
    """
    signature = sign_channel(secret, socket_id, channel_name, channel_data)
    return ChannelAuthResponse(
        auth=f"{key}:{signature}",
        channel_data=channel_data,
    )
