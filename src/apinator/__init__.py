"""Apinator -- server SDK for the Apinator realtime messaging service.

Top-level convenience re-exports::

    from apinator import Apinator, verify_webhook
    from apinator.protocol import sign_request, sign_channel  # signing primitives
"""

__version__ = "0.1.0"

from apinator.protocol import (
    ApiError,
    AuthenticationError,
    ChannelAuthResponse,
    ChannelInfo,
    RealtimeError,
    TriggerParams,
    ValidationError,
    md5_hex,
    sign_channel,
    sign_request,
    sign_webhook_payload,
)
from apinator.sdk import (
    Apinator,
    ClientConfig,
    authenticate_channel,
    parse_webhook,
    verify_webhook,
)

__all__ = [
    "__version__",
    "Apinator",
    "ClientConfig",
    "authenticate_channel",
    "verify_webhook",
    "parse_webhook",
    "sign_request",
    "sign_channel",
    "sign_webhook_payload",
    "md5_hex",
    "ChannelAuthResponse",
    "ChannelInfo",
    "TriggerParams",
    "RealtimeError",
    "AuthenticationError",
    "ValidationError",
    "ApiError",
]
