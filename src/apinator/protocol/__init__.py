"""Apinator protocol -- signing rules, wire constants, and errors.

Public API re-exports for ``apinator.protocol``.
"""

from apinator.protocol.types import (
    HEADER_KEY,
    HEADER_TIMESTAMP,
    HEADER_SIGNATURE,
    SIGNATURE_PREFIX,
    HOST_TEMPLATE,
    ChannelAuthResponse,
    ChannelInfo,
    TriggerParams,
    compact_json,
)

from apinator.protocol.errors import (
    RealtimeError,
    AuthenticationError,
    ValidationError,
    ApiError,
)

from apinator.protocol.signing import (
    md5_hex,
    body_digest,
    canonical_request_string,
    canonical_channel_string,
    canonical_webhook_bytes,
    canonical_webhook_string,
    sign_request,
    sign_channel,
    sign_webhook_payload,
)

__all__ = [
    # Types
    "HEADER_KEY",
    "HEADER_TIMESTAMP",
    "HEADER_SIGNATURE",
    "SIGNATURE_PREFIX",
    "HOST_TEMPLATE",
    "ChannelAuthResponse",
    "ChannelInfo",
    "TriggerParams",
    "compact_json",
    # Errors
    "RealtimeError",
    "AuthenticationError",
    "ValidationError",
    "ApiError",
    # Signing
    "md5_hex",
    "body_digest",
    "canonical_request_string",
    "canonical_channel_string",
    "canonical_webhook_bytes",
    "canonical_webhook_string",
    "sign_request",
    "sign_channel",
    "sign_webhook_payload",
]
