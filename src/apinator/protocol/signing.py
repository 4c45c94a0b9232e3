"""Canonical string construction and HMAC-SHA256 signing.

The service authenticates three message shapes, each with its own
order-sensitive join rule:

- API request:  ``"{timestamp}\\n{method}\\n{path}\\n{body_md5}"``
- Channel auth: ``"{socket_id}:{channel_name}[:{channel_data}]"``
- Webhook:      ``"{timestamp}.{payload}"``

Every signature is the lowercase hex HMAC-SHA256 of the UTF-8 canonical
string keyed by the app secret.  Changing field order or separators here
invalidates every signature the service will accept.

MD5 is only a body fingerprint inside the request canonical string; it is
never used as the outer signature.
"""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional, Union

Secret = Union[str, bytes]
Payload = Union[str, bytes]


def _to_bytes(value: Payload) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def _hmac_hex(secret: Secret, message: bytes) -> str:
    return hmac.new(_to_bytes(secret), message, hashlib.sha256).hexdigest()


# ---------------------------------------------------------------------------
# Body fingerprint
# ---------------------------------------------------------------------------


def md5_hex(data: Payload) -> str:
    """Return the lowercase hex MD5 digest of *data* (UTF-8 for ``str``)."""
    return hashlib.md5(_to_bytes(data)).hexdigest()


def body_digest(body: Payload) -> str:
    """Fingerprint a request body for the canonical request string.

    An empty body yields the empty string, NOT the MD5 of zero bytes.
    """
    if not body:
        return ""
    return md5_hex(body)


# ---------------------------------------------------------------------------
# Canonical strings
# ---------------------------------------------------------------------------


def canonical_request_string(
    method: str, path: str, body: Payload, timestamp: int
) -> str:
    """Build the newline-joined canonical string for an API request.

    *path* must already be stripped of its query string; see
    :func:`apinator.sdk.request_auth.canonical_path`.
    """
    return f"{int(timestamp)}\n{method}\n{path}\n{body_digest(body)}"


def canonical_channel_string(
    socket_id: str, channel_name: str, channel_data: Optional[str] = None
) -> str:
    """Build the colon-joined canonical string for a channel subscription.

    ``channel_data`` is appended verbatim; an empty payload counts as absent.
    """
    if channel_data:
        return f"{socket_id}:{channel_name}:{channel_data}"
    return f"{socket_id}:{channel_name}"


def canonical_webhook_bytes(timestamp: str, payload: Payload) -> bytes:
    """Build the dot-joined canonical bytes for a webhook delivery.

    The raw payload is used exactly as received, so ``bytes`` bodies are
    not round-tripped through a text decoding.
    """
    return _to_bytes(timestamp) + b"." + _to_bytes(payload)


def canonical_webhook_string(timestamp: str, payload: str) -> str:
    """Text form of :func:`canonical_webhook_bytes`."""
    return f"{timestamp}.{payload}"


# ---------------------------------------------------------------------------
# Signing
# ---------------------------------------------------------------------------


def sign_request(
    secret: Secret, method: str, path: str, body: Payload, timestamp: int
) -> str:
    """Sign an API request.

    Args:
        secret: App secret.
        method: HTTP method, already uppercase (``"POST"``, ``"GET"``).
        path: Request path without query string (``/apps/123/events``).
        body: Request body exactly as sent on the wire.
        timestamp: Unix time in seconds, also sent as ``X-Realtime-Timestamp``.

    Returns:
        64-character lowercase hex HMAC-SHA256 signature.
    """
    canonical = canonical_request_string(method, path, body, timestamp)
    return _hmac_hex(secret, canonical.encode("utf-8"))


def sign_channel(
    secret: Secret,
    socket_id: str,
    channel_name: str,
    channel_data: Optional[str] = None,
) -> str:
    """Sign a channel subscription for *socket_id*."""
    canonical = canonical_channel_string(socket_id, channel_name, channel_data)
    return _hmac_hex(secret, canonical.encode("utf-8"))


def sign_webhook_payload(secret: Secret, timestamp: str, payload: Payload) -> str:
    """Sign a webhook body with the raw ``X-Realtime-Timestamp`` string."""
    return _hmac_hex(secret, canonical_webhook_bytes(timestamp, payload))
