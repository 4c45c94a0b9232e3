"""Receiver-side webhook signature verification.

Small utility for webhook receivers to verify that incoming webhook
requests were signed by the Apinator service.  Uses HMAC-SHA256 over
``"{timestamp}.{body}"`` with the app secret as the shared key.

Usage::

    from apinator.sdk.webhook_verify import verify_webhook

    body = await request.body()  # raw bytes, do not re-serialize
    if not verify_webhook(secret, request.headers, body, max_age=300):
        return Response(status_code=401)
"""

from __future__ import annotations

import binascii
import hmac
import json
import logging
import math
import re
import time
from collections.abc import Mapping
from typing import Any, Callable, Optional

from apinator.protocol.errors import AuthenticationError, ValidationError
from apinator.protocol.signing import Payload, Secret, sign_webhook_payload
from apinator.protocol.types import HEADER_SIGNATURE, HEADER_TIMESTAMP, SIGNATURE_PREFIX

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# Leading ASCII base-10 integer, as a lenient integer parse would read it
_TIMESTAMP_RE = re.compile(r"\s*([+-]?[0-9]+)")


# ---------------------------------------------------------------------------
# Header lookup
# ---------------------------------------------------------------------------


def _first_string(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        for entry in value:
            if isinstance(entry, str):
                return entry
    return None


def normalize_headers(headers: Mapping[str, Any]) -> dict[str, str]:
    """Fold header names to lowercase, keeping the first string value per name.

    Values may be a string or a sequence of strings (frameworks differ);
    entries that are not strings are ignored, as are non-string names.
    """
    items = headers.items() if hasattr(headers, "items") else headers
    normalized: dict[str, str] = {}
    for name, value in items:
        if not isinstance(name, str):
            continue
        lowered = name.lower()
        if lowered in normalized:
            continue
        first = _first_string(value)
        if first is not None:
            normalized[lowered] = first
    return normalized


def get_header(headers: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive lookup of a single header value."""
    return normalize_headers(headers).get(name.lower())


def _parse_timestamp(raw: str) -> Optional[int]:
    match = _TIMESTAMP_RE.match(raw)
    if match is None:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Beyond the interpreter's integer string conversion limit
        return None


def _unhex(value: str) -> Optional[bytes]:
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        return None


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


def verify_webhook(
    secret: Secret,
    headers: Mapping[str, Any],
    body: Payload,
    max_age: Optional[float] = None,
    *,
    now: Optional[Clock] = None,
) -> bool:
    """Verify an inbound webhook request.

    Args:
        secret: App secret (shared HMAC key).
        headers: Request headers.  Names are matched case-insensitively;
            values may be strings or lists of strings.
        body: Raw request body exactly as received.
        max_age: Maximum accepted age of ``X-Realtime-Timestamp`` in
            seconds.  ``None`` disables the freshness check entirely.
        now: Clock returning Unix seconds; defaults to :func:`time.time`.

    Returns:
        ``True`` only if the signature header, timestamp header, freshness
        check, and signature all pass; ``False`` otherwise.  Never raises
        for malformed headers.  Uses :func:`hmac.compare_digest` on the
        decoded digests so comparison time does not depend on where the
        signatures differ.
    """
    normalized = normalize_headers(headers)

    signature = normalized.get(HEADER_SIGNATURE.lower())
    if not signature:
        logger.debug("Webhook rejected: missing signature header")
        return False
    if signature.startswith(SIGNATURE_PREFIX):
        signature = signature[len(SIGNATURE_PREFIX):]

    timestamp = normalized.get(HEADER_TIMESTAMP.lower())
    if not timestamp:
        logger.debug("Webhook rejected: missing timestamp header")
        return False

    if max_age is not None:
        sent_at = _parse_timestamp(timestamp)
        if sent_at is None:
            logger.debug("Webhook rejected: non-numeric timestamp")
            return False
        current = math.floor((now or time.time)())
        age = current - sent_at
        if age > max_age or age < 0:
            logger.debug("Webhook rejected: timestamp outside window (age=%ds)", age)
            return False

    # The raw header string is signed, not the parsed integer
    try:
        expected = sign_webhook_payload(secret, timestamp, body)
    except UnicodeEncodeError:
        logger.debug("Webhook rejected: body is not encodable as UTF-8")
        return False

    received_bytes = _unhex(signature)
    expected_bytes = _unhex(expected)
    if received_bytes is None or expected_bytes is None:
        logger.debug("Webhook rejected: signature is not hex")
        return False
    if len(received_bytes) != len(expected_bytes):
        logger.debug("Webhook rejected: signature has wrong length")
        return False

    if not hmac.compare_digest(received_bytes, expected_bytes):
        logger.debug("Webhook rejected: signature mismatch")
        return False
    return True


def parse_webhook(
    secret: Secret,
    headers: Mapping[str, Any],
    body: Payload,
    max_age: Optional[float] = None,
    *,
    now: Optional[Clock] = None,
) -> Any:
    """Verify a webhook and return its decoded JSON body.

    Raises:
        AuthenticationError: The request failed :func:`verify_webhook`.
        ValidationError: The body is authentic but not valid JSON.
    """
    if not verify_webhook(secret, headers, body, max_age, now=now):
        raise AuthenticationError("Invalid webhook signature")
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValidationError(f"Webhook body is not valid JSON: {exc}") from exc


# ---------------------------------------------------------------------------
# Sender side
# ---------------------------------------------------------------------------


def build_webhook_headers(
    secret: Secret,
    body: Payload,
    timestamp: Optional[str] = None,
    *,
    now: Optional[Clock] = None,
) -> dict[str, str]:
    """Produce the headers the service attaches to a webhook delivery.

    Useful for exercising a webhook endpoint locally.  The signature is
    returned in ``sha256=<hex>`` form.
    """
    if timestamp is None:
        timestamp = str(math.floor((now or time.time)()))
    signature = sign_webhook_payload(secret, timestamp, body)
    return {
        HEADER_TIMESTAMP: timestamp,
        HEADER_SIGNATURE: f"{SIGNATURE_PREFIX}{signature}",
    }
