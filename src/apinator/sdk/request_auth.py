"""Per-request signature headers for outbound API calls."""

from __future__ import annotations

from apinator.protocol.signing import Payload, Secret, sign_request
from apinator.protocol.types import HEADER_KEY, HEADER_SIGNATURE, HEADER_TIMESTAMP


def canonical_path(path: str) -> str:
    """Return *path* without its query string.

    The service signs ``URL.path`` only, so anything after the first ``?``
    must never reach the signer.
    """
    return path.split("?", 1)[0]


def sign_for_transport(
    secret: Secret, method: str, path: str, body: Payload, timestamp: int
) -> str:
    """Sign an outbound request; the query string of *path* is ignored."""
    return sign_request(secret, method, canonical_path(path), body, timestamp)


def build_auth_headers(
    key: str,
    secret: Secret,
    method: str,
    path: str,
    body: Payload,
    timestamp: int,
) -> dict[str, str]:
    """Return the key, timestamp, and signature headers for one request.

    The signature is sent bare -- no ``sha256=`` prefix on the outbound side.
    """
    return {
        HEADER_KEY: key,
        HEADER_TIMESTAMP: str(int(timestamp)),
        HEADER_SIGNATURE: sign_for_transport(secret, method, path, body, timestamp),
    }
