"""Apinator SDK -- server-side client for the Apinator realtime service."""

from apinator.sdk.auth import authenticate_channel
from apinator.sdk.client import Apinator
from apinator.sdk.config import ClientConfig
from apinator.sdk.request_auth import build_auth_headers, canonical_path, sign_for_transport
from apinator.sdk.webhook_verify import build_webhook_headers, parse_webhook, verify_webhook

__all__ = [
    "Apinator",
    "ClientConfig",
    "authenticate_channel",
    "build_auth_headers",
    "canonical_path",
    "sign_for_transport",
    "build_webhook_headers",
    "parse_webhook",
    "verify_webhook",
]
