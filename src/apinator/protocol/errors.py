"""Apinator exception hierarchy.

All SDK exceptions inherit from :class:`RealtimeError`.  Callers that only
care about "something went wrong talking to the service" can catch the base
class; callers that need to distinguish rejected credentials from bad input
catch the subclasses.
"""

from __future__ import annotations


class RealtimeError(Exception):
    """Base exception for all Apinator SDK errors.

    Raised directly for transport and protocol failures (network errors,
    unparsable responses).
    """


class AuthenticationError(RealtimeError):
    """Raised when a signature or token is rejected (HTTP 401/403)."""

    def __init__(
        self,
        message: str = "",
        *,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class ValidationError(RealtimeError):
    """Raised when caller input is structurally invalid (or HTTP 400/422)."""

    def __init__(
        self,
        message: str = "",
        *,
        status: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class ApiError(RealtimeError):
    """Raised for any other non-2xx API response."""

    def __init__(self, message: str, status: int, body: str) -> None:
        super().__init__(message)
        self.status = status
        self.body = body
