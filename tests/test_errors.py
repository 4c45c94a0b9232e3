"""Tests for apinator.protocol.errors module."""

from __future__ import annotations

import pytest

from apinator.protocol.errors import (
    ApiError,
    AuthenticationError,
    RealtimeError,
    ValidationError,
)


class TestHierarchy:
    def test_authentication_is_realtime_error(self):
        assert issubclass(AuthenticationError, RealtimeError)

    def test_validation_is_realtime_error(self):
        assert issubclass(ValidationError, RealtimeError)

    def test_api_error_is_realtime_error(self):
        assert issubclass(ApiError, RealtimeError)

    def test_subtypes_are_distinct(self):
        assert not issubclass(AuthenticationError, ValidationError)
        assert not issubclass(ValidationError, AuthenticationError)
        assert not issubclass(ApiError, AuthenticationError)


class TestAttributes:
    def test_realtime_error_message(self):
        assert str(RealtimeError("something broke")) == "something broke"

    def test_api_error_carries_status_and_body(self):
        err = ApiError("boom", 500, "Internal Server Error")
        assert str(err) == "boom"
        assert err.status == 500
        assert err.body == "Internal Server Error"

    def test_local_validation_error_has_no_status(self):
        err = ValidationError("bad input")
        assert err.status is None
        assert err.body is None

    def test_remote_authentication_error(self):
        err = AuthenticationError("signature mismatch", status=401, body="{}")
        assert str(err) == "signature mismatch"
        assert err.status == 401

    def test_no_message(self):
        assert str(AuthenticationError()) == ""


class TestCatchability:
    def test_catch_authentication_as_realtime_error(self):
        with pytest.raises(RealtimeError):
            raise AuthenticationError("test")

    def test_catch_api_error_as_realtime_error(self):
        with pytest.raises(RealtimeError):
            raise ApiError("test", 502, "")
