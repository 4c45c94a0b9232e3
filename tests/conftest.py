"""Shared test fixtures for Apinator SDK tests."""

from __future__ import annotations

import pytest

_ENV_VARS = (
    "APINATOR_APP_ID",
    "APINATOR_KEY",
    "APINATOR_SECRET",
    "APINATOR_CLUSTER",
    "APINATOR_HOST",
    "APINATOR_TIMEOUT",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the developer's own APINATOR_* settings out of every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "apinator_home"
    home.mkdir()
    monkeypatch.setenv("APINATOR_HOME", str(home))
    return home


@pytest.fixture()
def secret() -> str:
    return "my-secret-key"


@pytest.fixture()
def webhook_body() -> str:
    return '{"event":"channel_occupied","channel":"test"}'
