"""Shared fixtures for Apinator SDK tests.

``fake_api`` is an in-process stand-in for the Apinator REST API.  It
checks request signatures the way the service does -- over the path only,
never the query string -- and answers errors with RFC 7807 documents.
"""

from __future__ import annotations

import hmac
import json

import httpx
import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from apinator.protocol.signing import sign_request
from apinator.sdk.client import Apinator

APP_ID = "test-app-id"
KEY = "test-key"
SECRET = "test-secret"
NOW = 1700000000.75


def _problem(status: int, title: str, detail: str) -> JSONResponse:
    return JSONResponse(
        {
            "type": f"https://docs.apinator.io/problems/{title.lower().replace(' ', '_')}",
            "title": title,
            "status": status,
            "detail": detail,
        },
        status_code=status,
    )


def create_fake_api(key: str = KEY, secret: str = SECRET) -> FastAPI:
    app = FastAPI()
    app.state.requests = []
    app.state.events = []
    app.state.channels = {
        "orders": 1,
        "private-chat": 5,
        "presence-room": 2,
    }

    async def authenticate(request: Request) -> JSONResponse | None:
        body = await request.body()
        app.state.requests.append(
            {
                "method": request.method,
                "url": str(request.url),
                "headers": dict(request.headers),
                "body": body,
            }
        )
        if request.headers.get("x-realtime-key") != key:
            return _problem(401, "Unauthorized", "unknown key")
        timestamp = request.headers.get("x-realtime-timestamp", "")
        if not timestamp.isdigit():
            return _problem(401, "Unauthorized", "missing timestamp")
        expected = sign_request(secret, request.method, request.url.path, body, int(timestamp))
        received = request.headers.get("x-realtime-signature", "")
        if not hmac.compare_digest(expected, received):
            return _problem(401, "Unauthorized", "signature mismatch")
        return None

    @app.post("/apps/{app_id}/events")
    async def events(app_id: str, request: Request):
        if (problem := await authenticate(request)) is not None:
            return problem
        payload = json.loads(await request.body())
        if not payload.get("name"):
            return _problem(400, "Bad Request", "Invalid event name")
        app.state.events.append(payload)
        return {}

    @app.get("/apps/{app_id}/channels")
    async def list_channels(app_id: str, request: Request):
        if (problem := await authenticate(request)) is not None:
            return problem
        prefix = request.query_params.get("filter_by_prefix", "")
        return {
            "channels": [
                {"name": name, "subscription_count": count}
                for name, count in app.state.channels.items()
                if name.startswith(prefix)
            ]
        }

    @app.get("/apps/{app_id}/channels/{channel_name}")
    async def get_channel(app_id: str, channel_name: str, request: Request):
        if (problem := await authenticate(request)) is not None:
            return problem
        if channel_name not in app.state.channels:
            return _problem(404, "Not Found", f"channel {channel_name} not found")
        return {
            "name": channel_name,
            "subscription_count": app.state.channels[channel_name],
            "occupied": True,
        }

    return app


@pytest.fixture()
def fake_api() -> FastAPI:
    return create_fake_api()


@pytest.fixture()
def client(fake_api) -> Apinator:
    """Apinator client wired to ``fake_api`` through httpx's ASGITransport."""
    return Apinator(
        app_id=APP_ID,
        key=KEY,
        secret=SECRET,
        cluster="eu",
        clock=lambda: NOW,
        transport=httpx.ASGITransport(app=fake_api),
    )
