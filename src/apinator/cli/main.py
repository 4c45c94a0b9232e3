"""Apinator CLI -- trigger events and debug signatures from the shell.

Thin wrapper around the Python SDK using click.
Online commands use the client's sync wrappers; ``auth``, ``sign-webhook``
and ``verify-webhook`` never touch the network.
"""

from __future__ import annotations

import json

import click

from apinator.protocol import RealtimeError
from apinator.sdk.auth import authenticate_channel
from apinator.sdk.client import Apinator
from apinator.sdk.config import ClientConfig
from apinator.sdk.webhook_verify import build_webhook_headers, verify_webhook


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _error(msg: str) -> None:
    """Print an error message to stderr and exit 1."""
    click.echo(msg, err=True)
    raise SystemExit(1)


def _client(ctx: click.Context) -> Apinator:
    try:
        return Apinator(**ctx.obj)
    except ValueError as exc:
        _error(f"Error: {exc}")


def _config(ctx: click.Context, *required: str) -> ClientConfig:
    try:
        return ClientConfig(**ctx.obj, required=required)
    except ValueError as exc:
        _error(f"Error: {exc}")


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2))


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="apinator")
@click.option("--app-id", default=None, help="App id (default: $APINATOR_APP_ID).")
@click.option("--key", default=None, help="App key (default: $APINATOR_KEY).")
@click.option("--secret", default=None, help="App secret (default: $APINATOR_SECRET).")
@click.option("--cluster", default=None, help="Cluster, e.g. eu or us.")
@click.option("--host", default=None, help="Override the API base URL.")
@click.pass_context
def cli(
    ctx: click.Context,
    app_id: str | None,
    key: str | None,
    secret: str | None,
    cluster: str | None,
    host: str | None,
) -> None:
    """Apinator -- realtime messaging server CLI."""
    ctx.ensure_object(dict)
    ctx.obj.update(
        app_id=app_id, key=key, secret=secret, cluster=cluster, host=host
    )


# ---------------------------------------------------------------------------
# apinator trigger
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("event")
@click.option(
    "--channel", "-c", "channels", multiple=True, required=True,
    help="Target channel (repeat for several).",
)
@click.option("--data", "-d", default="{}", help="Event payload (JSON string).")
@click.option("--socket-id", default=None, help="Socket id to exclude.")
@click.pass_context
def trigger(
    ctx: click.Context,
    event: str,
    channels: tuple[str, ...],
    data: str,
    socket_id: str | None,
) -> None:
    """Trigger EVENT on one or more channels."""
    client = _client(ctx)
    if len(channels) == 1:
        target = {"channel": channels[0]}
    else:
        target = {"channels": list(channels)}

    try:
        client.trigger_sync(event, data, socket_id=socket_id, **target)
    except RealtimeError as exc:
        _error(f"Error: {exc}")
    click.echo(f"Triggered {event} on {', '.join(channels)}")


# ---------------------------------------------------------------------------
# apinator channels / channel
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--prefix", "-p", default=None, help="Only channels with this prefix.")
@click.pass_context
def channels(ctx: click.Context, prefix: str | None) -> None:
    """List occupied channels."""
    client = _client(ctx)
    try:
        result = client.get_channels_sync(prefix)
    except RealtimeError as exc:
        _error(f"Error: {exc}")

    if not result:
        click.echo("No channels.")
        return
    for info in result:
        click.echo(f"{info.name}  ({info.subscription_count} subscribers)")


@cli.command()
@click.argument("name")
@click.pass_context
def channel(ctx: click.Context, name: str) -> None:
    """Show details for channel NAME."""
    client = _client(ctx)
    try:
        info = client.get_channel_sync(name)
    except RealtimeError as exc:
        _error(f"Error: {exc}")
    _echo_json({"name": info.name, "subscription_count": info.subscription_count, **info.extra})


# ---------------------------------------------------------------------------
# Offline signing tools
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("socket_id")
@click.argument("channel_name")
@click.option("--channel-data", default=None, help="Presence payload (JSON string).")
@click.pass_context
def auth(
    ctx: click.Context, socket_id: str, channel_name: str, channel_data: str | None
) -> None:
    """Print the subscription auth token for SOCKET_ID on CHANNEL_NAME."""
    cfg = _config(ctx, "key", "secret")
    response = authenticate_channel(
        cfg.secret, cfg.key, socket_id, channel_name, channel_data
    )
    _echo_json(response.to_dict())


@cli.command("sign-webhook")
@click.argument("body")
@click.option("--timestamp", "-t", default=None, help="Timestamp (default: now).")
@click.pass_context
def sign_webhook(ctx: click.Context, body: str, timestamp: str | None) -> None:
    """Print the headers a webhook delivery of BODY would carry."""
    cfg = _config(ctx, "secret")
    _echo_json(build_webhook_headers(cfg.secret, body, timestamp))


@cli.command("verify-webhook")
@click.argument("body")
@click.option("--signature", "-s", required=True, help="X-Realtime-Signature value.")
@click.option("--timestamp", "-t", required=True, help="X-Realtime-Timestamp value.")
@click.option("--max-age", type=int, default=None, help="Reject older webhooks (seconds).")
@click.pass_context
def verify_webhook_cmd(
    ctx: click.Context,
    body: str,
    signature: str,
    timestamp: str,
    max_age: int | None,
) -> None:
    """Check a webhook BODY against its signature headers."""
    cfg = _config(ctx, "secret")
    headers = {"X-Realtime-Signature": signature, "X-Realtime-Timestamp": timestamp}
    if not verify_webhook(cfg.secret, headers, body, max_age):
        _error("Invalid webhook signature.")
    click.echo("Valid webhook signature.")

