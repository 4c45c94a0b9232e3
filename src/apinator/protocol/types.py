"""Wire constants and data objects shared by the SDK."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from apinator.protocol.errors import ValidationError

# Header names (matched case-insensitively on the inbound side)
HEADER_KEY = "X-Realtime-Key"
HEADER_TIMESTAMP = "X-Realtime-Timestamp"
HEADER_SIGNATURE = "X-Realtime-Signature"

# Optional prefix on inbound webhook signatures
SIGNATURE_PREFIX = "sha256="

HOST_TEMPLATE = "https://ws-{cluster}.apinator.io"


def compact_json(data: Any) -> str:
    """Serialize *data* the way the service expects request bodies."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class ChannelAuthResponse:
    """Result of authorizing a private or presence channel subscription.

    ``channel_data`` is ``None`` when no presence payload was supplied;
    :meth:`to_dict` then omits the key entirely, which is what private
    channel clients expect.
    """

    auth: str
    channel_data: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        result = {"auth": self.auth}
        if self.channel_data is not None:
            result["channel_data"] = self.channel_data
        return result


@dataclass(frozen=True)
class ChannelInfo:
    """A channel as reported by the channels API."""

    name: str
    subscription_count: int = 0
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChannelInfo:
        known = {"name", "subscription_count"}
        return cls(
            name=data.get("name", ""),
            subscription_count=int(data.get("subscription_count") or 0),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass
class TriggerParams:
    """Parameters for triggering an event.

    ``channel`` and ``channels`` are mutually exclusive; exactly one must
    be given.  ``data`` is sent as a string -- anything else is encoded
    as compact JSON first.
    """

    name: str
    data: Any
    channel: Optional[str] = None
    channels: Optional[list[str]] = None
    socket_id: Optional[str] = None

    def validate(self) -> None:
        """Raise :class:`ValidationError` unless exactly one selector is set."""
        if self.channel and self.channels is not None:
            raise ValidationError(
                "Cannot specify both 'channel' and 'channels' parameters"
            )
        if not self.channel and self.channels is None:
            raise ValidationError(
                "Must specify either 'channel' or 'channels' parameter"
            )

    def to_body(self) -> str:
        """Validate and render the request body as compact JSON."""
        self.validate()
        data = self.data if isinstance(self.data, str) else compact_json(self.data)
        body: dict[str, Any] = {"name": self.name, "data": data}
        if self.channel:
            body["channel"] = self.channel
        if self.channels is not None:
            body["channels"] = list(self.channels)
        if self.socket_id:
            body["socket_id"] = self.socket_id
        return compact_json(body)

