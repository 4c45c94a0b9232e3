"""SDK configuration via dataclass (no pydantic -- instant construction)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from apinator.protocol.types import HOST_TEMPLATE

logger = logging.getLogger(__name__)

_DEFAULT_CLUSTER = "eu"
_DEFAULT_TIMEOUT = 30.0

_REQUIRED = ("app_id", "key", "secret")


@dataclass
class ClientConfig:
    """Credentials and endpoint for an Apinator app.

    Any field left as ``None`` is read from its ``APINATOR_*`` environment
    variable, then from the ``[client]`` section of
    ``$APINATOR_HOME/config.toml`` (default ``~/.apinator``).

    Priority (highest wins): constructor arg > env var > config.toml > default.

    ``secret`` is excluded from ``repr()`` so configs can be logged safely.
    ``required`` names the fields that must resolve to a non-empty value;
    offline tooling that only signs needs nothing but ``secret``.
    """

    app_id: str | None = None
    key: str | None = None
    secret: str | None = field(default=None, repr=False)
    cluster: str | None = None
    host: str | None = None
    timeout: float | None = None
    config_path: Path | str | None = field(default=None, repr=False)
    required: tuple[str, ...] = field(default=_REQUIRED, repr=False)

    def __post_init__(self) -> None:
        file_values = self._load_config_file()

        def resolve(name: str, env_var: str) -> Any:
            value = getattr(self, name)
            if value is None:
                value = os.getenv(env_var)
            if value is None:
                value = file_values.get(name)
            return value

        self.app_id = resolve("app_id", "APINATOR_APP_ID")
        self.key = resolve("key", "APINATOR_KEY")
        self.secret = resolve("secret", "APINATOR_SECRET")
        self.cluster = resolve("cluster", "APINATOR_CLUSTER") or _DEFAULT_CLUSTER

        # Explicit host wins over the cluster-derived one (local fakes, proxies)
        host = resolve("host", "APINATOR_HOST")
        if not host:
            host = HOST_TEMPLATE.format(cluster=self.cluster)
        self.host = host.rstrip("/")

        timeout = resolve("timeout", "APINATOR_TIMEOUT")
        if timeout is None:
            self.timeout = _DEFAULT_TIMEOUT
        else:
            try:
                self.timeout = float(timeout)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid timeout {timeout!r}: must be a number") from None

        missing = [name for name in self.required if not getattr(self, name)]
        if missing:
            env_vars = ", ".join(f"APINATOR_{name.upper()}" for name in missing)
            raise ValueError(
                f"Missing Apinator credentials: {', '.join(missing)}. "
                f"Pass them explicitly or set {env_vars}."
            )

    def _default_config_path(self) -> Path:
        home = os.getenv("APINATOR_HOME")
        base = Path(home) if home else Path.home() / ".apinator"
        return base / "config.toml"

    def _load_config_file(self) -> dict[str, Any]:
        """Load optional config.toml; returns the ``[client]`` table or ``{}``."""
        path = Path(self.config_path) if self.config_path else self._default_config_path()
        if not path.exists():
            return {}

        try:
            import tomllib
        except ModuleNotFoundError:
            import tomli as tomllib  # type: ignore[no-redef]  # Python 3.10 fallback

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            logger.warning("Failed to load config file %s", path, exc_info=True)
            return {}

        section = data.get("client", {})
        if not isinstance(section, dict):
            logger.warning("Ignoring non-table [client] section in %s", path)
            return {}
        return section
