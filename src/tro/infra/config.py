"""TOML configuration loading for tro.

The config file holds the Trello credentials::

    key = "your-api-key"
    token = "your-api-token"
    # optional
    host = "https://api.trello.com"
    timeout = 30

Lookup order for the file path: explicit argument, the ``TRO_CONFIG``
environment variable, then ``$XDG_CONFIG_HOME/tro/config.toml``
(``~/.config/tro/config.toml`` when the variable is unset).

All ``tomllib`` and filesystem errors are re-raised as
:class:`~tro.exceptions.ConfigError`.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tro.exceptions import ConfigError
from tro.infra.trello_client import DEFAULT_HOST

CONFIG_ENV_VAR: str = "TRO_CONFIG"
DEFAULT_TIMEOUT: float = 30.0

SAMPLE_CONFIG: str = "\n".join(
    (
        'key = "<your Trello API key>"',
        'token = "<your Trello API token>"',
    )
)


@dataclass(frozen=True, slots=True)
class TroConfig:
    """Validated connection settings for the Trello API."""

    key: str
    token: str
    host: str = DEFAULT_HOST
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        # Keep secrets out of logs and tracebacks.
        return f"TroConfig(host={self.host!r}, timeout={self.timeout!r})"


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the config path to use when none is given explicitly."""
    env = os.environ if environ is None else environ
    override = env.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    config_home = env.get("XDG_CONFIG_HOME")
    base = Path(config_home).expanduser() if config_home else Path.home() / ".config"
    return base / "tro" / "config.toml"


def load_config(path: Path | None = None) -> TroConfig:
    """Read and validate the config file at *path*.

    Raises
    ------
    ConfigError
        If the file is missing, unreadable, not valid TOML, or lacks a
        required value.
    """
    config_path = path if path is not None else default_config_path()
    hint = f"Create {config_path} containing:\n{SAMPLE_CONFIG}"

    try:
        with config_path.open("rb") as fh:
            data = tomllib.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {config_path}", hint=hint) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {config_path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {config_path}: {exc}", hint=hint) from exc

    return parse_config(data, source=str(config_path))


def parse_config(data: Mapping[str, Any], *, source: str = "config") -> TroConfig:
    """Build a :class:`TroConfig` from decoded TOML data."""
    key = _require_str(data, "key", source)
    token = _require_str(data, "token", source)

    host = data.get("host", DEFAULT_HOST)
    if not isinstance(host, str) or not host.startswith(("http://", "https://")):
        raise ConfigError(
            f"Invalid 'host' in {source}: {host!r}",
            hint="host must start with http:// or https://",
        )

    timeout = data.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(
            f"Invalid 'timeout' in {source}: {timeout!r}",
            hint="timeout must be a positive number of seconds.",
        )

    return TroConfig(key=key, token=token, host=host, timeout=float(timeout))


def _require_str(data: Mapping[str, Any], name: str, source: str) -> str:
    value = data.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"Missing or empty '{name}' in {source}.",
            hint=f"Add a line like: {name} = \"...\"",
        )
    return value.strip()
