"""Configuration and credential loading for life360_api.

``ClientConfig`` carries the endpoint and client identity settings, with
defaults that match the Android app the service expects. ``load_credentials``
reads ``KEY=VALUE`` lines from a file and falls back to environment variables.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from . import const

log = logging.getLogger(__name__)

ENV_USERNAME = "LIFE360_USERNAME"
ENV_PASSWORD = "LIFE360_PASSWORD"
ENV_TOKEN = "LIFE360_TOKEN"


@dataclass(frozen=True)
class ClientConfig:
    """Static settings shared by every request of a session."""

    endpoint: str = const.ENDPOINT
    user_agent: str = const.USER_AGENT
    client_identifier: str = const.CLIENT_IDENTIFIER
    random_tls_extension_order: bool = True
    timeout: float = const.DEFAULT_TIMEOUT
    initial_token: str = const.INITIAL_TOKEN

    def __post_init__(self):
        if not self.endpoint.startswith("https://"):
            raise ValueError("HTTPS is required for the Life360 endpoint")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        object.__setattr__(self, "endpoint", self.endpoint.rstrip("/"))


@dataclass
class Credentials:
    """Login credentials. Only ``token`` may change after construction."""

    username: str
    password: str = field(repr=False)
    token: Optional[str] = field(default=None, repr=False)

    def __setattr__(self, name, value):
        if name in ("username", "password") and name in self.__dict__:
            raise AttributeError(f"Credentials.{name} is read-only")
        super().__setattr__(name, value)


def _read_key_values(path: Path) -> Dict[str, str]:
    values = {}
    for ln in path.read_text().splitlines():
        ln = ln.strip()
        if not ln or ln.startswith("#"):
            continue
        if "=" in ln:
            k, v = ln.split("=", 1)
            values[k.strip()] = v.strip()
    return values


def load_credentials(path: Optional[Union[str, Path]] = None) -> Credentials:
    """Load credentials from a KEY=VALUE file, falling back to the environment.

    Recognized keys are ``LIFE360_USERNAME``, ``LIFE360_PASSWORD`` and
    ``LIFE360_TOKEN``. Empty environment values are ignored.

    Args:
        path: Optional credentials file. Missing files are skipped.

    Returns:
        Credentials instance

    Raises:
        ValueError: If neither a username/password pair nor a token is available
    """
    values: Dict[str, str] = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            values = _read_key_values(p)
            log.debug(f"Read credentials from {p}")
        else:
            log.debug(f"Credentials file {p} not found, using environment")

    for k in (ENV_USERNAME, ENV_PASSWORD, ENV_TOKEN):
        if k not in values:
            val = os.getenv(k)
            if val:
                values[k] = val

    username = values.get(ENV_USERNAME, "")
    password = values.get(ENV_PASSWORD, "")
    token = values.get(ENV_TOKEN) or None
    if not token and not (username and password):
        raise ValueError(
            f"Missing credentials: set {ENV_USERNAME} and {ENV_PASSWORD}, or {ENV_TOKEN}"
        )
    return Credentials(username=username, password=password, token=token)
