"""Client configuration.

Everything is optional; empty values fall back to the daemon's stock
defaults (``http://localhost:9091/transmission/rpc`` with
``transmission:transmission``).
"""

from __future__ import annotations

import base64
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from transmission_rpc.rpc import DEFAULT_PATHNAME

DEFAULT_HOSTNAME = "localhost"
DEFAULT_PORT = 9091
DEFAULT_PROTOCOL = "http"
DEFAULT_USERNAME = "transmission"
DEFAULT_PASSWORD = "transmission"
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1000  # milliseconds


@dataclass(slots=True)
class SessionRetryConfig:
    """How often, and how far apart, a 409 is retried."""

    max_retries: int = DEFAULT_MAX_RETRIES
    delay: int = DEFAULT_RETRY_DELAY  # ms


@dataclass(slots=True)
class ClientConfig:
    hostname: str = DEFAULT_HOSTNAME
    port: int = DEFAULT_PORT
    protocol: str = DEFAULT_PROTOCOL
    pathname: str = DEFAULT_PATHNAME
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    timeout: float = DEFAULT_TIMEOUT
    retry: SessionRetryConfig = field(default_factory=SessionRetryConfig)

    def __post_init__(self) -> None:
        self.hostname = self.hostname or DEFAULT_HOSTNAME
        self.port = self.port or DEFAULT_PORT
        self.protocol = self.protocol or DEFAULT_PROTOCOL
        self.pathname = self.pathname or DEFAULT_PATHNAME
        self.username = self.username or DEFAULT_USERNAME
        self.password = self.password or DEFAULT_PASSWORD
        if self.protocol not in ("http", "https"):
            raise ValueError(f"unsupported protocol: {self.protocol!r}")
        if self.retry.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.retry.delay < 0:
            raise ValueError("delay must be >= 0")

    # -- Derived values ------------------------------------------------
    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.hostname}:{self.port}"

    @property
    def authorization(self) -> str:
        """The ``Authorization`` header value, ``Basic base64(user:pass)``."""
        token = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
        return f"Basic {token}"

    # -- Environment ---------------------------------------------------
    @classmethod
    def from_env(cls, dotenv_path: str | Path | None = None) -> "ClientConfig":
        """Build a config from ``TRANSMISSION_*`` environment variables.

        A ``.env`` file in the working directory (or *dotenv_path*) is
        loaded first; variables already set in the environment win.
        """
        load_dotenv(dotenv_path or os.path.join(Path.cwd(), ".env"))

        retry = SessionRetryConfig(
            max_retries=int(os.getenv("TRANSMISSION_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
            delay=int(os.getenv("TRANSMISSION_RETRY_DELAY", DEFAULT_RETRY_DELAY)),
        )
        return cls(
            hostname=os.getenv("TRANSMISSION_HOST", DEFAULT_HOSTNAME),
            port=int(os.getenv("TRANSMISSION_PORT", DEFAULT_PORT)),
            protocol=os.getenv("TRANSMISSION_PROTOCOL", DEFAULT_PROTOCOL),
            pathname=os.getenv("TRANSMISSION_PATH", DEFAULT_PATHNAME),
            username=os.getenv("TRANSMISSION_USERNAME", DEFAULT_USERNAME),
            password=os.getenv("TRANSMISSION_PASSWORD", DEFAULT_PASSWORD),
            timeout=float(os.getenv("TRANSMISSION_TIMEOUT", DEFAULT_TIMEOUT)),
            retry=retry,
        )
