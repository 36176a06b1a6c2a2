"""
Configuration management for outbound.

Loads client defaults from environment variables or a .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_ATTEMPTS = 5

ENV_LOCATIONS = [
    Path.home() / ".outbound" / ".env",
    Path.home() / ".config" / "outbound" / ".env",
    Path.cwd() / ".env",
]


def load_env_files(locations: list[Path] | None = None) -> Path | None:
    """Load the first .env file found; returns its path."""
    if locations is None:
        locations = ENV_LOCATIONS
    for env_path in locations:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


@dataclass
class ClientConfig:
    """Defaults applied by a Client to every request."""

    # Prefix for relative request URLs
    base_url: str = ""
    default_content_type: str = DEFAULT_CONTENT_TYPE
    timeout: float = DEFAULT_TIMEOUT

    # Handed to the transport as its retry count
    attempts: int = DEFAULT_ATTEMPTS

    # Stored only; not applied to the transport
    tls_cert: str = ""

    @classmethod
    def from_env(cls, load_files: bool = True) -> "ClientConfig":
        """Load configuration from environment variables."""
        if load_files:
            load_env_files()

        timeout_ms = os.getenv("OUTBOUND_TIMEOUT_MS")
        attempts = os.getenv("OUTBOUND_ATTEMPTS")

        return cls(
            base_url=os.getenv("OUTBOUND_BASE_URL", ""),
            default_content_type=os.getenv("OUTBOUND_CONTENT_TYPE", DEFAULT_CONTENT_TYPE),
            timeout=int(timeout_ms) / 1000 if timeout_ms else DEFAULT_TIMEOUT,
            attempts=int(attempts) if attempts else DEFAULT_ATTEMPTS,
            tls_cert=os.getenv("OUTBOUND_TLS_CERT", ""),
        )


# Global config instance
_config: ClientConfig | None = None


def get_config() -> ClientConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ClientConfig.from_env()
    return _config


def set_config(config: ClientConfig | None) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
