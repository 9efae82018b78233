"""Client configuration: credentials, endpoint and request policy."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from trello_proxy.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.trello.com/1"


@dataclass(frozen=True)
class ClientConfig:
    """Everything a TrelloConnection needs, captured once per client.

    Attributes:
        api_key: Trello API key (TRELLO_API_KEY)
        token: Trello API token (TRELLO_TOKEN)
        base_url: API root, without trailing slash
        timeout: Seconds to wait for each HTTP attempt
        max_retries: Attempts per request, including the first (1 disables retries)
        backoff_base: First retry delay in seconds; doubles on each further retry
        verify_ssl: Verify TLS certificates
    """

    api_key: str
    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0
    max_retries: int = 3
    backoff_base: float = 1.0
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        if not self.api_key or not self.token:
            raise ConfigurationError(
                "TRELLO_API_KEY and TRELLO_TOKEN must both be set.\n"
                "Get credentials at: https://trello.com/power-ups/admin"
            )
        if self.max_retries < 1:
            raise ConfigurationError(f"max_retries must be at least 1, got {self.max_retries}")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key={mask_secret(self.api_key)!r}, token={mask_secret(self.token)!r}, "
            f"base_url={self.base_url!r}, timeout={self.timeout}, max_retries={self.max_retries}, "
            f"backoff_base={self.backoff_base}, verify_ssl={self.verify_ssl})"
        )

    @classmethod
    def from_env(cls, env_file: str | None = None, **overrides) -> ClientConfig:
        """Build a config from the process environment.

        Values from ``env_file`` (default: $TRELLO_ENV_FILE or ``.env``) are
        used only for variables not already set in the environment.

        Raises:
            ConfigurationError: If either credential is missing
        """
        values = load_environment(env_file)

        api_key = values.get("TRELLO_API_KEY", "").strip()
        token = values.get("TRELLO_TOKEN", "").strip()
        if not api_key or not token:
            missing = [
                name for name, value in (("TRELLO_API_KEY", api_key), ("TRELLO_TOKEN", token))
                if not value
            ]
            raise ConfigurationError(
                f"Missing required Trello credentials: {', '.join(missing)}\n"
                "Set them in your environment or in a .env file:\n"
                '  export TRELLO_API_KEY="..."\n'
                '  export TRELLO_TOKEN="..."'
            )

        return cls(api_key=api_key, token=token, **overrides)


def load_environment(env_file: str | None = None) -> dict[str, str]:
    """TRELLO_* settings from the environment, falling back to a .env file

    Variables already set in the process environment win over the file.
    """
    values = read_env_file(env_file or os.getenv("TRELLO_ENV_FILE", ".env"))
    values.update({k: v for k, v in os.environ.items() if k.startswith("TRELLO_")})
    return values


def read_env_file(path: str) -> dict[str, str]:
    """Parse KEY=VALUE lines from a dotenv-style file, if it exists"""
    values: dict[str, str] = {}
    env_path = Path(path)
    if not env_path.exists():
        return values

    logger.debug(f"Reading environment file: {env_path}")
    with open(env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                values[key.strip()] = value.strip().strip("'\"")
    return values


def mask_secret(secret: str) -> str:
    """Show only enough of a credential to tell two apart"""
    if len(secret) <= 12:
        return "<hidden>"
    return f"{secret[:4]}...{secret[-4:]}"
