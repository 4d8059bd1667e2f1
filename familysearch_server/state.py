"""Process-wide configuration, credential store and API client."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .client import FamilySearchClient
from .constants import DEFAULT_ENVIRONMENT, DEFAULT_TIMEOUT, ENVIRONMENTS
from .credentials import CredentialStore

CONFIG_FILENAME = "config.json"

# Configuration (set by configure() at startup)
CONFIG_DIR: Path | None = None
ENVIRONMENT: str = DEFAULT_ENVIRONMENT
TIMEOUT: float = DEFAULT_TIMEOUT

credentials: CredentialStore | None = None
client: FamilySearchClient | None = None


def _resolve_config_dir() -> Path:
    """Get the config directory from FAMILYSEARCH_CONFIG_DIR, default ~/.familysearch-mcp."""
    env_dir = os.getenv("FAMILYSEARCH_CONFIG_DIR")
    path = Path(env_dir) if env_dir else Path.home() / ".familysearch-mcp"
    return path.expanduser().resolve()


def _resolve_environment() -> str:
    """Get the FamilySearch environment name.

    Raises:
        ValueError: If FAMILYSEARCH_ENVIRONMENT names an unknown environment.
    """
    environment = os.getenv("FAMILYSEARCH_ENVIRONMENT", DEFAULT_ENVIRONMENT).strip().lower()
    if environment not in ENVIRONMENTS:
        raise ValueError(
            f"Unknown FAMILYSEARCH_ENVIRONMENT '{environment}'. "
            f"Expected one of: {', '.join(ENVIRONMENTS)}"
        )
    return environment


def _resolve_timeout() -> float:
    raw = os.getenv("FAMILYSEARCH_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError as e:
        raise ValueError(f"FAMILYSEARCH_TIMEOUT must be a number of seconds, got '{raw}'") from e
    if timeout <= 0:
        raise ValueError(f"FAMILYSEARCH_TIMEOUT must be positive, got '{raw}'")
    return timeout


def configure() -> None:
    """Initialize configuration from environment. Called at startup.

    Loads .env file if present (existing env vars win), then builds the
    credential store from disk and the API client on top of it.
    """
    global CONFIG_DIR, ENVIRONMENT, TIMEOUT, credentials, client
    load_dotenv()
    CONFIG_DIR = _resolve_config_dir()
    ENVIRONMENT = _resolve_environment()
    TIMEOUT = _resolve_timeout()

    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    credentials = CredentialStore(CONFIG_DIR / CONFIG_FILENAME)
    credentials.load()
    client = FamilySearchClient(credentials, environment=ENVIRONMENT, timeout=TIMEOUT)


def get_client() -> FamilySearchClient:
    """Return the configured client, configuring on first use."""
    if client is None:
        configure()
    assert client is not None
    return client
