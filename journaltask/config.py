"""
Configuration management for JournalTask.

Handles environment variables, API keys, model configuration, and the
Google Drive import settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path

import yaml
from dotenv import load_dotenv

from .errors import ImportConfigError

# Load environment variables from .env file (looks in repo root)
load_dotenv(Path(__file__).parent.parent / ".env")

# Path to model configuration file (at repository root, parent of package)
CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"

# Default model to use if not specified in config
DEFAULT_MODEL = "claude-haiku-4-5-20251001"

# Default location of the local key/value store
DEFAULT_DATA_DIR = Path.home() / ".journaltask"

# Every Google OAuth web/desktop client ID ends with this suffix
CLIENT_ID_SUFFIX = ".apps.googleusercontent.com"


def fetch_api_key(api_key: str | None = None) -> str:
    """Get Anthropic API key.

    Args:
        api_key: Optional API key to use directly

    Returns:
        The API key string

    Raises:
        ValueError: If no API key is available
    """
    if api_key:
        return api_key
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        raise ValueError("ANTHROPIC_API_KEY environment variable is not set")
    return api_key


def load_model_config() -> dict:
    """Load model configuration from YAML file.

    Returns:
        Dictionary of configuration parameters
    """
    if not CONFIG_PATH.exists():
        return {}

    with open(CONFIG_PATH) as f:
        config = yaml.safe_load(f)

    return config or {}


def get_data_dir() -> Path:
    """Directory holding persisted tasks, journal text, settings and OAuth tokens.

    Returns:
        JOURNALTASK_HOME if set, otherwise ~/.journaltask
    """
    env_dir = os.getenv("JOURNALTASK_HOME")
    if env_dir and env_dir.strip():
        return Path(env_dir.strip()).expanduser()
    return DEFAULT_DATA_DIR


def _clean(value: str | None) -> str:
    return value.strip() if value else ""


@dataclass
class ImportConfig:
    """Settings for the Google Drive import client.

    Replaces ambient module-level OAuth state: build one with `resolve()` and
    hand it to `ImportClient`.
    """

    client_id: str = ""
    client_secret: str = ""

    @classmethod
    def resolve(
        cls,
        stored_client_id: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
    ) -> "ImportConfig":
        """Build an ImportConfig from explicit values and the environment.

        Client ID precedence (first non-blank wins):
            1. client_id argument
            2. stored_client_id (the value the user saved under "google_client_id")
            3. GOOGLE_CLIENT_ID environment variable
            4. GOOGLE_OAUTH_CLIENT_ID environment variable

        Args:
            stored_client_id: User-entered client ID loaded from local settings
            client_id: Explicit override, e.g. from a CLI flag
            client_secret: Explicit client secret (falls back to GOOGLE_OAUTH_CLIENT_SECRET)

        Returns:
            A resolved ImportConfig (not yet validated)
        """
        candidates = [
            client_id,
            stored_client_id,
            os.getenv("GOOGLE_CLIENT_ID"),
            os.getenv("GOOGLE_OAUTH_CLIENT_ID"),
        ]
        resolved_id = next((_clean(c) for c in candidates if _clean(c)), "")

        return cls(
            client_id=resolved_id,
            client_secret=_clean(client_secret or os.getenv("GOOGLE_OAUTH_CLIENT_SECRET")),
        )

    def validate(self) -> None:
        """Check the client ID before any network call is attempted.

        Raises:
            ImportConfigError: If the client ID is missing or malformed
        """
        if not self.client_id:
            raise ImportConfigError(
                "Google Client ID is missing. Set it with `journaltask client-id <ID>` "
                "or GOOGLE_CLIENT_ID in .env."
            )
        if not self.client_id.endswith(CLIENT_ID_SUFFIX):
            raise ImportConfigError(
                f"Google Client ID must end with '{CLIENT_ID_SUFFIX}'. "
                "Copy the OAuth 2.0 Client ID from Google Cloud Console, not the API key."
            )
