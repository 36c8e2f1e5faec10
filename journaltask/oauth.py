"""
OAuth 2.0 authentication for the Google Drive import.

Handles the consent flow, encrypted token storage, and automatic token refresh.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from .config import ImportConfig, get_data_dir

logger = logging.getLogger(__name__)

# Read-only Drive access plus files opened with the app
SCOPES = [
    "https://www.googleapis.com/auth/drive.readonly",
    "https://www.googleapis.com/auth/drive.file",
]

TOKEN_FILENAME = "oauth_tokens.json"
KEY_FILENAME = "encryption.key"


class OAuthManager:
    """Manages OAuth 2.0 authentication and token persistence."""

    def __init__(self, config: ImportConfig, data_dir: Path | None = None):
        """Initialize OAuth manager.

        Args:
            config: Import settings holding the OAuth client ID and secret
            data_dir: Where tokens and the encryption key live (defaults to get_data_dir())
        """
        self.config = config
        self.data_dir = Path(data_dir) if data_dir else get_data_dir()
        self.token_file = self.data_dir / TOKEN_FILENAME
        self.key_file = self.data_dir / KEY_FILENAME
        self._ensure_directories()
        self._ensure_encryption_key()

    def _ensure_directories(self):
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _ensure_encryption_key(self):
        """Generate or load encryption key for token storage."""
        if not self.key_file.exists():
            key = Fernet.generate_key()
            self.key_file.write_bytes(key)
            # Owner read/write only
            self.key_file.chmod(0o600)

        self._cipher = Fernet(self.key_file.read_bytes())

    def _client_config(self) -> dict:
        return {
            "installed": {
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": ["http://localhost"],
            }
        }

    def authorize(self) -> Credentials:
        """Run the interactive consent flow in the user's browser.

        Errors from Google (access_denied, redirect_uri_mismatch, ...) propagate
        to the caller for classification.

        Returns:
            Fresh OAuth credentials, already saved to disk
        """
        flow = InstalledAppFlow.from_client_config(self._client_config(), scopes=SCOPES)
        credentials = flow.run_local_server(
            port=0,
            access_type="offline",  # Request refresh token
            prompt="consent",
            open_browser=True,
        )

        self.save_credentials(credentials)
        return credentials

    def save_credentials(self, credentials: Credentials):
        """Save OAuth credentials to encrypted file.

        Args:
            credentials: Google OAuth credentials to save
        """
        token_data = {
            "token": credentials.token,
            "refresh_token": credentials.refresh_token,
            "token_uri": credentials.token_uri,
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "scopes": credentials.scopes,
            "expiry": credentials.expiry.isoformat() if credentials.expiry else None,
        }

        encrypted_data = self._cipher.encrypt(json.dumps(token_data).encode())

        self.token_file.write_bytes(encrypted_data)
        self.token_file.chmod(0o600)

    def load_credentials(self) -> Optional[Credentials]:
        """Load OAuth credentials from encrypted file.

        Saved tokens issued to a different client ID are ignored.

        Returns:
            Credentials object or None if no usable saved credentials exist
        """
        if not self.token_file.exists():
            return None

        try:
            token_json = self._cipher.decrypt(self.token_file.read_bytes()).decode()
            token_data = json.loads(token_json)
        except (InvalidToken, ValueError) as e:
            logger.warning("Discarding unreadable OAuth token file: %s", e)
            return None

        if token_data.get("client_id") != self.config.client_id:
            logger.info("Saved OAuth token belongs to another client ID; re-authenticating")
            return None

        expiry = token_data.get("expiry")
        credentials = Credentials(
            token=token_data["token"],
            refresh_token=token_data.get("refresh_token"),
            token_uri=token_data["token_uri"],
            client_id=token_data["client_id"],
            client_secret=token_data.get("client_secret"),
            scopes=token_data.get("scopes"),
            expiry=datetime.fromisoformat(expiry).replace(tzinfo=None) if expiry else None,
        )

        if credentials.expired and credentials.refresh_token:
            try:
                credentials.refresh(Request())
            except RefreshError as e:
                # Revoked or expired refresh token: fall back to a new consent flow
                logger.warning("OAuth token refresh failed: %s", e)
                return None
            self.save_credentials(credentials)

        return credentials

    def get_credentials(self) -> Credentials:
        """Return valid credentials, running the consent flow if needed."""
        credentials = self.load_credentials()
        if credentials is not None and credentials.valid:
            return credentials
        return self.authorize()

    def is_authenticated(self) -> bool:
        """Check if user has valid OAuth credentials.

        Returns:
            True if authenticated with valid tokens
        """
        credentials = self.load_credentials()
        return credentials is not None and credentials.valid

    def clear_credentials(self):
        """Remove saved OAuth credentials (logout)."""
        self.token_file.unlink(missing_ok=True)
