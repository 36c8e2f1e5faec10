"""
Journal import from Google Drive.

`ImportClient` validates the OAuth settings, obtains an access token, lets
the user pick a file and downloads its text. Identity and picker details sit
behind the narrow `IdentityProvider` interface so the flow never depends on a
concrete SDK object.
"""

import logging
from collections.abc import Callable
from typing import Protocol

from .config import ImportConfig
from .gdrive import FileRef, GoogleDriveClient
from .oauth import OAuthManager

logger = logging.getLogger(__name__)

# Choose a file from the listed candidates; None means the user cancelled
Chooser = Callable[[list[FileRef]], FileRef | None]


class IdentityProvider(Protocol):
    """Token and picker operations needed by the import flow."""

    def request_access_token(self) -> str:
        """Obtain an OAuth access token, prompting for consent if needed."""
        ...

    def open_picker(self, access_token: str) -> FileRef | None:
        """Let the user choose a file; None if they cancelled."""
        ...


def console_chooser(files: list[FileRef], input_func=input, output_func=print) -> FileRef | None:
    """Prompt on the terminal for one of the listed files.

    A blank answer or "q" cancels.
    """
    if not files:
        output_func("No journal files found in Google Drive.")
        return None

    for index, ref in enumerate(files, start=1):
        output_func(f"  {index:>2}. {ref.name}")

    while True:
        answer = input_func("Select a file number (blank to cancel): ").strip().lower()
        if answer in ("", "q"):
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(files):
            return files[int(answer) - 1]
        output_func(f"Please enter a number between 1 and {len(files)}.")


class GoogleIdentityProvider:
    """IdentityProvider backed by the OAuth consent flow and a Drive file listing."""

    def __init__(
        self,
        oauth_manager: OAuthManager,
        chooser: Chooser = console_chooser,
        drive_factory=GoogleDriveClient,
    ):
        self.oauth_manager = oauth_manager
        self.chooser = chooser
        self.drive_factory = drive_factory

    def request_access_token(self) -> str:
        return self.oauth_manager.get_credentials().token

    def open_picker(self, access_token: str) -> FileRef | None:
        drive = self.drive_factory(access_token=access_token)
        return self.chooser(drive.list_journal_files())


class ImportClient:
    """Imports journal text from a user-chosen Google Drive file."""

    def __init__(self, config: ImportConfig, identity: IdentityProvider, drive_factory=GoogleDriveClient):
        """Initialize the import client.

        Args:
            config: Resolved import settings
            identity: Token/picker provider
            drive_factory: Callable building a Drive client from access_token=
        """
        self.config = config
        self.identity = identity
        self.drive_factory = drive_factory

    def import_text(self) -> str | None:
        """Run the import flow.

        Returns:
            The chosen file's text, or None if the user cancelled the picker

        Raises:
            ImportConfigError: If the client ID is missing or malformed (before any network call)
            Exception: OAuth and HTTP failures propagate unclassified
        """
        self.config.validate()

        access_token = self.identity.request_access_token()
        file_ref = self.identity.open_picker(access_token)
        if file_ref is None:
            logger.info("Drive import cancelled by user")
            return None

        logger.info("Importing %s (%s) from Google Drive", file_ref.name, file_ref.mime_type)
        drive = self.drive_factory(access_token=access_token)
        return drive.fetch_file_content(file_ref.id, file_ref.mime_type)


def build_import_client(config: ImportConfig, chooser: Chooser = console_chooser) -> ImportClient:
    """Wire an ImportClient to the Google OAuth flow and Drive picker."""
    identity = GoogleIdentityProvider(OAuthManager(config), chooser=chooser)
    return ImportClient(config, identity)
