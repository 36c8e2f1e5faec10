"""
Google Drive integration for JournalTask.

Lists journal-capable files and downloads their text using a bearer access
token obtained from the OAuth flow.
"""

import io
import logging
from dataclasses import dataclass

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload

from .errors import DriveHTTPError

logger = logging.getLogger(__name__)

GOOGLE_DOC_MIME_TYPE = "application/vnd.google-apps.document"

# Google-native (rich) documents have no raw bytes and must be exported
EXPORT_MIME_TYPES = {
    GOOGLE_DOC_MIME_TYPE: "text/plain",
    "application/vnd.google-apps.presentation": "text/plain",
    "application/vnd.google-apps.spreadsheet": "text/csv",
}

# Files offered by the picker
JOURNAL_MIME_TYPES = {
    "text/plain",
    "text/markdown",
    GOOGLE_DOC_MIME_TYPE,
}


@dataclass(frozen=True)
class FileRef:
    """A file chosen in the picker."""

    id: str
    name: str
    mime_type: str


class GoogleDriveClient:
    """Client for reading journal files from Google Drive."""

    def __init__(self, access_token: str | None = None, credentials: Credentials | None = None):
        """Initialize the Google Drive client.

        Args:
            access_token: OAuth bearer token
            credentials: Full OAuth credentials (used instead of access_token if given)

        Raises:
            ValueError: If neither an access token nor credentials are provided.
        """
        if credentials is None and not access_token:
            raise ValueError(
                "OAuth credentials required. Please authenticate with Google Drive first."
            )

        self.credentials = credentials or Credentials(token=access_token)
        self._service = None

    @property
    def service(self):
        """Lazily initialize and return the Google Drive service."""
        if self._service is None:
            self._service = build("drive", "v3", credentials=self.credentials, cache_discovery=False)
        return self._service

    def list_journal_files(self, limit: int = 20) -> list[FileRef]:
        """List the most recently modified journal-capable files in the user's drive.

        Args:
            limit: Maximum number of files to return

        Returns:
            FileRefs ordered by modification time, newest first
        """
        mime_conditions = " or ".join(
            f"mimeType = '{mime}'" for mime in sorted(JOURNAL_MIME_TYPES)
        )
        query = f"({mime_conditions}) and trashed = false"

        results = self.service.files().list(
            q=query,
            fields="files(id, name, mimeType, modifiedTime)",
            pageSize=limit,
            orderBy="modifiedTime desc",
        ).execute()

        return [
            FileRef(id=f["id"], name=f["name"], mime_type=f["mimeType"])
            for f in results.get("files", [])
        ]

    def download_file(self, file_id: str) -> bytes:
        """Download a file's raw content.

        Args:
            file_id: The Google Drive file ID

        Returns:
            The file content as bytes
        """
        request = self.service.files().get_media(fileId=file_id)
        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, request)

        done = False
        while not done:
            _, done = downloader.next_chunk()

        buffer.seek(0)
        return buffer.read()

    def export_file(self, file_id: str, mime_type: str = "text/plain") -> bytes:
        """Export a Google-native document to the given format.

        Args:
            file_id: The Google Drive file ID
            mime_type: Target export MIME type

        Returns:
            The exported content as bytes
        """
        content = self.service.files().export(fileId=file_id, mimeType=mime_type).execute()
        if isinstance(content, str):
            return content.encode("utf-8")
        return content

    def fetch_file_content(self, file_id: str, mime_type: str) -> str:
        """Fetch a file's content as text.

        Rich documents are exported as plain text; everything else is
        downloaded as raw bytes.

        Args:
            file_id: The Google Drive file ID
            mime_type: The file's MIME type as reported by Drive

        Returns:
            The file content as a string

        Raises:
            DriveHTTPError: If Drive answers with a non-2xx status
        """
        export_type = EXPORT_MIME_TYPES.get(mime_type)
        try:
            if export_type:
                logger.debug("Exporting %s (%s) as %s", file_id, mime_type, export_type)
                content = self.export_file(file_id, export_type)
            else:
                logger.debug("Downloading %s (%s)", file_id, mime_type)
                content = self.download_file(file_id)
        except HttpError as e:
            status = int(e.resp.status)
            reason = getattr(e, "reason", "") or ""
            if status == 403:
                raise DriveHTTPError(
                    status, f"Access denied ({reason}). Check Drive API permissions in GCP."
                ) from e
            raise DriveHTTPError(status, f"Drive Error: HTTP {status} {reason}".rstrip()) from e

        # utf-8-sig drops the BOM Drive prepends to exported documents
        return content.decode("utf-8-sig")
