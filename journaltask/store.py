"""
Durable local storage for JournalTask.

`LocalStorage` is a directory-backed key/value store (one file per key).
`TaskStore` persists the task set and the journal text together;
`SettingsStore` owns the user-entered Google client ID, which outlives a
workspace reset.
"""

import json
import logging
import os
import re
import tempfile
from pathlib import Path

from .errors import ExtractionError
from .models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
JOURNAL_KEY = "journal_content"
CLIENT_ID_KEY = "google_client_id"

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class LocalStorage:
    """Key/value strings persisted as files under a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / key

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Write a value atomically (temp file + rename)."""
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class TaskStore:
    """Persists the task set and the journal text as one unit."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def load(self) -> tuple[list[Task], str]:
        """Load the persisted task set and journal text.

        Missing keys yield empty defaults. A corrupt task collection (bytes that
        are not UTF-8, bad JSON, or entries that don't match the task schema) is
        logged and degrades to an empty list instead of failing startup; an
        unreadable journal degrades to "".

        Returns:
            Tuple of (tasks, journal_content)
        """
        try:
            journal = self.storage.get_item(JOURNAL_KEY) or ""
        except UnicodeDecodeError as e:
            logger.warning("Ignoring unreadable journal text in %s: %s", self.storage.directory, e)
            journal = ""

        try:
            raw_tasks = self.storage.get_item(TASKS_KEY)
            if not raw_tasks:
                return [], journal
            data = json.loads(raw_tasks)
            if not isinstance(data, list):
                raise ExtractionError("stored tasks are not a JSON array")
            tasks = [Task.from_dict(item) for item in data]
        except (ValueError, ExtractionError) as e:
            logger.warning("Ignoring corrupt task cache in %s: %s", self.storage.directory, e)
            return [], journal

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.storage.directory)
        return tasks, journal

    def _read_raw(self, key: str) -> str | None:
        try:
            return self.storage.get_item(key)
        except UnicodeDecodeError:
            return None

    def save(self, tasks: list[Task], journal_content: str) -> None:
        """Persist tasks and journal text together.

        Both values are serialized before anything is written. If the journal
        write fails, the previous task collection is put back, so the stored
        pair never mixes two syncs.
        """
        tasks_json = json.dumps([task.to_dict() for task in tasks], ensure_ascii=False, indent=2)
        previous_tasks = self._read_raw(TASKS_KEY)

        self.storage.set_item(TASKS_KEY, tasks_json)
        try:
            self.storage.set_item(JOURNAL_KEY, journal_content)
        except BaseException:
            if previous_tasks is None:
                self.storage.remove_item(TASKS_KEY)
            else:
                self.storage.set_item(TASKS_KEY, previous_tasks)
            raise
        logger.debug("Saved %d task(s) to %s", len(tasks), self.storage.directory)

    def clear(self) -> None:
        self.storage.remove_item(TASKS_KEY)
        self.storage.remove_item(JOURNAL_KEY)
        logger.info("Cleared workspace in %s", self.storage.directory)


class SettingsStore:
    """User settings with a lifecycle separate from the workspace."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage

    def get_client_id(self) -> str | None:
        value = self.storage.get_item(CLIENT_ID_KEY)
        if value is None or not value.strip():
            return None
        return value.strip()

    def set_client_id(self, client_id: str) -> None:
        self.storage.set_item(CLIENT_ID_KEY, client_id.strip())

    def clear_client_id(self) -> None:
        self.storage.remove_item(CLIENT_ID_KEY)
