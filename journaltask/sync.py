"""
Sync orchestration for JournalTask.

`SyncOrchestrator` drives one sync from journal text to a committed task set:

    Idle/Succeeded/Failed --sync(text)--> Syncing --ok--> Succeeded
                                                  --error--> Failed

The committed task set is always empty or the result of the most recent
successful sync; failures never touch it. This is the only place where
collaborator exceptions are caught and classified.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Protocol

from .errors import ClassifiedError, FailureSource, classify_error
from .extraction import ExtractionClient
from .models import ExtractionResult, SyncState, Task
from .store import LocalStorage, TaskStore

logger = logging.getLogger(__name__)


class Extractor(Protocol):
    def extract(self, journal_content: str) -> ExtractionResult: ...


class Importer(Protocol):
    def import_text(self) -> str | None: ...


class SyncOrchestrator:
    """State machine coordinating extraction, classification and persistence."""

    def __init__(self, store: TaskStore, extractor: Extractor, clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.extractor = extractor
        self.clock = clock
        self.state = SyncState.idle()
        self.last_synced_at: datetime | None = None
        self._listeners: list[Callable[["SyncOrchestrator"], None]] = []
        self._tasks, self._journal_content = store.load()

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    @property
    def journal_content(self) -> str:
        return self._journal_content

    @property
    def error(self) -> ClassifiedError | None:
        return self.state.error

    def subscribe(self, listener: Callable[["SyncOrchestrator"], None]) -> None:
        """Call `listener(orchestrator)` after every commit or reset."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _settled_state(self) -> SyncState:
        if self.last_synced_at is not None:
            return SyncState.succeeded(self.last_synced_at)
        return SyncState.idle()

    def _fail(self, failure: Exception, source: FailureSource) -> None:
        error = classify_error(failure, source=source)
        if error.is_surfaced:
            logger.warning("%s failed (%s): %s", source.value.capitalize(), error.category.tag, error.message)
            self.state = SyncState.failed(error)
        else:
            logger.info("%s cancelled: %s", source.value.capitalize(), error.message)
            self.state = self._settled_state()

    def sync(self, text: str) -> bool:
        """Extract tasks from `text` and replace the committed task set.

        Rejected (returns False, nothing changes) when the text is blank or a
        sync is already running. Starting a sync clears any previous error.

        Returns:
            True if the new task set was committed
        """
        if not text or not text.strip():
            logger.debug("Ignoring sync request with empty journal text")
            return False
        if self.state.is_syncing:
            logger.warning("Sync already in progress; ignoring new request")
            return False

        self.state = SyncState.syncing()

        try:
            result = self.extractor.extract(text)
            tasks = list(result.tasks)
            self.store.save(tasks, text)
        except Exception as e:
            self._fail(e, FailureSource.EXTRACTION)
            return False

        self._tasks = tasks
        self._journal_content = text
        self.last_synced_at = self.clock()
        self.state = SyncState.succeeded(self.last_synced_at)
        logger.info("Sync committed %d task(s)", len(tasks))
        self._notify()
        return True

    def import_journal(self, importer: Importer) -> str | None:
        """Fetch journal text through the import collaborator.

        Never changes the task set. A cancelled import returns None without
        setting an error; any other failure moves to Failed.

        Returns:
            The imported text, or None if cancelled, failed, or a sync is running
        """
        if self.state.is_syncing:
            logger.warning("Sync in progress; ignoring import request")
            return None

        try:
            text = importer.import_text()
        except Exception as e:
            self._fail(e, FailureSource.IMPORT)
            return None

        return text

    def dismiss_error(self) -> None:
        """Clear the current error without re-syncing."""
        if self.state.is_failed:
            self.state = self._settled_state()

    def reset(self) -> bool:
        """Clear tasks, journal text and any error, in memory and on disk.

        Returns:
            False if a sync is running (nothing is cleared)
        """
        if self.state.is_syncing:
            logger.warning("Sync in progress; ignoring reset request")
            return False

        self.store.clear()
        self._tasks = []
        self._journal_content = ""
        self.last_synced_at = None
        self.state = SyncState.idle()
        self._notify()
        return True


def build_orchestrator(data_dir: Path) -> SyncOrchestrator:
    """Create an orchestrator over the task store in `data_dir`, extracting with Claude."""
    return SyncOrchestrator(TaskStore(LocalStorage(data_dir)), ExtractionClient())
