"""
Shared pytest fixtures for JournalTask tests.
"""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from journaltask.models import ExtractionResult, Task, TaskStatus
from journaltask.store import LocalStorage, TaskStore


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage(temp_dir):
    """LocalStorage rooted in a temporary data directory."""
    return LocalStorage(temp_dir / "data")


@pytest.fixture
def task_store(storage):
    return TaskStore(storage)


@pytest.fixture(autouse=True)
def isolated_env(temp_dir, monkeypatch):
    """Keep tests away from the real home directory and Google settings."""
    monkeypatch.setenv("JOURNALTASK_HOME", str(temp_dir / "home"))
    for var in ("GOOGLE_CLIENT_ID", "GOOGLE_OAUTH_CLIENT_ID", "GOOGLE_OAUTH_CLIENT_SECRET"):
        monkeypatch.delenv(var, raising=False)


def make_task(task_id: str, status: TaskStatus = TaskStatus.TODO, **overrides) -> Task:
    """Build a Task with sensible defaults."""
    fields = {
        "id": task_id,
        "title": task_id.replace("-", " ").title(),
        "description": f"Description of {task_id}",
        "category": "Work",
        "status": status,
        "is_urgent": False,
        "dependencies": [],
        "created_at": "2024-05-15",
        "due_date": None,
    }
    fields.update(overrides)
    return Task(**fields)


@pytest.fixture
def sample_tasks():
    """A small task set with one dependency and mixed statuses."""
    return [
        make_task("update-calendar", TaskStatus.DONE, category="Work"),
        make_task("prepare-roadmap", is_urgent=True, due_date="2024-05-20"),
        make_task("approve-mockups"),
        make_task("start-frontend", dependencies=["approve-mockups"]),
        make_task("buy-supplies", category="Personal"),
    ]


@pytest.fixture
def sample_task_dicts():
    """Extraction response entries for the logo/guide journal."""
    return [
        {
            "id": "finish-logo",
            "title": "Finished the logo",
            "description": "Logo design is complete",
            "dueDate": None,
            "category": "Work",
            "status": "done",
            "isUrgent": False,
            "dependencies": [],
            "createdAt": "2024-12-01",
        },
        {
            "id": "draft-guide",
            "title": "Draft the guide",
            "description": "Write the first draft of the guide",
            "dueDate": "2024-12-05",
            "category": "Work",
            "status": "todo",
            "isUrgent": True,
            "dependencies": ["finish-logo"],
            "createdAt": "2024-12-01",
        },
    ]


class FakeExtractor:
    """Extraction collaborator returning canned results or raising canned errors."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def extract(self, journal_content):
        self.calls.append(journal_content)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return outcome(journal_content)
        return outcome


class FakeImporter:
    """Import collaborator returning canned text or raising a canned error."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.calls = 0

    def import_text(self):
        self.calls += 1
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


@pytest.fixture
def fixed_clock():
    moment = datetime(2024, 12, 1, 9, 30, 0)
    return lambda: moment


@pytest.fixture
def result_for(sample_tasks):
    """Wrap a task list in an ExtractionResult."""
    def _make(tasks=None):
        return ExtractionResult(tasks=list(sample_tasks if tasks is None else tasks))
    return _make
