"""
Task and sync-state data model for JournalTask.

Tasks are serialized with the camelCase keys used by the extraction
response and the persisted "tasks" key.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .errors import ClassifiedError, ExtractionError


class TaskStatus(str, Enum):
    """Lifecycle of a task."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def parse(cls, value: Any) -> "TaskStatus":
        """Parse a wire status, accepting case and separator variants.

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(value, TaskStatus):
            return value
        normalized = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        return cls(normalized)


REQUIRED_TASK_FIELDS = (
    "id",
    "title",
    "description",
    "category",
    "status",
    "isUrgent",
    "dependencies",
    "createdAt",
)


@dataclass
class Task:
    """A unit of work extracted from a journal.

    `dependencies` holds IDs of predecessor tasks. They may reference tasks
    that are not in the current set, or form cycles; neither is rejected.
    """

    id: str
    title: str
    description: str
    category: str
    status: TaskStatus
    is_urgent: bool
    dependencies: list[str]
    created_at: str
    due_date: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> "Task":
        """Build a Task from its JSON form.

        Args:
            data: Mapping with camelCase keys; every key except dueDate is required

        Returns:
            The parsed Task

        Raises:
            ExtractionError: If a required key is missing or has the wrong type
        """
        if not isinstance(data, Mapping):
            raise ExtractionError(f"Task entry must be an object, got {type(data).__name__}")

        missing = [key for key in REQUIRED_TASK_FIELDS if key not in data]
        if missing:
            raise ExtractionError(f"Task {data.get('id', '?')!r} is missing fields: {', '.join(missing)}")

        dependencies = data["dependencies"]
        if not isinstance(dependencies, list):
            raise ExtractionError(f"Task {data['id']!r} has non-list dependencies")
        if not isinstance(data["isUrgent"], bool):
            raise ExtractionError(f"Task {data['id']!r} has non-boolean isUrgent")

        try:
            status = TaskStatus.parse(data["status"])
        except ValueError:
            raise ExtractionError(f"Task {data['id']!r} has unknown status {data['status']!r}") from None

        due_date = data.get("dueDate")
        if isinstance(due_date, str) and not due_date.strip():
            due_date = None

        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            description=str(data["description"]),
            category=str(data["category"]),
            status=status,
            is_urgent=data["isUrgent"],
            dependencies=[str(dep) for dep in dependencies],
            created_at=str(data["createdAt"]),
            due_date=str(due_date) if due_date is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date,
            "category": self.category,
            "status": self.status.value,
            "isUrgent": self.is_urgent,
            "dependencies": list(self.dependencies),
            "createdAt": self.created_at,
        }


@dataclass
class ExtractionResult:
    """Schema-validated response of the extraction service."""

    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "ExtractionResult":
        """Validate a decoded extraction response.

        None or an empty object normalizes to an empty result. Task IDs must be
        unique within one result.

        Raises:
            ExtractionError: If the payload does not match the response schema
        """
        if payload is None:
            return cls()
        if not isinstance(payload, Mapping):
            raise ExtractionError("Extraction response must be a JSON object with a 'tasks' list")

        raw_tasks = payload.get("tasks")
        if raw_tasks is None:
            return cls()
        if not isinstance(raw_tasks, list):
            raise ExtractionError("Extraction response 'tasks' must be a list")

        tasks = [Task.from_dict(item) for item in raw_tasks]

        seen = set()
        for task in tasks:
            if task.id in seen:
                raise ExtractionError(f"Duplicate task id in extraction result: {task.id!r}")
            seen.add(task.id)

        return cls(tasks=tasks)

    def to_dict(self) -> dict:
        return {"tasks": [task.to_dict() for task in self.tasks]}


class SyncPhase(Enum):
    IDLE = "idle"
    SYNCING = "syncing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncState:
    """Current phase of the sync state machine.

    `timestamp` is set only when SUCCEEDED; `error` only when FAILED.
    """

    phase: SyncPhase = SyncPhase.IDLE
    timestamp: datetime | None = None
    error: ClassifiedError | None = None

    @classmethod
    def idle(cls) -> "SyncState":
        return cls(SyncPhase.IDLE)

    @classmethod
    def syncing(cls) -> "SyncState":
        return cls(SyncPhase.SYNCING)

    @classmethod
    def succeeded(cls, timestamp: datetime) -> "SyncState":
        return cls(SyncPhase.SUCCEEDED, timestamp=timestamp)

    @classmethod
    def failed(cls, error: ClassifiedError) -> "SyncState":
        return cls(SyncPhase.FAILED, error=error)

    @property
    def is_syncing(self) -> bool:
        return self.phase is SyncPhase.SYNCING

    @property
    def is_failed(self) -> bool:
        return self.phase is SyncPhase.FAILED
