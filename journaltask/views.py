"""
Derived views over a task set.

Pure functions recomputed whenever the task set changes: status filters,
aggregate statistics, and dependency edges for the visualizer.
"""

from dataclasses import dataclass

from .models import Task, TaskStatus

FILTERS = ("all", "todo", "done")

# Pie chart colors for the stats panel
COMPLETED_COLOR = "#10b981"
PENDING_COLOR = "#3b82f6"


def filter_by_status(tasks: list[Task], status_filter: str) -> list[Task]:
    """Filter tasks by status, keeping their original order.

    Args:
        tasks: The task set
        status_filter: "all", "todo", or "done"

    Returns:
        New list of matching tasks

    Raises:
        ValueError: If the filter is not recognized
    """
    if status_filter == "all":
        return list(tasks)
    if status_filter == "todo":
        return [t for t in tasks if t.status is TaskStatus.TODO]
    if status_filter == "done":
        return [t for t in tasks if t.status is TaskStatus.DONE]
    raise ValueError(f"Unknown filter {status_filter!r}; expected one of {', '.join(FILTERS)}")


@dataclass(frozen=True)
class TaskStats:
    total: int = 0
    completed: int = 0
    pending: int = 0
    urgent: int = 0

    @property
    def completion_ratio(self) -> float:
        """Fraction of tasks done; 0.0 for an empty task set."""
        if self.total == 0:
            return 0.0
        return self.completed / self.total

    @property
    def completion_percent(self) -> int:
        return round(self.completion_ratio * 100)

    def chart_data(self) -> list[dict]:
        """Slices for the completed/pending pie chart."""
        return [
            {"name": "Completed", "value": self.completed, "color": COMPLETED_COLOR},
            {"name": "Pending", "value": self.pending, "color": PENDING_COLOR},
        ]


def compute_stats(tasks: list[Task]) -> TaskStats:
    total = len(tasks)
    completed = sum(1 for t in tasks if t.status is TaskStatus.DONE)
    urgent = sum(1 for t in tasks if t.is_urgent and t.status is not TaskStatus.DONE)
    return TaskStats(total=total, completed=completed, pending=total - completed, urgent=urgent)


def _titles_by_id(tasks: list[Task]) -> dict[str, str]:
    titles = {}
    for task in tasks:
        titles.setdefault(task.id, task.title)
    return titles


@dataclass(frozen=True)
class DependencyEdge:
    """A `predecessor -> dependent` relation recorded on the dependent task."""

    predecessor_id: str
    dependent_id: str
    predecessor_label: str
    dependent_label: str


def dependency_edges(tasks: list[Task]) -> list[DependencyEdge]:
    """List every dependency edge in task order.

    Dangling references are kept: their label is the raw predecessor ID.
    Cycles and self-references are reported as-is.
    """
    titles = _titles_by_id(tasks)

    edges = []
    for task in tasks:
        for dep_id in task.dependencies:
            edges.append(
                DependencyEdge(
                    predecessor_id=dep_id,
                    dependent_id=task.id,
                    predecessor_label=titles.get(dep_id) or dep_id,
                    dependent_label=task.title,
                )
            )
    return edges


def dependency_groups(tasks: list[Task]) -> list[tuple[Task, list[str]]]:
    """Group predecessor labels per dependent task, as the visualizer shows them.

    Returns:
        List of (dependent task, predecessor labels) for tasks with dependencies
    """
    titles = _titles_by_id(tasks)
    return [
        (task, [titles.get(dep_id) or dep_id for dep_id in task.dependencies])
        for task in tasks
        if task.dependencies
    ]
