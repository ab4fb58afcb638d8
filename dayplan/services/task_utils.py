"""
Task utility functions.

Helpers that turn stored backlog tasks into today's ordered work items.
"""

from datetime import date
from typing import Iterable, Optional

from dayplan.models.enums import Priority, TaskStatus
from dayplan.models.schedule import WorkItem
from dayplan.models.task import BacklogTask
from dayplan.utils.datetime_utils import ensure_utc

PRIORITY_RANKS = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


def priority_rank(priority: Optional[Priority]) -> int:
    """Numeric rank of a priority; tasks without one rank lowest."""
    if priority is None:
        return 0
    return PRIORITY_RANKS[priority]


def is_due_for_today(task: BacklogTask, today: date) -> bool:
    """Check if a task is pending and undated or due no later than today."""
    if task.status != TaskStatus.TODO:
        return False
    return task.due_date is None or task.due_date <= today


def select_todays_backlog(tasks: Iterable[BacklogTask], today: date) -> list[WorkItem]:
    """
    Build the work item list the day plan generator expects.

    Keeps pending tasks that are undated or due by today, ordered by
    priority rank (highest first), then by creation time (oldest first).

    Args:
        tasks: Stored backlog tasks
        today: The planning day

    Returns:
        Ordered work items
    """
    selected = [task for task in tasks if is_due_for_today(task, today)]
    selected.sort(key=lambda task: (-priority_rank(task.priority), ensure_utc(task.created_at)))
    return [
        WorkItem(
            title=task.title,
            duration_minutes=task.minutes,
            priority_rank=priority_rank(task.priority),
            category=task.category.value,
        )
        for task in selected
    ]
