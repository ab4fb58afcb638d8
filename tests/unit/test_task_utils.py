"""
Unit tests for backlog selection helpers.
"""

from datetime import date, datetime, timedelta, timezone

from dayplan.models.enums import Priority, TaskCategory, TaskStatus
from dayplan.models.task import BacklogTask
from dayplan.services.task_utils import is_due_for_today, priority_rank, select_todays_backlog

TODAY = date(2026, 3, 2)
BASE = datetime(2026, 2, 1, 8, 0)


def make_task(
    title: str,
    *,
    minutes: int = 30,
    status: TaskStatus = TaskStatus.TODO,
    priority: Priority | None = Priority.MEDIUM,
    due_date: date | None = None,
    created_offset: int = 0,
    category: TaskCategory = TaskCategory.NOW,
) -> BacklogTask:
    return BacklogTask(
        title=title,
        minutes=minutes,
        status=status,
        priority=priority,
        due_date=due_date,
        created_at=BASE + timedelta(minutes=created_offset),
        category=category,
    )


def test_priority_rank():
    assert priority_rank(Priority.HIGH) == 3
    assert priority_rank(Priority.MEDIUM) == 2
    assert priority_rank(Priority.LOW) == 1
    assert priority_rank(None) == 0


def test_is_due_for_today():
    assert is_due_for_today(make_task("Undated"), TODAY)
    assert is_due_for_today(make_task("Due today", due_date=TODAY), TODAY)
    assert is_due_for_today(make_task("Overdue", due_date=TODAY - timedelta(days=3)), TODAY)
    assert not is_due_for_today(make_task("Tomorrow", due_date=TODAY + timedelta(days=1)), TODAY)
    assert not is_due_for_today(make_task("Done", status=TaskStatus.DONE), TODAY)
    assert not is_due_for_today(make_task("Deleted", status=TaskStatus.DELETED), TODAY)


def test_select_todays_backlog_orders_by_priority_then_creation():
    tasks = [
        make_task("Low", priority=Priority.LOW, created_offset=0),
        make_task("Medium newer", priority=Priority.MEDIUM, created_offset=20),
        make_task("No priority", priority=None, created_offset=-10),
        make_task("High", priority=Priority.HIGH, created_offset=30),
        make_task("Medium older", priority=Priority.MEDIUM, created_offset=10),
        make_task("Future", priority=Priority.HIGH, due_date=TODAY + timedelta(days=2)),
    ]

    backlog = select_todays_backlog(tasks, TODAY)

    assert [work.title for work in backlog] == [
        "High",
        "Medium older",
        "Medium newer",
        "Low",
        "No priority",
    ]
    assert [work.priority_rank for work in backlog] == [3, 2, 2, 1, 0]


def test_select_todays_backlog_maps_fields():
    task = make_task("Read paper", minutes=50, category=TaskCategory.FUTURE)

    (work,) = select_todays_backlog([task], TODAY)

    assert work.duration_minutes == 50
    assert work.category == "future"


def test_select_todays_backlog_orders_mixed_naive_and_aware_creation_times():
    aware = BacklogTask(
        title="Synced from calendar",
        minutes=30,
        priority=Priority.HIGH,
        created_at=datetime(2026, 3, 1, 10, 0, tzinfo=timezone.utc),
    )
    naive = BacklogTask(
        title="Typed in locally",
        minutes=30,
        priority=Priority.HIGH,
        created_at=datetime(2026, 3, 1, 11, 0),
    )

    backlog = select_todays_backlog([naive, aware], TODAY)

    assert [work.title for work in backlog] == ["Synced from calendar", "Typed in locally"]
