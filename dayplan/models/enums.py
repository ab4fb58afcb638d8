"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/priority values.
"""

from enum import Enum


class BlockKind(str, Enum):
    """Kind of a block on the generated timeline."""

    FIXED = "fixed"
    LUNCH = "lunch"
    DINNER = "dinner"
    REPLY = "reply"
    FAMILY = "family"
    WORK_LIGHT = "work-light"
    WORK_DEEP = "work-deep"


class TaskStatus(str, Enum):
    """Backlog task status."""

    TODO = "todo"
    DONE = "done"
    DELETED = "deleted"


class Priority(str, Enum):
    """Priority level of a backlog task."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskCategory(str, Enum):
    """
    Investment category of a backlog task.

    FUTURE = Work that pays off later
    NOW = Work needed for current results
    MAINTAIN = Upkeep of existing things
    CHORE = Miscellaneous small errands
    """

    FUTURE = "future"
    NOW = "now"
    MAINTAIN = "maintain"
    CHORE = "chore"
