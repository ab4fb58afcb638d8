"""
Backlog task model definitions.

Tasks are the stored to-do items from which today's work items are selected.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from dayplan.models.enums import Priority, TaskCategory, TaskStatus


class BacklogTask(BaseModel):
    """Stored backlog task as supplied by the task store."""

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(..., min_length=1, max_length=500)
    category: TaskCategory = TaskCategory.NOW
    minutes: int = Field(..., ge=1, description="Estimated minutes")
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime
    due_date: Optional[date] = None
    priority: Optional[Priority] = None
