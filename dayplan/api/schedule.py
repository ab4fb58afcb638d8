"""
Schedule API endpoints.

Generates today's timeline from fixed events and the task backlog.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from dayplan.api.deps import DayPlanner
from dayplan.core.exceptions import ValidationError
from dayplan.core.logger import setup_logger
from dayplan.models.schedule import FixedEvent, GenerationResult
from dayplan.models.task import BacklogTask
from dayplan.services.task_utils import select_todays_backlog

logger = setup_logger(__name__)

router = APIRouter()


class ScheduleGenerateRequest(BaseModel):
    """Request body for schedule generation."""

    fixed_events: list[FixedEvent] = Field(default_factory=list)
    tasks: list[BacklogTask] = Field(default_factory=list)
    now: Optional[datetime] = Field(
        None, description="Invocation time override (local wall clock); defaults to the server clock"
    )


@router.post("/generate", response_model=GenerationResult, status_code=status.HTTP_200_OK)
async def generate_schedule(
    request: ScheduleGenerateRequest,
    planner: DayPlanner,
) -> GenerationResult:
    """
    Generate the rest of today's schedule.

    Places fixed events, reply windows, lunch, dinner and the family block,
    then fills remaining daytime with today's pending tasks.

    Returns:
        GenerationResult: Sorted slots, warnings and run metadata
    """
    now = request.now or datetime.now()
    backlog = select_todays_backlog(request.tasks, now.date())
    try:
        return planner.generate(now, request.fixed_events, backlog)
    except ValidationError as exc:
        logger.info(f"Rejected schedule request: {exc.message}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.message,
        ) from exc
