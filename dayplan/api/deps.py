"""
Dependency injection for API endpoints.
"""

from typing import Annotated

from fastapi import Depends

from dayplan.core.config import get_settings
from dayplan.services.day_plan_service import DayPlanService


def get_day_plan_service() -> DayPlanService:
    """Get DayPlanService configured from settings."""
    settings = get_settings()
    return DayPlanService(
        reply_interval_minutes=settings.SCHEDULE_REPLY_INTERVAL_MINUTES,
        deep_work_threshold_minutes=settings.SCHEDULE_DEEP_WORK_THRESHOLD_MINUTES,
    )


DayPlanner = Annotated[DayPlanService, Depends(get_day_plan_service)]
