from typing import Annotated

from fastapi import APIRouter, Depends

from duty_roster.core.config import Settings, get_settings
from duty_roster.schemas.duty import (
    DutyGenerationRequest,
    DutyScheduleRead,
    StaffStatisticsRead,
    WeekTableRead,
)
from duty_roster.services.export import build_week_tables, staff_statistics
from duty_roster.services.inputs import generate_from_bundle

router = APIRouter()


@router.post("/generate", response_model=DutyScheduleRead)
async def generate_schedule(
    payload: DutyGenerationRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> DutyScheduleRead:
    """Run the allocation engine once without storing anything."""
    return generate_from_bundle(payload.inputs, settings, seed=payload.seed)


@router.post("/weeks", response_model=list[WeekTableRead])
async def export_weeks(payload: DutyScheduleRead) -> list[WeekTableRead]:
    tables = build_week_tables(payload.schedule, payload.leave_index)
    return [WeekTableRead.model_validate(table, from_attributes=True) for table in tables]


@router.post("/statistics", response_model=list[StaffStatisticsRead])
async def schedule_statistics(payload: DutyScheduleRead) -> list[StaffStatisticsRead]:
    statistics = staff_statistics(payload.duty_stats, payload.unfairness)
    return [StaffStatisticsRead.model_validate(item, from_attributes=True) for item in statistics]
