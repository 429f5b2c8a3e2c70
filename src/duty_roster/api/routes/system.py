from typing import Annotated

from fastapi import APIRouter, Depends, Query

from duty_roster.core.config import MAX_SCHEDULE_YEAR, MIN_SCHEDULE_YEAR, Settings, get_settings
from duty_roster.schemas.system import HolidayRead
from duty_roster.services.holidays import get_fixed_holidays

router = APIRouter()


@router.get("/settings")
async def read_settings(
    settings: Annotated[Settings, Depends(get_settings)]
) -> dict[str, str | int]:
    """Expose basic runtime metadata for diagnostics."""
    return {
        "environment": settings.environment,
        "project": settings.project_name,
        "version": settings.version,
        "schedule_year": settings.schedule_year,
        "aversion_cap": settings.aversion_cap,
    }


@router.get("/holidays", response_model=list[HolidayRead])
async def list_holidays(
    settings: Annotated[Settings, Depends(get_settings)],
    year: int | None = Query(default=None, ge=MIN_SCHEDULE_YEAR, le=MAX_SCHEDULE_YEAR),
) -> list[HolidayRead]:
    target_year = year if year is not None else settings.schedule_year
    holidays = get_fixed_holidays(target_year, settings.extra_holidays)
    return [HolidayRead.model_validate(item, from_attributes=True) for item in holidays]
