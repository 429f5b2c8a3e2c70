from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from duty_roster.core.config import Settings, get_settings
from duty_roster.db.models.plan import DutyPlan, DutyPlanRun
from duty_roster.db.session import get_db_session
from duty_roster.repositories import plan as plan_repo
from duty_roster.schemas.duty import (
    DutyInputBundle,
    DutyPlanCreate,
    DutyPlanRead,
    DutyPlanRunRead,
    DutyPlanUpdate,
    DutyScheduleRead,
    StaffStatisticsRead,
    WeekTableRead,
)
from duty_roster.services.export import build_week_tables, staff_statistics
from duty_roster.services.inputs import MAX_SEED, generate_from_bundle

router = APIRouter()


async def _require_plan(session: AsyncSession, plan_id: int) -> DutyPlan:
    plan = await plan_repo.get_plan(session, plan_id)
    if not plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Duty plan not found")
    return plan


async def _require_latest_run(session: AsyncSession, plan_id: int) -> DutyPlanRun:
    await _require_plan(session, plan_id)
    run = await plan_repo.get_latest_run(session, plan_id)
    if not run:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Duty plan has not been generated yet")
    return run


@router.get("/", response_model=list[DutyPlanRead])
async def list_plans(session: Annotated[AsyncSession, Depends(get_db_session)]) -> list[DutyPlanRead]:
    plans = await plan_repo.list_plans(session)
    return [DutyPlanRead.model_validate(plan) for plan in plans]


@router.post("/", response_model=DutyPlanRead, status_code=status.HTTP_201_CREATED)
async def create_plan(
    payload: DutyPlanCreate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DutyPlanRead:
    plan = await plan_repo.create_plan(session, payload, default_year=settings.schedule_year)
    await session.commit()
    return DutyPlanRead.model_validate(plan)


@router.get("/{plan_id}", response_model=DutyPlanRead)
async def read_plan(
    plan_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> DutyPlanRead:
    plan = await _require_plan(session, plan_id)
    return DutyPlanRead.model_validate(plan)


@router.put("/{plan_id}", response_model=DutyPlanRead)
async def update_plan(
    plan_id: int,
    payload: DutyPlanUpdate,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> DutyPlanRead:
    plan = await _require_plan(session, plan_id)
    plan = await plan_repo.update_plan(session, plan, payload, default_year=settings.schedule_year)
    await session.commit()
    return DutyPlanRead.model_validate(plan)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(
    plan_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> None:
    plan = await _require_plan(session, plan_id)
    await plan_repo.delete_plan(session, plan)
    await session.commit()


@router.post("/{plan_id}/generate", response_model=DutyPlanRunRead, status_code=status.HTTP_201_CREATED)
async def generate_plan(
    plan_id: int,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    seed: Annotated[int | None, Body(embed=True, ge=0, le=MAX_SEED)] = None,
) -> DutyPlanRunRead:
    """
    Re-run the allocation for a stored plan.

    Each call reshuffles tie-breaks (unless a seed is supplied) and is kept as
    a new numbered run; earlier runs are left untouched.
    """
    plan = await _require_plan(session, plan_id)
    bundle = DutyInputBundle.model_validate(plan.inputs)
    result = generate_from_bundle(bundle, settings, seed=seed)
    run = await plan_repo.store_plan_run(session, plan, result)
    await session.commit()
    return DutyPlanRunRead.model_validate(run)


@router.get("/{plan_id}/runs", response_model=list[DutyPlanRunRead])
async def list_plan_runs(
    plan_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[DutyPlanRunRead]:
    await _require_plan(session, plan_id)
    runs = await plan_repo.list_runs(session, plan_id)
    return [DutyPlanRunRead.model_validate(run) for run in runs]


@router.get("/{plan_id}/runs/latest", response_model=DutyPlanRunRead)
async def read_latest_run(
    plan_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> DutyPlanRunRead:
    run = await _require_latest_run(session, plan_id)
    return DutyPlanRunRead.model_validate(run)


@router.get("/{plan_id}/runs/latest/weeks", response_model=list[WeekTableRead])
async def read_latest_weeks(
    plan_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[WeekTableRead]:
    run = await _require_latest_run(session, plan_id)
    result = DutyScheduleRead.model_validate(run.result)
    tables = build_week_tables(result.schedule, result.leave_index)
    return [WeekTableRead.model_validate(table, from_attributes=True) for table in tables]


@router.get("/{plan_id}/runs/latest/statistics", response_model=list[StaffStatisticsRead])
async def read_latest_statistics(
    plan_id: int, session: Annotated[AsyncSession, Depends(get_db_session)]
) -> list[StaffStatisticsRead]:
    run = await _require_latest_run(session, plan_id)
    result = DutyScheduleRead.model_validate(run.result)
    statistics = staff_statistics(result.duty_stats, result.unfairness)
    return [StaffStatisticsRead.model_validate(item, from_attributes=True) for item in statistics]
