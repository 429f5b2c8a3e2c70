from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from duty_roster.db.models.plan import DutyPlan, DutyPlanRun
from duty_roster.schemas.duty import DutyInputBundle, DutyPlanCreate, DutyPlanUpdate, DutyScheduleRead


def _dump_inputs(inputs: DutyInputBundle) -> dict:
    return inputs.model_dump(mode="json")


async def list_plans(session: AsyncSession) -> list[DutyPlan]:
    result = await session.execute(select(DutyPlan).order_by(DutyPlan.id.asc()))
    return list(result.scalars().all())


async def get_plan(session: AsyncSession, plan_id: int) -> DutyPlan | None:
    return await session.get(DutyPlan, plan_id)


async def create_plan(session: AsyncSession, payload: DutyPlanCreate, *, default_year: int) -> DutyPlan:
    plan = DutyPlan(
        name=payload.name,
        month=payload.inputs.month,
        year=payload.inputs.year if payload.inputs.year is not None else default_year,
        inputs=_dump_inputs(payload.inputs),
    )
    session.add(plan)
    await session.flush()
    await session.refresh(plan)
    return plan


async def update_plan(
    session: AsyncSession, plan: DutyPlan, payload: DutyPlanUpdate, *, default_year: int
) -> DutyPlan:
    if payload.name is not None:
        plan.name = payload.name
    if payload.inputs is not None:
        plan.inputs = _dump_inputs(payload.inputs)
        plan.month = payload.inputs.month
        plan.year = payload.inputs.year if payload.inputs.year is not None else default_year
    await session.flush()
    await session.refresh(plan)
    return plan


async def delete_plan(session: AsyncSession, plan: DutyPlan) -> None:
    await session.delete(plan)


async def store_plan_run(
    session: AsyncSession,
    plan: DutyPlan,
    result: DutyScheduleRead,
) -> DutyPlanRun:
    """Persist a generated schedule as the next numbered run of *plan*."""

    count_result = await session.execute(
        select(func.count(DutyPlanRun.id)).where(DutyPlanRun.plan_id == plan.id)
    )
    existing_count = count_result.scalar_one()

    run = DutyPlanRun(
        plan_id=plan.id,
        version_label=f"v{existing_count + 1}",
        seed=result.seed,
        result=result.model_dump(mode="json"),
    )
    session.add(run)
    await session.flush()
    await session.refresh(run)
    return run


async def list_runs(session: AsyncSession, plan_id: int) -> list[DutyPlanRun]:
    result = await session.execute(
        select(DutyPlanRun).where(DutyPlanRun.plan_id == plan_id).order_by(DutyPlanRun.id.desc())
    )
    return list(result.scalars().all())


async def get_latest_run(session: AsyncSession, plan_id: int) -> DutyPlanRun | None:
    result = await session.execute(
        select(DutyPlanRun).where(DutyPlanRun.plan_id == plan_id).order_by(DutyPlanRun.id.desc()).limit(1)
    )
    return result.scalars().first()
