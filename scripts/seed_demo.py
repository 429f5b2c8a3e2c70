"""Store a demo duty plan and its first generated run for local development.

Run this after applying Alembic migrations:

    python -m alembic upgrade head
    python scripts/seed_demo.py
"""

from __future__ import annotations

import asyncio
from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from duty_roster.core.config import get_settings
from duty_roster.core.logging import configure_logging
from duty_roster.db.models.plan import DutyPlan
from duty_roster.repositories import plan as plan_repo
from duty_roster.schemas.duty import DutyInputBundle, DutyPlanCreate
from duty_roster.services.inputs import generate_from_bundle

DEMO_MONTH = 5
DEMO_STAFF = ["Kim", "Lee", "Park", "Choi", "Jung", "Kang", "Cho", "Yoon"]


def _demo_inputs(year: int) -> DutyInputBundle:
    staff = [{"name": name} for name in DEMO_STAFF]
    staff[1].update(leave_start=date(year, DEMO_MONTH, 12), leave_end=date(year, DEMO_MONTH, 16))
    staff[4].update(leave_start=date(year, DEMO_MONTH, 26), leave_end=date(year, DEMO_MONTH, 27))
    return DutyInputBundle.model_validate(
        {
            "month": DEMO_MONTH,
            "year": year,
            "duty_requirements": [
                {"label": "Morning duty 1", "required_count": 1},
                {"label": "Morning duty 2", "required_count": 1},
                {"label": "Afternoon duty 1", "required_count": 1},
                {"label": "Afternoon duty 2", "required_count": 1},
            ],
            "staff": staff,
            "fixed_assignments": [
                {"date": date(year, DEMO_MONTH, 7), "duty_type": "MorningA", "staff_name": "Principal Han"},
            ],
            "excluded_date_ranges": [
                {"title": "Sports day", "start": date(year, DEMO_MONTH, 22), "end": date(year, DEMO_MONTH, 23)},
            ],
        }
    )


async def seed() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    engine = create_async_engine(settings.database_url, future=True)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        existing_plans = await session.scalar(select(func.count(DutyPlan.id)))
        if not existing_plans:
            inputs = _demo_inputs(settings.schedule_year)
            plan = await plan_repo.create_plan(
                session,
                DutyPlanCreate(name="Demo roster", inputs=inputs),
                default_year=settings.schedule_year,
            )
            result = generate_from_bundle(inputs, settings, seed=2025)
            await plan_repo.store_plan_run(session, plan, result)
            await session.commit()

    await engine.dispose()


def main() -> None:
    asyncio.run(seed())


if __name__ == "__main__":
    main()
