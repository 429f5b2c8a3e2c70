from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from duty_roster.db.base import Base


class DutyPlan(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, default="Draft")
    month: Mapped[int] = mapped_column(Integer, index=True)
    year: Mapped[int] = mapped_column(Integer, index=True)
    # Raw input bundle as submitted by the planner; read back verbatim for every run.
    inputs: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    runs: Mapped[list["DutyPlanRun"]] = relationship(
        back_populates="plan", cascade="all, delete-orphan"
    )


class DutyPlanRun(Base):
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    plan_id: Mapped[int] = mapped_column(ForeignKey("dutyplan.id", ondelete="CASCADE"), index=True)
    version_label: Mapped[str] = mapped_column(String(32), default="v1")
    seed: Mapped[int | None] = mapped_column(Integer)
    result: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now(), nullable=False)

    plan: Mapped["DutyPlan"] = relationship(back_populates="runs")
