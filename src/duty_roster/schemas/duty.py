from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from duty_roster.core.config import MAX_SCHEDULE_YEAR, MIN_SCHEDULE_YEAR
from duty_roster.services.classifier import AversionCategory, DutyType, coerce_duty_type


class DutyRequirementIn(BaseModel):
    label: str
    required_count: int = Field(default=0, ge=0)


class StaffMemberIn(BaseModel):
    name: str = Field(min_length=1)
    leave_start: date | None = None
    leave_end: date | None = None

    @model_validator(mode="after")
    def validate_leave_window(self) -> "StaffMemberIn":
        if (self.leave_start is None) != (self.leave_end is None):
            raise ValueError(f"leave start and end must both be set for {self.name}")
        if self.leave_start and self.leave_end and self.leave_start > self.leave_end:
            raise ValueError(f"leave start cannot be after leave end for {self.name}")
        return self


class FixedAssignmentIn(BaseModel):
    date: date
    duty_type: DutyType
    staff_name: str = Field(min_length=1)

    @field_validator("duty_type", mode="before")
    @classmethod
    def classify_label(cls, value: Any) -> Any:
        if isinstance(value, str):
            return coerce_duty_type(value)
        return value


class ExcludedDateRangeIn(BaseModel):
    title: str = ""
    start: date
    end: date

    @model_validator(mode="after")
    def validate_bounds(self) -> "ExcludedDateRangeIn":
        if self.start > self.end:
            raise ValueError("excluded range start cannot be after its end")
        return self


class DutyInputBundle(BaseModel):
    """Everything a single allocation run needs, as collected from the planner."""

    duty_requirements: list[DutyRequirementIn]
    staff: list[StaffMemberIn]
    month: int = Field(ge=1, le=12)
    year: int | None = Field(default=None, ge=MIN_SCHEDULE_YEAR, le=MAX_SCHEDULE_YEAR)
    fixed_assignments: list[FixedAssignmentIn] = Field(default_factory=list)
    excluded_date_ranges: list[ExcludedDateRangeIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_roster(self) -> "DutyInputBundle":
        if not self.staff:
            raise ValueError("at least one staff member is required")
        names = [member.name for member in self.staff]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate staff names: {', '.join(duplicates)}")

        total_required = sum(item.required_count for item in self.duty_requirements)
        if total_required <= 0:
            raise ValueError("at least one duty requirement needs a positive count")
        roster_size = len(set(names) | {item.staff_name for item in self.fixed_assignments})
        if total_required > roster_size:
            raise ValueError(
                f"requested {total_required} staff per day but only {roster_size} are available"
            )

        seen: set[tuple[date, DutyType, str]] = set()
        for item in self.fixed_assignments:
            key = (item.date, item.duty_type, item.staff_name)
            if key in seen:
                raise ValueError(
                    f"{item.staff_name} is already fixed to {item.duty_type.value} on {item.date.isoformat()}"
                )
            seen.add(key)
        return self


class DutyGenerationRequest(BaseModel):
    inputs: DutyInputBundle
    seed: int | None = Field(default=None, ge=0, le=2**31 - 1)


class DutyScheduleRead(BaseModel):
    schedule: dict[date, dict[DutyType, list[str]]] = Field(default_factory=dict)
    leave_index: dict[date, list[str]] = Field(default_factory=dict)
    duty_stats: dict[str, dict[str, int]] = Field(default_factory=dict)
    aversion_stats: dict[str, dict[AversionCategory, int]] = Field(default_factory=dict)
    unfairness: dict[str, float] = Field(default_factory=dict)
    seed: int | None = None

    model_config = ConfigDict(from_attributes=True)


class WeekRowRead(BaseModel):
    label: str
    cells: list[list[str]]

    model_config = ConfigDict(from_attributes=True)


class WeekTableRead(BaseModel):
    week_start: date
    headers: list[str]
    dates: list[date | None]
    rows: list[WeekRowRead]

    model_config = ConfigDict(from_attributes=True)


class StaffStatisticsRead(BaseModel):
    name: str
    counts: dict[str, int]
    total: int
    share_percent: float
    unfairness: float

    model_config = ConfigDict(from_attributes=True)


class DutyPlanBase(BaseModel):
    name: str = "Draft"


class DutyPlanCreate(DutyPlanBase):
    inputs: DutyInputBundle


class DutyPlanUpdate(BaseModel):
    name: str | None = None
    inputs: DutyInputBundle | None = None


class DutyPlanRead(DutyPlanBase):
    id: int
    month: int
    year: int
    inputs: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DutyPlanRunRead(BaseModel):
    id: int
    plan_id: int
    version_label: str
    seed: int | None
    result: DutyScheduleRead
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
