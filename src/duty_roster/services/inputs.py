"""Translate validated input bundles into engine contexts."""

from __future__ import annotations

import random

from duty_roster.core.config import Settings
from duty_roster.schemas.duty import DutyInputBundle, DutyScheduleRead
from duty_roster.services.calendar import ExcludedRange
from duty_roster.services.holidays import holiday_dates
from duty_roster.services.scheduler import (
    DutyContext,
    DutyRequirement,
    FixedAssignment,
    StaffMember,
    generate_duty_schedule,
)

# Seeds are stored in a 32-bit signed column.
MAX_SEED = 2**31 - 1


def augment_roster(bundle: DutyInputBundle) -> list[StaffMember]:
    """
    Return the roster with a leave-free member appended for every pinned
    name that is not already on it, in order of first appearance.
    """

    roster = [
        StaffMember(name=member.name, leave_start=member.leave_start, leave_end=member.leave_end)
        for member in bundle.staff
    ]
    known = {member.name for member in roster}
    for item in bundle.fixed_assignments:
        if item.staff_name in known:
            continue
        roster.append(StaffMember(name=item.staff_name))
        known.add(item.staff_name)
    return roster


def build_duty_context(bundle: DutyInputBundle, settings: Settings) -> DutyContext:
    year = bundle.year if bundle.year is not None else settings.schedule_year
    return DutyContext(
        month=bundle.month,
        year=year,
        requirements=[
            DutyRequirement(label=item.label, required_count=item.required_count)
            for item in bundle.duty_requirements
        ],
        staff=augment_roster(bundle),
        fixed_assignments=[
            FixedAssignment(day=item.date, duty_type=item.duty_type, staff_name=item.staff_name)
            for item in bundle.fixed_assignments
        ],
        excluded_ranges=[
            ExcludedRange(title=item.title, start=item.start, end=item.end)
            for item in bundle.excluded_date_ranges
        ],
        holidays=holiday_dates(year, settings.extra_holidays),
        aversion_cap=settings.aversion_cap,
    )


def generate_from_bundle(
    bundle: DutyInputBundle, settings: Settings, *, seed: int | None = None
) -> DutyScheduleRead:
    """Run the allocation engine for *bundle*, drawing a fresh seed when none is given."""

    if seed is None:
        seed = random.randrange(MAX_SEED)
    result = generate_duty_schedule(build_duty_context(bundle, settings), seed=seed)
    return DutyScheduleRead.model_validate(result, from_attributes=True)
