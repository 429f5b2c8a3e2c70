from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Sequence, TypeVar

from duty_roster.services.calendar import CalendarDay, ExcludedRange, resolve_month, working_days
from duty_roster.services.classifier import (
    TOTAL_KEY,
    AversionCategory,
    DutyType,
    classify_aversion,
    classify_duty_label,
    empty_aversion_counts,
    empty_duty_counts,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
Shuffle = Callable[[list[T]], list[T]]

DEFAULT_SCHEDULE_YEAR = 2025
AVERSION_CAP = 2

AVERSION_WEIGHTS: dict[AversionCategory, float] = {
    AversionCategory.MONDAY_MORNING: 2.0,
    AversionCategory.FRIDAY_AFTERNOON: 1.5,
}
TOTAL_LOAD_WEIGHT = 0.5


@dataclass(frozen=True)
class DutyRequirement:
    label: str
    required_count: int

    @property
    def duty_type(self) -> DutyType:
        return classify_duty_label(self.label)


@dataclass(frozen=True)
class StaffMember:
    name: str
    leave_start: date | None = None
    leave_end: date | None = None

    def is_on_leave(self, day: date) -> bool:
        if self.leave_start is None or self.leave_end is None:
            return False
        return self.leave_start <= day <= self.leave_end


@dataclass(frozen=True)
class FixedAssignment:
    day: date
    duty_type: DutyType
    staff_name: str


@dataclass
class DutyContext:
    month: int
    requirements: list[DutyRequirement]
    staff: list[StaffMember]
    fixed_assignments: list[FixedAssignment] = field(default_factory=list)
    excluded_ranges: list[ExcludedRange] = field(default_factory=list)
    year: int = DEFAULT_SCHEDULE_YEAR
    holidays: frozenset[date] = frozenset()
    aversion_cap: int = AVERSION_CAP


Schedule = dict[date, dict[DutyType, list[str]]]
LeaveIndex = dict[date, list[str]]
DutyStats = dict[str, dict[str, int]]
AversionStats = dict[str, dict[str, int]]


@dataclass
class DutyScheduleResult:
    schedule: Schedule
    leave_index: LeaveIndex
    duty_stats: DutyStats
    aversion_stats: AversionStats
    unfairness: dict[str, float]
    calendar: list[CalendarDay] = field(default_factory=list)
    seed: int | None = None


def random_shuffle(rng: random.Random | None = None) -> Shuffle:
    """Return a shuffle function producing a uniform random permutation."""

    generator = rng or random.Random()

    def _shuffle(items: list[T]) -> list[T]:
        permuted = list(items)
        generator.shuffle(permuted)
        return permuted

    return _shuffle


def identity_shuffle(items: list[T]) -> list[T]:
    return list(items)


def build_leave_index(staff: Sequence[StaffMember], days: Iterable[date]) -> LeaveIndex:
    return {day: [member.name for member in staff if member.is_on_leave(day)] for day in days}


def init_statistics(staff: Sequence[StaffMember]) -> tuple[DutyStats, AversionStats]:
    duty_stats = {member.name: empty_duty_counts() for member in staff}
    aversion_stats = {member.name: empty_aversion_counts() for member in staff}
    return duty_stats, aversion_stats


def _record_duty(duty_stats: DutyStats, name: str, duty_type: DutyType) -> None:
    counts = duty_stats.setdefault(name, empty_duty_counts())
    counts[duty_type.value] += 1
    counts[TOTAL_KEY] += 1


def preload_fixed_assignments(
    fixed_assignments: Iterable[FixedAssignment],
    schedule: Schedule,
    duty_stats: DutyStats,
    aversion_stats: AversionStats,
    eligible_days: Iterable[date],
) -> set[tuple[date, DutyType]]:
    """
    Write pinned duties into the schedule and statistics before the greedy
    pass and return the (day, duty type) slots they occupy.

    Pinned duties are authoritative: leave, duplicates and capacity are not
    checked. Duties pinned to a day that is not eligible are skipped.
    """

    eligible = set(eligible_days)
    pinned_slots: set[tuple[date, DutyType]] = set()
    for assignment in fixed_assignments:
        if assignment.day not in eligible:
            logger.warning(
                "Skipping fixed duty %s for %s on %s: not a working day of the month",
                assignment.duty_type.value,
                assignment.staff_name,
                assignment.day.isoformat(),
            )
            continue
        schedule.setdefault(assignment.day, {}).setdefault(assignment.duty_type, []).append(
            assignment.staff_name
        )
        _record_duty(duty_stats, assignment.staff_name, assignment.duty_type)
        aversion_stats.setdefault(assignment.staff_name, empty_aversion_counts())
        pinned_slots.add((assignment.day, assignment.duty_type))
    return pinned_slots


def ranking_key(
    name: str,
    duty_type: DutyType,
    category: AversionCategory | None,
    duty_stats: DutyStats,
    aversion_stats: AversionStats,
) -> float:
    """Lower keys are picked first."""

    if category is None:
        return float(duty_stats[name][duty_type.value])
    aversion = aversion_stats[name]
    score = sum(weight * aversion[key.value] for key, weight in AVERSION_WEIGHTS.items())
    return score + TOTAL_LOAD_WEIGHT * duty_stats[name][TOTAL_KEY]


def _candidate_pool(
    staff: Sequence[StaffMember],
    on_leave: set[str],
    assigned_today: set[str],
    category: AversionCategory | None,
    aversion_stats: AversionStats,
    aversion_cap: int,
) -> list[StaffMember]:
    pool: list[StaffMember] = []
    for member in staff:
        if member.name in on_leave or member.name in assigned_today:
            continue
        if category is not None and aversion_stats[member.name][category.value] >= aversion_cap:
            continue
        pool.append(member)
    return pool


def assign_day(
    day: date,
    requirements: Sequence[DutyRequirement],
    staff: Sequence[StaffMember],
    *,
    schedule: Schedule,
    leave_index: LeaveIndex,
    duty_stats: DutyStats,
    aversion_stats: AversionStats,
    pinned_slots: set[tuple[date, DutyType]],
    shuffle: Shuffle,
    aversion_cap: int = AVERSION_CAP,
) -> None:
    on_leave = set(leave_index.get(day, []))
    assigned_today: set[str] = set()

    for requirement in requirements:
        if requirement.required_count <= 0:
            continue
        duty_type = requirement.duty_type
        if (day, duty_type) in pinned_slots:
            continue

        category = classify_aversion(day, duty_type)
        pool = _candidate_pool(staff, on_leave, assigned_today, category, aversion_stats, aversion_cap)
        ranked = sorted(
            shuffle(pool),
            key=lambda member: ranking_key(member.name, duty_type, category, duty_stats, aversion_stats),
        )
        selected = ranked[: requirement.required_count]

        slot = schedule.setdefault(day, {}).setdefault(duty_type, [])
        for member in selected:
            slot.append(member.name)
            assigned_today.add(member.name)
            _record_duty(duty_stats, member.name, duty_type)
            if category is not None:
                aversion_stats[member.name][category.value] += 1

        if len(selected) < requirement.required_count:
            logger.debug(
                "[%s] %s under-filled: %d of %d",
                day.isoformat(),
                duty_type.value,
                len(selected),
                requirement.required_count,
            )
        logger.debug("[%s] %s assigned: %s", day.isoformat(), duty_type.value, [m.name for m in selected])


def compute_unfairness(duty_stats: DutyStats) -> dict[str, float]:
    """Squared deviation of each staff member's total from the mean total."""

    if not duty_stats:
        return {}
    totals = {name: counts[TOTAL_KEY] for name, counts in duty_stats.items()}
    mean = sum(totals.values()) / len(totals)
    return {name: round((total - mean) ** 2, 2) for name, total in totals.items()}


def generate_duty_schedule(
    context: DutyContext,
    *,
    shuffle: Shuffle | None = None,
    seed: int | None = None,
) -> DutyScheduleResult:
    """
    Assign staff to every duty slot of the month.

    Pinned duties are loaded first; remaining slots are filled greedily,
    preferring the least loaded staff after a random shuffle breaks ties.
    Slots without enough candidates are left under-filled. A *seed* only
    drives the default shuffle; with a custom *shuffle* it is ignored and
    the result carries no seed.
    """

    if shuffle is None:
        shuffle = random_shuffle(random.Random(seed))
    else:
        seed = None

    calendar_days = resolve_month(context.year, context.month, context.excluded_ranges, context.holidays)
    eligible_days = working_days(calendar_days)

    schedule: Schedule = {}
    leave_index = build_leave_index(context.staff, eligible_days)
    duty_stats, aversion_stats = init_statistics(context.staff)
    pinned_slots = preload_fixed_assignments(
        context.fixed_assignments, schedule, duty_stats, aversion_stats, eligible_days
    )

    for day in eligible_days:
        assign_day(
            day,
            context.requirements,
            context.staff,
            schedule=schedule,
            leave_index=leave_index,
            duty_stats=duty_stats,
            aversion_stats=aversion_stats,
            pinned_slots=pinned_slots,
            shuffle=shuffle,
            aversion_cap=context.aversion_cap,
        )

    ordered_schedule = {day: schedule[day] for day in sorted(schedule)}
    unfairness = compute_unfairness(duty_stats)
    filled = sum(len(names) for slots in ordered_schedule.values() for names in slots.values())
    logger.info(
        "Generated %04d-%02d duty schedule: %d working days, %d assignments, %d staff",
        context.year,
        context.month,
        len(eligible_days),
        filled,
        len(duty_stats),
    )
    return DutyScheduleResult(
        schedule=ordered_schedule,
        leave_index=leave_index,
        duty_stats=duty_stats,
        aversion_stats=aversion_stats,
        unfairness=unfairness,
        calendar=calendar_days,
        seed=seed,
    )

