"""Read-only views over a generated schedule for document export and charts."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Mapping

from duty_roster.services.classifier import STAT_KEYS, TOTAL_KEY, DutyType

WEEKDAY_HEADERS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri")
DATE_HEADER = "Date"
LEAVE_ROW_LABEL = "Leave"


@dataclass
class WeekRow:
    label: str
    cells: list[list[str]]


@dataclass
class WeekTable:
    week_start: date
    headers: list[str]
    dates: list[date | None]
    rows: list[WeekRow]


@dataclass
class StaffStatistics:
    name: str
    counts: dict[str, int]
    total: int
    share_percent: float
    unfairness: float


def week_key(day: date) -> date:
    """Return the Sunday that opens the week containing *day*."""

    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def group_by_week(days: Iterable[date]) -> dict[date, list[date]]:
    grouped: dict[date, list[date]] = defaultdict(list)
    for day in sorted(days):
        grouped[week_key(day)].append(day)
    return dict(grouped)


def duty_types_in_schedule(schedule: Mapping[date, Mapping[DutyType, list[str]]]) -> list[DutyType]:
    present = {duty_type for slots in schedule.values() for duty_type in slots}
    return [duty_type for duty_type in DutyType if duty_type in present]


def build_week_tables(
    schedule: Mapping[date, Mapping[DutyType, list[str]]],
    leave_index: Mapping[date, list[str]],
) -> list[WeekTable]:
    """
    Lay the schedule out as one Monday-to-Friday table per week, with one
    row per duty type and a final row listing staff on leave.
    """

    duty_types = duty_types_in_schedule(schedule)
    tables: list[WeekTable] = []
    for sunday, week_days in group_by_week(schedule.keys()).items():
        by_weekday = {day.weekday(): day for day in week_days}
        columns: list[date | None] = [by_weekday.get(index) for index in range(len(WEEKDAY_HEADERS))]
        headers = [DATE_HEADER] + [
            f"{label} ({column.day})" if column else label
            for label, column in zip(WEEKDAY_HEADERS, columns)
        ]

        rows = [
            WeekRow(
                label=duty_type.value,
                cells=[list(schedule[column].get(duty_type, [])) if column else [] for column in columns],
            )
            for duty_type in duty_types
        ]
        rows.append(
            WeekRow(
                label=LEAVE_ROW_LABEL,
                cells=[list(leave_index.get(column, [])) if column else [] for column in columns],
            )
        )
        tables.append(WeekTable(week_start=sunday, headers=headers, dates=columns, rows=rows))
    return tables


def staff_statistics(
    duty_stats: Mapping[str, Mapping[str, int]],
    unfairness: Mapping[str, float],
    *,
    include_idle: bool = False,
) -> list[StaffStatistics]:
    """Per-staff totals and their share of all duties; idle staff are omitted unless requested."""

    grand_total = sum(counts.get(TOTAL_KEY, 0) for counts in duty_stats.values())
    statistics: list[StaffStatistics] = []
    for name, counts in duty_stats.items():
        total = counts.get(TOTAL_KEY, 0)
        if total == 0 and not include_idle:
            continue
        share = round(100.0 * total / grand_total, 2) if grand_total else 0.0
        statistics.append(
            StaffStatistics(
                name=name,
                counts={key: counts.get(key, 0) for key in STAT_KEYS},
                total=total,
                share_percent=share,
                unfairness=unfairness.get(name, 0.0),
            )
        )
    return statistics
