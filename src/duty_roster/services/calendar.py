"""Month enumeration and exclusion of non-working days."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Literal, Sequence

SATURDAY = 5


@dataclass(frozen=True)
class ExcludedRange:
    """Named, inclusive date range on which no duty or leave is recorded."""

    title: str
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class CalendarDay:
    day: date
    excluded: bool = False
    reason: Literal["weekend", "holiday", "event"] | None = None
    event_title: str | None = None


def iter_month_days(year: int, month: int) -> Iterable[date]:
    current = date(year, month, 1)
    while current.month == month:
        yield current
        current += timedelta(days=1)


def resolve_month(
    year: int,
    month: int,
    excluded_ranges: Sequence[ExcludedRange] = (),
    holidays: Iterable[date] = (),
) -> list[CalendarDay]:
    """
    Return every day of the month in order, tagging weekends, fixed holidays
    and days covered by an excluded range.
    """

    holiday_set = frozenset(holidays)
    days: list[CalendarDay] = []
    for current in iter_month_days(year, month):
        if current.weekday() >= SATURDAY:
            days.append(CalendarDay(current, excluded=True, reason="weekend"))
            continue
        if current in holiday_set:
            days.append(CalendarDay(current, excluded=True, reason="holiday"))
            continue
        event = next((item for item in excluded_ranges if item.contains(current)), None)
        if event is not None:
            days.append(CalendarDay(current, excluded=True, reason="event", event_title=event.title))
            continue
        days.append(CalendarDay(current))
    return days


def working_days(calendar_days: Iterable[CalendarDay]) -> list[date]:
    return [item.day for item in calendar_days if not item.excluded]


__all__ = ["CalendarDay", "ExcludedRange", "iter_month_days", "resolve_month", "working_days"]
