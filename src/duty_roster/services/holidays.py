"""Fixed institutional holiday table used to exclude days from the roster."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable


@dataclass(frozen=True)
class Holiday:
    """Simple representation of a public holiday."""

    code: str
    date: date
    name: str
    localized_name: str


# Only the years listed here carry fixed holidays; other years fall back to
# weekends and caller-supplied exclusions.
_FIXED_HOLIDAYS: dict[int, tuple[tuple[str, int, int, str, str], ...]] = {
    2025: (
        ("new_years_day", 1, 1, "New Year's Day", "신정"),
        ("childrens_day", 5, 5, "Children's Day", "어린이날"),
    ),
}


def get_fixed_holidays(year: int, extra_dates: Iterable[date] = ()) -> list[Holiday]:
    """Return the fixed holidays for *year*, plus any configured extra dates in that year."""

    holidays = [
        Holiday(code, date(year, month, day), name, localized_name)
        for code, month, day, name, localized_name in _FIXED_HOLIDAYS.get(year, ())
    ]
    known = {holiday.date for holiday in holidays}
    for extra in sorted(set(extra_dates)):
        if extra.year != year or extra in known:
            continue
        holidays.append(Holiday("configured", extra, "Configured holiday", "Configured holiday"))
    holidays.sort(key=lambda holiday: holiday.date)
    return holidays


def holiday_dates(year: int, extra_dates: Iterable[date] = ()) -> frozenset[date]:
    return frozenset(holiday.date for holiday in get_fixed_holidays(year, extra_dates))


__all__ = ["Holiday", "get_fixed_holidays", "holiday_dates"]
