from datetime import date

from duty_roster.services.calendar import ExcludedRange, resolve_month, working_days
from duty_roster.services.holidays import get_fixed_holidays, holiday_dates


def test_resolve_month_tags_weekends_and_holidays() -> None:
    days = resolve_month(2025, 1, holidays=holiday_dates(2025))

    assert len(days) == 31
    assert days[0].day == date(2025, 1, 1)
    assert days[0].excluded and days[0].reason == "holiday"
    assert days[3].reason == "weekend"
    assert days[4].reason == "weekend"
    assert not days[1].excluded
    assert len(working_days(days)) == 22


def test_excluded_ranges_are_inclusive() -> None:
    trip = ExcludedRange("School trip", date(2025, 5, 7), date(2025, 5, 9))

    days = {item.day: item for item in resolve_month(2025, 5, [trip], holiday_dates(2025))}

    assert days[date(2025, 5, 5)].reason == "holiday"
    assert not days[date(2025, 5, 6)].excluded
    for day in (date(2025, 5, 7), date(2025, 5, 8), date(2025, 5, 9)):
        assert days[day].reason == "event"
        assert days[day].event_title == "School trip"
    assert date(2025, 5, 12) in working_days(days.values())


def test_fixed_holiday_table() -> None:
    holidays = get_fixed_holidays(2025)

    assert [holiday.date for holiday in holidays] == [date(2025, 1, 1), date(2025, 5, 5)]
    assert holidays[0].code == "new_years_day"
    assert get_fixed_holidays(2026) == []


def test_extra_holidays_extend_the_table() -> None:
    extra = [date(2025, 3, 3), date(2025, 1, 1), date(2026, 3, 3)]

    dates = holiday_dates(2025, extra)

    assert dates == frozenset({date(2025, 1, 1), date(2025, 3, 3), date(2025, 5, 5)})
    assert [holiday.code for holiday in get_fixed_holidays(2025, extra)] == [
        "new_years_day",
        "configured",
        "childrens_day",
    ]
