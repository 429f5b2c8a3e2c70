"""Duty label and aversion classification."""

from __future__ import annotations

from datetime import date
from enum import Enum


class DutyType(str, Enum):
    MORNING_A = "MorningA"
    MORNING_B = "MorningB"
    AFTERNOON_A = "AfternoonA"
    AFTERNOON_B = "AfternoonB"


class AversionCategory(str, Enum):
    MONDAY_MORNING = "MondayMorning"
    FRIDAY_AFTERNOON = "FridayAfternoon"


TOTAL_KEY = "Total"
STAT_KEYS: tuple[str, ...] = tuple(duty_type.value for duty_type in DutyType) + (TOTAL_KEY,)

MORNING_TYPES = frozenset({DutyType.MORNING_A, DutyType.MORNING_B})
AFTERNOON_TYPES = frozenset({DutyType.AFTERNOON_A, DutyType.AFTERNOON_B})

# Labels arrive in English or in Korean ("오전 당직 1", "오후 당직 2").
MORNING_KEYWORDS: tuple[str, ...] = ("morning", "오전")
AFTERNOON_KEYWORDS: tuple[str, ...] = ("afternoon", "오후")

MONDAY = 0
FRIDAY = 4


def _mentions(label: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in label for keyword in keywords)


def classify_duty_label(label: str) -> DutyType:
    """
    Map a free-form duty label onto one of the four duty types.

    Anything that is not recognisably morning 1, morning 2 or afternoon 1
    lands in AfternoonB.
    """

    text = (label or "").lower()
    if _mentions(text, MORNING_KEYWORDS) and "1" in text:
        return DutyType.MORNING_A
    if _mentions(text, MORNING_KEYWORDS) and "2" in text:
        return DutyType.MORNING_B
    if _mentions(text, AFTERNOON_KEYWORDS) and "1" in text:
        return DutyType.AFTERNOON_A
    return DutyType.AFTERNOON_B


def coerce_duty_type(value: DutyType | str) -> DutyType:
    """Accept a canonical duty type value or fall back to label classification."""

    if isinstance(value, DutyType):
        return value
    try:
        return DutyType(value)
    except ValueError:
        return classify_duty_label(value)


def classify_aversion(day: date, duty_type: DutyType) -> AversionCategory | None:
    weekday = day.weekday()
    if weekday == MONDAY and duty_type in MORNING_TYPES:
        return AversionCategory.MONDAY_MORNING
    if weekday == FRIDAY and duty_type in AFTERNOON_TYPES:
        return AversionCategory.FRIDAY_AFTERNOON
    return None


def empty_duty_counts() -> dict[str, int]:
    return {key: 0 for key in STAT_KEYS}


def empty_aversion_counts() -> dict[str, int]:
    return {category.value: 0 for category in AversionCategory}
