from datetime import date

import pytest

from duty_roster.services.classifier import (
    AversionCategory,
    DutyType,
    classify_aversion,
    classify_duty_label,
    coerce_duty_type,
)


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("Morning duty 1", DutyType.MORNING_A),
        ("morning duty 2", DutyType.MORNING_B),
        ("Afternoon duty 1", DutyType.AFTERNOON_A),
        ("Afternoon duty 2", DutyType.AFTERNOON_B),
        ("오전 당직 1", DutyType.MORNING_A),
        ("오전 당직 2", DutyType.MORNING_B),
        ("오후 당직 1", DutyType.AFTERNOON_A),
        ("오후 당직 2", DutyType.AFTERNOON_B),
    ],
)
def test_classify_duty_label(label: str, expected: DutyType) -> None:
    assert classify_duty_label(label) is expected


@pytest.mark.parametrize("label", ["", "Lunch supervision", "Morning duty", "Evening 1"])
def test_unrecognised_labels_fall_back_to_afternoon_b(label: str) -> None:
    assert classify_duty_label(label) is DutyType.AFTERNOON_B


def test_morning_one_wins_over_morning_two() -> None:
    assert classify_duty_label("Morning 1/2") is DutyType.MORNING_A


def test_coerce_duty_type_accepts_values_and_labels() -> None:
    assert coerce_duty_type("MorningB") is DutyType.MORNING_B
    assert coerce_duty_type(DutyType.AFTERNOON_A) is DutyType.AFTERNOON_A
    assert coerce_duty_type("오후 당직 1") is DutyType.AFTERNOON_A


def test_classify_aversion() -> None:
    monday = date(2025, 1, 6)
    wednesday = date(2025, 1, 8)
    friday = date(2025, 1, 10)

    assert classify_aversion(monday, DutyType.MORNING_A) is AversionCategory.MONDAY_MORNING
    assert classify_aversion(monday, DutyType.MORNING_B) is AversionCategory.MONDAY_MORNING
    assert classify_aversion(monday, DutyType.AFTERNOON_A) is None
    assert classify_aversion(friday, DutyType.AFTERNOON_A) is AversionCategory.FRIDAY_AFTERNOON
    assert classify_aversion(friday, DutyType.AFTERNOON_B) is AversionCategory.FRIDAY_AFTERNOON
    assert classify_aversion(friday, DutyType.MORNING_A) is None
    assert classify_aversion(wednesday, DutyType.MORNING_A) is None
