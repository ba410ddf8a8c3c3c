"""Tests for export date range helpers."""
from datetime import date

import pytest

from taskies.core.exceptions import ValidationError
from taskies.export.date_ranges import (
    parse_date,
    today_range,
    validate_range,
    work_week_range,
)


def test_parse_date():
    assert parse_date(" 2024-01-31 ") == date(2024, 1, 31)


@pytest.mark.parametrize("value", ["2024-13-01", "31/01/2024", "", "yesterday"])
def test_parse_date_invalid(value):
    with pytest.raises(ValidationError):
        parse_date(value)


def test_validate_range_same_day():
    assert validate_range("2024-01-01", "2024-01-01") == ("2024-01-01", "2024-01-01")


def test_validate_range_inverted():
    with pytest.raises(ValidationError) as exc_info:
        validate_range("2024-01-02", "2024-01-01")
    assert "after" in str(exc_info.value)


def test_today_range():
    assert today_range(date(2024, 3, 5)) == ("2024-03-05", "2024-03-05")


@pytest.mark.parametrize(
    "today", [date(2024, 1, 1), date(2024, 1, 3), date(2024, 1, 7)]
)
def test_work_week_range_monday_to_sunday(today):
    assert work_week_range(today) == ("2024-01-01", "2024-01-07")
