#!/usr/bin/env python3
"""
date_ranges.py
--------------
Date range helpers for export scopes.

Dates travel through the export pipeline as ISO strings (YYYY-MM-DD), the
format workday dates are stored in, so range comparisons in SQL are plain
string comparisons.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from datetime import date, timedelta
from typing import Optional, Tuple

# --- Local imports ---
from taskies.core.exceptions import ValidationError


DateRange = Tuple[str, str]


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string.

    Raises:
        ValidationError: If the string is not a valid ISO date
    """
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise ValidationError(
            f"Invalid date format: {value!r} (expected YYYY-MM-DD)"
        ) from None


def validate_range(from_date: str, to_date: str) -> DateRange:
    """
    Normalize and check an inclusive date range.

    Returns:
        (from_date, to_date) as ISO strings

    Raises:
        ValidationError: On malformed dates or when from_date is after to_date
    """
    start = parse_date(from_date)
    end = parse_date(to_date)
    if start > end:
        raise ValidationError(
            f"Invalid date range: {start.isoformat()} is after {end.isoformat()}"
        )
    return start.isoformat(), end.isoformat()


def today_range(today: Optional[date] = None) -> DateRange:
    """Range covering a single day (default: today)."""
    day = (today or date.today()).isoformat()
    return day, day


def work_week_range(today: Optional[date] = None) -> DateRange:
    """Monday through Sunday of the week containing today."""
    day = today or date.today()
    monday = day - timedelta(days=day.weekday())
    return monday.isoformat(), (monday + timedelta(days=6)).isoformat()
