"""Tests for analysis range resolution."""
import pytest
from datetime import date

from fintrack.utils.date_helpers import DateRange, add_months, resolve_range


def test_all_has_no_bounds():
    assert resolve_range("all", date(2024, 5, 15)) is None


def test_month_starts_on_first_of_current_month():
    assert resolve_range("month", date(2024, 5, 15)) == DateRange(date(2024, 5, 1), date(2024, 5, 15))


def test_three_and_six_months_clamp_to_month_end():
    reference = date(2024, 3, 31)
    assert resolve_range("3months", reference) == DateRange(date(2023, 12, 31), reference)
    assert resolve_range("6months", reference) == DateRange(date(2023, 9, 30), reference)


def test_year_is_rolling_lookback():
    reference = date(2024, 7, 10)
    period = resolve_range("year", reference)
    assert period.start == date(2023, 7, 10)
    assert (period.end - period.start).days == 366  # crosses Feb 29 2024


def test_year_from_leap_day():
    period = resolve_range("year", date(2024, 2, 29))
    assert period.start == date(2023, 2, 28)
    assert (period.end - period.start).days == 366


def test_unknown_token_raises():
    with pytest.raises(ValueError):
        resolve_range("decade", date(2024, 1, 1))


def test_add_months_across_year():
    assert add_months(date(2024, 1, 31), -1) == date(2023, 12, 31)
    assert add_months(date(2023, 11, 30), 3) == date(2024, 2, 29)

