"""Tests for Decimal amount helpers."""
import pytest
from decimal import Decimal

from fintrack.utils.money import parse_amount, to_money, has_sub_cent_digits, money_sum


def test_parse_amount_accepts_numbers_and_strings():
    assert parse_amount("50.00") == Decimal("50.00")
    assert parse_amount(12) == Decimal("12")
    assert parse_amount(0.1) == Decimal("0.1")


@pytest.mark.parametrize("value", [None, True, "", "abc", "NaN", float("inf")])
def test_parse_amount_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_to_money_rounds_half_up():
    assert to_money("2.675") == Decimal("2.68")
    assert str(to_money(3)) == "3.00"


def test_sub_cent_detection():
    assert has_sub_cent_digits(Decimal("1.234"))
    assert not has_sub_cent_digits(Decimal("1.20"))


def test_money_sum_has_no_float_drift():
    total = money_sum([Decimal("0.10")] * 3)
    assert total == Decimal("0.30")
    assert str(money_sum([])) == "0.00"
