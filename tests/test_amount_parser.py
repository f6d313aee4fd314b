"""Tests for amount parsing."""

import pytest
from decimal import Decimal

from cajachica.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("$123.45", Decimal("123.45")),
        ("US$ 50", Decimal("50")),
        ("u$s20", Decimal("20")),
        ("1,234.56", Decimal("1234.56")),
        ("1.234,56", Decimal("1234.56")),
        ("1234,56", Decimal("1234.56")),
        ("1,234", Decimal("1234")),
        ("ARS 1.500,00", Decimal("1500.00")),
    ],
)
def test_parse_amount_formats(text, expected):
    assert parse_amount(text) == expected


def test_parse_empty_amount():
    with pytest.raises(ValueError, match="Empty amount"):
        parse_amount("  ")


def test_parse_invalid_amount():
    with pytest.raises(ValueError, match="Could not parse amount"):
        parse_amount("doce")
