"""Tests for amount parsing."""

import pytest
from decimal import Decimal

from sacredfinance.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text,expected",
    [
        ("120", Decimal("120")),
        ("120.50", Decimal("120.50")),
        ("$1,234.50", Decimal("1234.50")),
        (" £ 99 ", Decimal("99")),
        ("-5", Decimal("-5")),
    ],
)
def test_parse_amount(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "NaN", "Infinity"])
def test_invalid_amount(text):
    with pytest.raises(ValueError):
        parse_amount(text)
