"""Utility functions for sacredfinance."""

from sacredfinance.utils.date_parser import parse_date, parse_time
from sacredfinance.utils.amount_parser import parse_amount

__all__ = ["parse_date", "parse_time", "parse_amount"]
