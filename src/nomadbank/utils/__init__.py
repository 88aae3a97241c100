"""Utility functions for nomadbank."""

from nomadbank.utils.amount_parser import parse_amount
from nomadbank.utils.time_parser import parse_time_of_day, parse_time_of_day_or_default

__all__ = ["parse_amount", "parse_time_of_day", "parse_time_of_day_or_default"]
