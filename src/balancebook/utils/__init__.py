"""Utility functions for balancebook."""

from balancebook.utils.date_parser import parse_date
from balancebook.utils.amount_parser import format_cents, parse_amount

__all__ = ["parse_date", "parse_amount", "format_cents"]
