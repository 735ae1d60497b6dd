"""CLI helpers for parsing amounts and dates, exiting on bad input."""

from datetime import date
from typing import Optional

import click

from balancebook.utils.amount_parser import parse_amount
from balancebook.utils.date_parser import parse_date


def amount_or_exit(ctx: click.Context, value: Optional[str]) -> Optional[int]:
    """Parse a decimal amount string into cents."""
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def date_or_exit(ctx: click.Context, value: Optional[str]) -> Optional[date]:
    """Parse an absolute or relative date string."""
    if value is None:
        return None
    try:
        today = ctx.obj["today"]() if ctx.obj.get("today") else None
        return parse_date(value, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)
