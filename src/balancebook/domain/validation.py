"""Input validation shared by the record services."""

from datetime import date
from typing import Optional

from balancebook.domain.errors import ValidationError, non_positive_amount
from balancebook.utils.date_parser import to_date


def validate_amount(amount: int, field: str = "Amount") -> int:
    """Return ``amount`` if it is a positive integer number of cents."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"{field} must be an integer number of cents (got {amount!r})")
    if amount <= 0:
        raise ValidationError(non_positive_amount(field, amount))
    return amount


def coerce_date(value: date | str | None, field: str) -> Optional[date]:
    """Convert an ISO string or date, reporting failures as ValidationError."""
    try:
        return to_date(value)
    except ValueError as e:
        raise ValidationError(f"{field}: {e}")
