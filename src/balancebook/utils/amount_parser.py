"""Amount parsing utilities.

Amounts are stored as integer cents; these helpers convert between the
decimal strings users type and that representation.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re


def parse_amount(amount_str: str) -> int:
    """Parse an amount string into integer cents.

    Handles various formats:
    - "123.45"
    - "$123.45" / "R$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Amount in cents, rounded half up

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"R?[$€£¥]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    cents = int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return -cents if is_negative else cents


def format_cents(cents: int) -> str:
    """Format integer cents as a signed decimal string, e.g. ``-1,234.50``."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    return f"{sign}{whole:,}.{frac:02d}"


def divide_cents(total: int, parts: int) -> int:
    """Split ``total`` cents into ``parts`` equal shares, rounding half up."""
    share = Decimal(total) / Decimal(parts)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
