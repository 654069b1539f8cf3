"""Display formatting and loose parsing of dollar amounts.

Formatting rounds at display time only; calculations keep full precision.
Parsing is permissive: anything that isn't a digit, '.', or '-' is
stripped, and unparseable text becomes 0 instead of raising.
"""

import math
import re
from typing import NamedTuple


_NUMBER_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")


class ParsedAmount(NamedTuple):
    """Result of parse_amount: the value and whether the text held a number."""
    value: float
    valid: bool


def _round_to_dollar(amount: float) -> int:
    """Round to nearest dollar (0.50+ rounds away from zero)."""
    return int(amount + 0.5) if amount >= 0 else int(amount - 0.5)


def format_currency(amount: float) -> str:
    """Format as whole dollars, e.g. 1234.5 -> '$1,235'."""
    dollars = _round_to_dollar(amount)
    if dollars < 0:
        return f"-${abs(dollars):,}"
    return f"${dollars:,}"


def format_currency_with_cents(amount: float) -> str:
    """Format with cents, e.g. 1234.5 -> '$1,234.50'."""
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def format_percentage(rate: float) -> str:
    """Format a decimal rate as a whole percent, e.g. 0.12 -> '12%'."""
    return f"{_round_to_dollar(rate * 100)}%"


def parse_amount(text: str) -> ParsedAmount:
    """Parse user-entered currency text.

    Strips everything but digits, '.', and '-', then reads the longest
    leading decimal number: "$1,234.56" -> 1234.56, "12-3" -> 12.

    Returns:
        ParsedAmount(value, valid); value is 0.0 when valid is False
    """
    if text is None:
        return ParsedAmount(0.0, False)

    cleaned = _NON_NUMERIC.sub("", str(text))
    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return ParsedAmount(0.0, False)

    value = float(match.group(0))
    # Digit strings too long for a float overflow to inf
    if not math.isfinite(value):
        return ParsedAmount(0.0, False)
    return ParsedAmount(value, True)


def parse_currency(text: str) -> float:
    """Parse currency text to a number, returning 0 when unparseable."""
    return parse_amount(text).value
