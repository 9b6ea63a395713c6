"""
Display Formatting

Turns engine floats into the strings shown in result rows. Follows en-US
conventions: thousands separators, half-up rounding, "$" prefix for money.
Any non-finite value renders as an em dash placeholder.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext

from calculateshub.calculations.primitives import is_finite

PLACEHOLDER = "—"
INFINITY_SYMBOL = "∞"

# Enough digits to quantize anything up to float max at 6 decimal places
_PRECISION = 400


def _format_decimal(value: float, places: int, trim: bool) -> str:
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        quantum = Decimal(1).scaleb(-places)
        rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
        if rounded == 0:
            rounded = abs(rounded)
        text = f"{rounded:,.{places}f}"
    if trim and "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_money(value: float) -> str:
    """Format as US dollars with two decimals, e.g. "$1,234.50" or "-$5.00"."""
    if not is_finite(value):
        return PLACEHOLDER
    text = _format_decimal(value, 2, trim=False)
    if text.startswith("-"):
        return "-$" + text[1:]
    return "$" + text


def format_number(value: float) -> str:
    """Format with up to six decimals and no trailing zeros."""
    if not is_finite(value):
        return PLACEHOLDER
    return _format_decimal(value, 6, trim=True)


def format_int(value: float) -> str:
    """Format rounded to a whole number with thousands separators."""
    if not is_finite(value):
        return PLACEHOLDER
    return _format_decimal(value, 0, trim=True)


def format_percent_from_rate(rate: float) -> str:
    """Format a rate (0.125) as a percent ("12.5%") with up to two decimals."""
    if not is_finite(rate):
        return PLACEHOLDER
    return _format_decimal(rate * 100, 2, trim=True) + "%"


def format_ratio(value: float, suffix: str = "") -> str:
    """Format a ratio that may legitimately be infinite."""
    if value == float("inf"):
        return INFINITY_SYMBOL
    if not is_finite(value):
        return PLACEHOLDER
    return format_number(value) + suffix
