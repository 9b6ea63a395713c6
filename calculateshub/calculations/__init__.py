"""
Calculation Engine

Numeric building blocks shared by the calculators: coercion and
formatting, loan and debt math, fractions, Roman numerals, calendar
arithmetic, unit tables, random generation and descriptive statistics.
"""

from calculateshub.calculations import (
    amortization,
    dates,
    debt,
    formatting,
    primitives,
    randomness,
    rational,
    roman,
    statistics,
    units,
)

__all__ = [
    "amortization",
    "dates",
    "debt",
    "formatting",
    "primitives",
    "randomness",
    "rational",
    "roman",
    "statistics",
    "units",
]
