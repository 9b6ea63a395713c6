"""
Roman Numerals

Conversion between integers 1-3999 and standard (subtractive) Roman
numerals.
"""

import math
from typing import Any, Optional

from calculateshub.calculations.primitives import is_finite, to_number

MIN_VALUE = 1
MAX_VALUE = 3999

NUMERAL_TABLE = (
    ("M", 1000), ("CM", 900), ("D", 500), ("CD", 400),
    ("C", 100), ("XC", 90), ("L", 50), ("XL", 40),
    ("X", 10), ("IX", 9), ("V", 5), ("IV", 4),
    ("I", 1),
)

SYMBOL_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}


def int_to_roman(number: Any) -> Optional[str]:
    """Convert 1-3999 to a Roman numeral; None outside that range."""
    value = to_number(number)
    if not is_finite(value):
        return None
    n = math.trunc(value)
    if not MIN_VALUE <= n <= MAX_VALUE:
        return None

    parts = []
    for symbol, amount in NUMERAL_TABLE:
        while n >= amount:
            parts.append(symbol)
            n -= amount
    return "".join(parts)


def roman_to_int(text: Any) -> Optional[int]:
    """
    Parse a Roman numeral (case-insensitive).

    Only canonical numerals are accepted: the parsed value must convert
    back to exactly the same string, which rejects forms like "IIII" or
    "VX".
    """
    s = str(text).strip().upper() if text is not None else ""
    if not s:
        return None

    total = 0
    prev = 0
    for symbol in reversed(s):
        value = SYMBOL_VALUES.get(symbol)
        if value is None:
            return None
        if value < prev:
            total -= value
        else:
            total += value
        prev = value

    if not MIN_VALUE <= total <= MAX_VALUE:
        return None
    if int_to_roman(total) != s:
        return None
    return total
