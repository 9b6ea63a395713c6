"""
Rational Numbers

Fraction parsing and reduction, plus best rational approximation of a
decimal via continued fractions.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Optional

from calculateshub.calculations.primitives import INF, is_finite, to_number

DEFAULT_MAX_DENOMINATOR = 10000
MAX_EXPANSION_STEPS = 64
TOLERANCE = 1e-12

# Longest digit run accepted for either side of a fraction
MAX_FRACTION_DIGITS = 4000

_FRACTION_PATTERN = re.compile(r"^([+-]?\d+)\s*/\s*([+-]?\d+)$", re.ASCII)


@dataclass(frozen=True)
class Fraction:
    """A fraction in lowest terms with the sign carried on the numerator."""

    n: int
    d: int

    def __str__(self) -> str:
        return f"{self.n}/{self.d}"

    @property
    def value(self) -> float:
        """Float value; infinite when the quotient is too large for a float."""
        try:
            return self.n / self.d
        except OverflowError:
            return INF if self.n > 0 else -INF


def _as_whole(value: Any) -> Optional[int]:
    """Truncate to an int; Python ints of any size pass through unchanged."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if not is_finite(value):
        return None
    return int(math.trunc(value))


def simplify_fraction(numerator: float, denominator: float) -> Optional[Fraction]:
    """
    Reduce a fraction to lowest terms.

    Inputs are truncated to integers. Returns None for a zero or
    non-finite denominator (or a non-finite numerator).
    """
    n = _as_whole(numerator)
    d = _as_whole(denominator)
    if n is None or d is None or d == 0:
        return None
    sign = -1 if d < 0 else 1
    g = math.gcd(n, d)
    return Fraction(n=(n // g) * sign, d=abs(d) // g)


def parse_fraction_string(text: Any) -> Optional[Fraction]:
    """Parse a strict "n/d" string into a reduced Fraction, or None."""
    raw = str(text).strip() if text is not None else ""
    if not raw:
        return None
    match = _FRACTION_PATTERN.match(raw)
    if not match:
        return None
    if max(len(match.group(1)), len(match.group(2))) > MAX_FRACTION_DIGITS:
        return None
    return simplify_fraction(int(match.group(1)), int(match.group(2)))


def best_rational(value: Any, max_denominator: Any = DEFAULT_MAX_DENOMINATOR) -> Optional[Fraction]:
    """
    Best rational approximation of value with a bounded denominator.

    Walks the continued-fraction expansion of |value|. When the next
    convergent's denominator would exceed max_denominator, the largest
    semiconvergent within the bound is returned instead.

    Args:
        value: Number to approximate
        max_denominator: Largest allowed denominator (default 10000)

    Returns:
        Reduced Fraction, or None for a non-finite value
    """
    x = to_number(value)
    limit = to_number(max_denominator)
    if not is_finite(limit) or math.trunc(limit) == 0:
        limit = DEFAULT_MAX_DENOMINATOR
    max_d = max(1, int(math.trunc(limit)))
    if not is_finite(x):
        return None

    sign = -1 if x < 0 else 1
    z = abs(x)
    if abs(z - round(z)) < TOLERANCE:
        return Fraction(n=sign * int(round(z)), d=1)

    # Convergent recurrence: h_n = a_n*h_(n-1) + h_(n-2), same for k
    h1, h2 = 1, 0
    k1, k2 = 0, 1
    b = z
    for _ in range(MAX_EXPANSION_STEPS):
        a = math.floor(b)
        h = a * h1 + h2
        k = a * k1 + k2
        if k > max_d:
            t = (max_d - k2) // k1
            return simplify_fraction(sign * (t * h1 + h2), t * k1 + k2)
        if abs(z - h / k) < TOLERANCE:
            return simplify_fraction(sign * h, k)
        h2, h1 = h1, h
        k2, k1 = k1, k
        frac = b - a
        if frac == 0:
            break
        b = 1 / frac

    return simplify_fraction(sign * h1, k1)


def fraction_to_mixed_string(fraction: Optional[Fraction]) -> str:
    """Render as a mixed number: "3/4", "2", "-1 1/2"."""
    if fraction is None:
        return "—"
    n, d = fraction.n, fraction.d
    if d == 1:
        return str(n)
    whole, rem = divmod(abs(n), d)
    if whole == 0:
        return f"{n}/{d}"
    sign = "-" if n < 0 else ""
    if rem == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole} {rem}/{d}"
