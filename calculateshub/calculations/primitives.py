"""
Numeric Primitives

Coercion and guard helpers shared by every calculator. Raw form values
arrive as strings or loose primitives; everything downstream works on
floats where invalid input is represented by NaN.
"""

import math
from typing import Any, Optional

NAN = float("nan")
INF = float("inf")


def is_finite(value: Any) -> bool:
    """
    True for real numbers that are neither NaN nor infinite.

    Ints too large to hold as a float count as non-finite.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def to_number(raw: Any) -> float:
    """
    Coerce a raw input value to a float.

    Blank strings, None, unparseable text and non-finite values all
    become NaN so callers only have to check finiteness.

    Args:
        raw: Value as produced by a form control (str, int, float, bool or None)

    Returns:
        Finite float, or NaN
    """
    if raw is None:
        return NAN
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, (int, float)):
        try:
            number = float(raw)
        except OverflowError:
            return NAN
    else:
        text = str(raw).strip()
        # float() accepts digit separators, form inputs never do
        if not text or "_" in text:
            return NAN
        try:
            number = float(text)
        except ValueError:
            return NAN
    return number if math.isfinite(number) else NAN


def clamp(n: float, lo: Optional[float] = None, hi: Optional[float] = None) -> float:
    """Clamp n to [lo, hi]; non-finite n and non-finite bounds are left alone."""
    if not is_finite(n):
        return n
    if lo is not None and is_finite(lo):
        n = max(lo, n)
    if hi is not None and is_finite(hi):
        n = min(hi, n)
    return n


def safe_div(a: float, b: float) -> float:
    """Divide a by b, returning NaN for zero or non-finite operands."""
    if not is_finite(a) or not is_finite(b) or b == 0:
        return NAN
    return a / b


def ratio_or_infinity(numerator: float, denominator: float) -> float:
    """
    Ratio where a zero denominator means "unbounded".

    0/0 is treated as 0 and x/0 as infinity, matching how the e-commerce
    ratios (ROAS, ACoS, turnover) are reported.
    """
    if denominator == 0:
        return 0.0 if numerator == 0 else INF
    return numerator / denominator


def power(base: float, exponent: float) -> float:
    """
    base ** exponent without exceptions or complex results.

    Overflow gives a signed infinity and a negative base with a fractional
    exponent gives NaN.
    """
    if math.isnan(base) or math.isnan(exponent):
        return NAN
    try:
        result = math.pow(base, exponent)
    except OverflowError:
        negative = base < 0 and float(exponent).is_integer() and int(exponent) % 2 == 1
        return -INF if negative else INF
    except ValueError:
        # Negative base with a non-integer exponent, or 0 ** negative
        if base == 0:
            return INF
        return NAN
    return result


def truncate(value: float) -> float:
    """Truncate toward zero, passing non-finite values through."""
    if not is_finite(value):
        return value
    return float(math.trunc(value))


def round_half_up(value: float) -> float:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    if not is_finite(value):
        return value
    return float(math.floor(value + 0.5))


def all_finite(*values: Any) -> bool:
    return all(is_finite(v) for v in values)


def all_non_negative(*values: Any) -> bool:
    """True when every value is finite and >= 0."""
    return all(is_finite(v) and v >= 0 for v in values)


def gcd_int(a: float, b: float) -> int:
    """Greatest common divisor of the truncated inputs (never 0)."""
    if not is_finite(a) or not is_finite(b):
        return 1
    return math.gcd(int(abs(math.trunc(a))), int(abs(math.trunc(b)))) or 1


_MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def is_prime(n: int) -> bool:
    """
    Deterministic primality test.

    Miller-Rabin with the first twelve prime bases is exact for every
    n < 3.3 * 10**24. Larger inputs get a strong probable-prime answer.
    """
    if n < 2:
        return False
    for p in _MILLER_RABIN_BASES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for a in _MILLER_RABIN_BASES:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def lcm_int(a: float, b: float) -> int:
    """Least common multiple of the truncated inputs; 0 if either is 0."""
    x = int(math.trunc(a))
    y = int(math.trunc(b))
    if x == 0 or y == 0:
        return 0
    return abs((x // gcd_int(x, y)) * y)
