"""
Math Calculators

Percentages, roots, rounding, fractions, number theory and basic
statistics.
"""

import math
from typing import List

from calculateshub.calculations.formatting import (
    format_int,
    format_number,
    format_percent_from_rate,
)
from calculateshub.calculations.primitives import (
    INF,
    NAN,
    all_finite,
    clamp,
    is_finite,
    is_prime,
    lcm_int,
    power,
    round_half_up,
    safe_div,
    truncate,
)
from calculateshub.calculations.rational import fraction_to_mixed_string, parse_fraction_string
from calculateshub.calculations.statistics import describe, finite_values, population_std
from calculateshub.catalog.models import Category, ResultRow, Values, number, row, text
from calculateshub.catalog.registry import calculator

MATH = Category.MATH

MAX_FACTORIAL = 20
MAX_ROUNDING_DECIMALS = 12


def _sample_fields(defaults):
    return [
        number(f"v{i}", f"Value {i}", value, step=0.01)
        for i, value in enumerate(defaults, start=1)
    ]


def _sample(values: Values) -> List[float]:
    return [values[f"v{i}"] for i in range(1, 6)]


@calculator(
    "percentage", "Percentage Calculator", MATH,
    "Find X% of a value and the resulting total.",
    [
        number("value", "Value", 250, step=0.01),
        number("percent", "Percent", 15, unit="%", step=0.01),
    ],
    added_at="2025-12-14",
)
def percentage(values: Values) -> List[ResultRow]:
    value, percent = values["value"], values["percent"]
    if not all_finite(value, percent):
        return []
    part = value * (percent / 100)
    return [
        row("Result", format_number(part), True),
        row("Value + result", format_number(value + part)),
    ]


@calculator(
    "square-root", "Square Root Calculator", MATH,
    "Calculate √x for a number.",
    [number("value", "Number", 144, step=0.000001)],
    added_at="2025-11-28",
)
def square_root(values: Values) -> List[ResultRow]:
    value = values["value"]
    if not is_finite(value):
        return []
    root = NAN if value < 0 else math.sqrt(value)
    return [row("Square root", format_number(root), True)]


@calculator(
    "rounding", "Rounding Numbers Calculator", MATH,
    "Round a number to a chosen number of decimals.",
    [
        number("value", "Number", 12.34567, step=0.000001),
        number("decimals", "Decimals", 2, min=0, step=1),
    ],
    added_at="2025-11-27",
)
def rounding(values: Values) -> List[ResultRow]:
    """Round half up to the requested number of decimals (0-12)."""
    value = values["value"]
    decimals = clamp(values["decimals"], 0, MAX_ROUNDING_DECIMALS)
    if not all_finite(value, decimals):
        return []
    factor = power(10, decimals)
    return [row("Rounded", format_number(round_half_up(value * factor) / factor), True)]


@calculator(
    "fraction-simplifier", "Fraction Simplifier", MATH,
    "Reduce a fraction to its simplest form.",
    [text("fraction", "Fraction", "42/56")],
    added_at="2025-11-26",
)
def fraction_simplifier(values: Values) -> List[ResultRow]:
    fraction = parse_fraction_string(values["fraction"])
    if fraction is None:
        return []
    return [
        row("Simplified", str(fraction), True),
        row("Mixed number", fraction_to_mixed_string(fraction)),
    ]


@calculator(
    "lcm", "Least Common Multiple (LCM) Calculator", MATH,
    "Find the LCM of two integers.",
    [
        number("a", "First integer", 12, step=1),
        number("b", "Second integer", 18, step=1),
    ],
    added_at="2025-11-25",
)
def lcm(values: Values) -> List[ResultRow]:
    a, b = values["a"], values["b"]
    if not all_finite(a, b):
        return []
    try:
        result = float(lcm_int(a, b))
    except OverflowError:
        result = INF
    return [row("LCM", format_int(result), True)]


@calculator(
    "power", "Power Calculator (x^y)", MATH,
    "Compute x raised to the power y.",
    [
        number("x", "Base (x)", 2, step=0.01),
        number("y", "Exponent (y)", 8, step=0.01),
    ],
    added_at="2025-12-30",
)
def power_calculator(values: Values) -> List[ResultRow]:
    x, y = values["x"], values["y"]
    if not all_finite(x, y):
        return []
    return [
        row("Result", format_number(power(x, y)), True),
        row("Base", format_number(x)),
        row("Exponent", format_number(y)),
    ]


@calculator(
    "percentage-change", "Percentage Change Calculator", MATH,
    "Compute percent change from start to end value.",
    [
        number("start", "Start", 100, step=0.01),
        number("end", "End", 115, step=0.01),
    ],
    added_at="2025-12-30",
)
def percentage_change(values: Values) -> List[ResultRow]:
    start, end = values["start"], values["end"]
    if not all_finite(start, end):
        return []
    return [
        row("Percent change", format_percent_from_rate(safe_div(end - start, start)), True),
        row("Start", format_number(start)),
        row("End", format_number(end)),
    ]


@calculator(
    "mean-median-mode", "Mean, Median, Mode Calculator", MATH,
    "Compute mean, median, and mode of up to 5 values.",
    _sample_fields([10, 12, 15, 15, 20]),
    added_at="2025-12-30",
)
def mean_median_mode(values: Values) -> List[ResultRow]:
    """Blank values are left out; the mode is the smallest of the most frequent values."""
    summary = describe(_sample(values))
    if summary is None:
        return []
    return [
        row("Mean", format_number(summary.mean), True),
        row("Median", format_number(summary.median)),
        row("Mode", format_number(summary.mode)),
    ]


@calculator(
    "standard-deviation", "Standard Deviation Calculator", MATH,
    "Compute population standard deviation of up to 5 values.",
    _sample_fields([10, 12, 15, 18, 20]),
    added_at="2025-12-30",
)
def standard_deviation(values: Values) -> List[ResultRow]:
    sample = finite_values(_sample(values))
    sd = population_std(sample)
    if sd is None:
        return []
    return [
        row("Std deviation", format_number(sd), True),
        row("Mean", format_number(float(sample.mean()))),
        row("Count", format_int(sample.size)),
    ]


@calculator(
    "prime-checker", "Prime Number Checker", MATH,
    "Check if a number is prime.",
    [number("n", "Number", 97, step=1)],
    added_at="2025-12-30",
)
def prime_checker(values: Values) -> List[ResultRow]:
    n = truncate(values["n"])
    if not is_finite(n):
        return []
    return [
        row("Prime?", "Yes" if is_prime(int(n)) else "No", True),
        row("Number", format_int(n)),
    ]


@calculator(
    "factorial", "Factorial Calculator", MATH,
    "Compute n! for integers up to 20.",
    [number("n", "n", 8, min=0, step=1)],
    added_at="2025-12-30",
)
def factorial(values: Values) -> List[ResultRow]:
    n = truncate(values["n"])
    if not is_finite(n) or n < 0:
        return []
    n = int(min(MAX_FACTORIAL, n))
    return [
        row("n!", str(math.factorial(n)), True),
        row("n", format_int(n)),
    ]
