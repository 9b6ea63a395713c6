"""
Conversion Calculators

Unit tables, temperature, fractions and percents, Roman numerals and a
user-supplied currency rate.
"""

import math
from typing import Dict, List, Mapping, Sequence, Tuple

from calculateshub.calculations.formatting import (
    PLACEHOLDER,
    format_int,
    format_money,
    format_number,
    format_percent_from_rate,
)
from calculateshub.calculations.primitives import is_finite
from calculateshub.calculations.rational import (
    DEFAULT_MAX_DENOMINATOR,
    Fraction,
    best_rational,
    fraction_to_mixed_string,
    parse_fraction_string,
)
from calculateshub.calculations.roman import int_to_roman, roman_to_int
from calculateshub.calculations.units import (
    AREA,
    DATA_STORAGE,
    ENERGY,
    LENGTH,
    MPG_L100KM_CONSTANT,
    PRESSURE,
    SPEED,
    TIME,
    VOLUME,
    WEIGHT,
    celsius_from,
    celsius_to_fahrenheit,
    celsius_to_kelvin,
    convert_units,
)
from calculateshub.catalog.models import Category, ResultRow, Values, number, row, select, text
from calculateshub.catalog.registry import calculator

CONV = Category.CONVERSIONS

TO_ROMAN = "toRoman"
TO_NUMBER = "toNumber"


def _table_rows(
    values: Values, table: Mapping[str, float], labels: Sequence[Tuple[str, str]], from_key: str = "from"
) -> List[ResultRow]:
    """
    Convert through a unit table and emit one row per unit in label order.

    The first labeled unit is emphasized.
    """
    converted = convert_units(values["value"], values[from_key], table)
    if converted is None:
        return []
    return [
        row(label, format_number(converted[unit]), i == 0)
        for i, (unit, label) in enumerate(labels)
    ]


def _selected_unit_rows(values: Values, table: Dict[str, float], labels: Sequence[Tuple[str, str]]) -> List[ResultRow]:
    """Like _table_rows, but the unit the value was entered in is emphasized."""
    unit = values["unit"]
    converted = convert_units(values["value"], unit, table)
    if converted is None:
        return []
    return [row(label, format_number(converted[key]), key == unit) for key, label in labels]


def _fraction_rows(fraction: Fraction) -> List[ResultRow]:
    return [
        row("Fraction", str(fraction), True),
        row("Mixed number", fraction_to_mixed_string(fraction)),
    ]


@calculator(
    "temperature", "Temperature Conversion", CONV,
    "Convert between Celsius, Fahrenheit, and Kelvin.",
    [
        number("value", "Value", 25, step=0.01),
        select("from", "From", "C", [
            ("C", "Celsius (°C)"),
            ("F", "Fahrenheit (°F)"),
            ("K", "Kelvin (K)"),
        ]),
    ],
    popular=True, added_at="2025-12-12",
)
def temperature(values: Values) -> List[ResultRow]:
    value = values["value"]
    if not is_finite(value):
        return []
    celsius = celsius_from(value, values["from"])
    return [
        row("Celsius (°C)", format_number(celsius), True),
        row("Fahrenheit (°F)", format_number(celsius_to_fahrenheit(celsius))),
        row("Kelvin (K)", format_number(celsius_to_kelvin(celsius))),
    ]


LENGTH_UNITS = [
    ("m", "Meters (m)"),
    ("km", "Kilometers (km)"),
    ("mi", "Miles (mi)"),
    ("ft", "Feet (ft)"),
    ("in", "Inches (in)"),
]


@calculator(
    "length", "Length Conversion", CONV,
    "Convert between meters, kilometers, miles, feet, and inches.",
    [
        number("value", "Value", 1, step=0.0001),
        select("from", "From", "m", LENGTH_UNITS),
    ],
    added_at="2025-12-11",
)
def length(values: Values) -> List[ResultRow]:
    return _table_rows(values, LENGTH, LENGTH_UNITS)


AREA_UNITS = [
    ("m2", "Square meters (m²)"),
    ("km2", "Square kilometers (km²)"),
    ("ft2", "Square feet (ft²)"),
    ("in2", "Square inches (in²)"),
    ("yd2", "Square yards (yd²)"),
    ("acre", "Acres"),
    ("ha", "Hectares (ha)"),
]


@calculator(
    "area-conversion", "Area Conversion", CONV,
    "Convert between common area units.",
    [
        number("value", "Value", 1, step=0.000001),
        select("from", "From", "m2", AREA_UNITS),
    ],
    added_at="2025-11-24",
)
def area_conversion(values: Values) -> List[ResultRow]:
    return _table_rows(values, AREA, AREA_UNITS)


PRESSURE_UNITS = [
    ("Pa", "Pascal (Pa)"),
    ("kPa", "Kilopascal (kPa)"),
    ("bar", "Bar (bar)"),
    ("psi", "PSI (psi)"),
    ("atm", "Atmosphere (atm)"),
    ("mmHg", "Millimeter of mercury (mmHg)"),
]


@calculator(
    "pressure-conversion", "Pressure Conversion", CONV,
    "Convert between Pa, kPa, bar, psi, atm, and mmHg.",
    [
        number("value", "Value", 101325, step=0.000001),
        select("from", "From", "Pa", PRESSURE_UNITS),
    ],
    added_at="2025-11-23",
)
def pressure_conversion(values: Values) -> List[ResultRow]:
    return _table_rows(values, PRESSURE, PRESSURE_UNITS)


TIME_UNITS = [
    ("s", "Seconds"),
    ("min", "Minutes"),
    ("hr", "Hours"),
    ("day", "Days"),
    ("week", "Weeks"),
    ("year", "Years (365 days)"),
]


@calculator(
    "time-conversion", "Time Conversion", CONV,
    "Convert between seconds, minutes, hours, days, weeks, and years.",
    [
        number("value", "Value", 3600, step=0.000001),
        select("from", "From", "s", TIME_UNITS),
    ],
    added_at="2025-11-22",
)
def time_conversion(values: Values) -> List[ResultRow]:
    return _table_rows(values, TIME, TIME_UNITS)


# Select order differs from result order: liters are listed first in results
VOLUME_UNITS = [
    ("mL", "Milliliters (mL)"),
    ("L", "Liters (L)"),
    ("m3", "Cubic meters (m³)"),
    ("gal", "US gallons (gal)"),
    ("qt", "US quarts (qt)"),
    ("cup", "US cups (cup)"),
    ("floz", "US fluid ounces (fl oz)"),
]


@calculator(
    "volume-conversion", "Volume Conversion", CONV,
    "Convert between liters, milliliters, cubic meters, and US units.",
    [
        number("value", "Value", 1, step=0.000001),
        select("from", "From", "L", VOLUME_UNITS),
    ],
    added_at="2025-11-21",
)
def volume_conversion(values: Values) -> List[ResultRow]:
    labels = [VOLUME_UNITS[1], VOLUME_UNITS[0]] + VOLUME_UNITS[2:]
    return _table_rows(values, VOLUME, labels)


WEIGHT_UNITS = [
    ("g", "Grams (g)"),
    ("kg", "Kilograms (kg)"),
    ("t", "Tonnes (t)"),
    ("lb", "Pounds (lb)"),
    ("oz", "Ounces (oz)"),
]


@calculator(
    "weight-conversion", "Weight Conversion", CONV,
    "Convert between kg, g, lb, oz, and tonnes.",
    [
        number("value", "Value", 70, step=0.000001),
        select("from", "From", "kg", WEIGHT_UNITS),
    ],
    added_at="2025-11-20",
)
def weight_conversion(values: Values) -> List[ResultRow]:
    labels = [WEIGHT_UNITS[1], WEIGHT_UNITS[0]] + WEIGHT_UNITS[2:]
    return _table_rows(values, WEIGHT, labels)


@calculator(
    "decimal-to-fraction", "Decimal to Fraction Calculator", CONV,
    "Convert a decimal to a simplified fraction.",
    [
        number("decimal", "Decimal", 0.875, step=0.0000001),
        number("maxDen", "Max denominator", DEFAULT_MAX_DENOMINATOR, min=1, step=1),
    ],
    added_at="2025-11-19",
)
def decimal_to_fraction(values: Values) -> List[ResultRow]:
    fraction = best_rational(values["decimal"], values["maxDen"])
    if fraction is None:
        return []
    return _fraction_rows(fraction)


@calculator(
    "decimal-to-percent", "Decimal to Percent Calculator", CONV,
    "Convert a decimal to a percent.",
    [number("decimal", "Decimal", 0.125, step=0.0000001)],
    added_at="2025-11-18",
)
def decimal_to_percent(values: Values) -> List[ResultRow]:
    if not is_finite(values["decimal"]):
        return []
    return [row("Percent", format_percent_from_rate(values["decimal"]), True)]


@calculator(
    "fraction-to-decimal", "Fraction To Decimal Calculator", CONV,
    "Convert a fraction to a decimal.",
    [text("fraction", "Fraction", "3/8")],
    added_at="2025-11-17",
)
def fraction_to_decimal(values: Values) -> List[ResultRow]:
    fraction = parse_fraction_string(values["fraction"])
    if fraction is None:
        return []
    return [row("Decimal", format_number(fraction.value), True)]


@calculator(
    "fraction-to-percent", "Fraction to Percent Calculator", CONV,
    "Convert a fraction to a percent.",
    [text("fraction", "Fraction", "3/8")],
    added_at="2025-11-16",
)
def fraction_to_percent(values: Values) -> List[ResultRow]:
    fraction = parse_fraction_string(values["fraction"])
    if fraction is None:
        return []
    return [row("Percent", format_percent_from_rate(fraction.value), True)]


@calculator(
    "percent-to-decimal", "Percent to Decimal Calculator", CONV,
    "Convert a percent to a decimal.",
    [number("percent", "Percent", 12.5, step=0.01)],
    added_at="2025-11-15",
)
def percent_to_decimal(values: Values) -> List[ResultRow]:
    if not is_finite(values["percent"]):
        return []
    return [row("Decimal", format_number(values["percent"] / 100), True)]


@calculator(
    "percent-to-fraction", "Percent to Fraction Calculator", CONV,
    "Convert a percent to a simplified fraction.",
    [number("percent", "Percent", 12.5, step=0.01)],
    added_at="2025-11-14",
)
def percent_to_fraction(values: Values) -> List[ResultRow]:
    percent = values["percent"]
    if not is_finite(percent):
        return []
    fraction = best_rational(percent / 100, DEFAULT_MAX_DENOMINATOR)
    if fraction is None:
        return []
    return _fraction_rows(fraction)


def _roman_visibility(values: Values) -> Dict[str, bool]:
    mode = values.get("mode") or TO_ROMAN
    return {"number": mode == TO_ROMAN, "roman": mode == TO_NUMBER}


@calculator(
    "roman-numeral", "Roman Numeral Converter", CONV,
    "Convert between numbers and Roman numerals (I–MMMCMXCIX).",
    [
        select("mode", "Convert", TO_ROMAN, [
            (TO_ROMAN, "Number → Roman numeral"),
            (TO_NUMBER, "Roman numeral → Number"),
        ]),
        number("number", "Number (1–3999)", 2025, min=1, step=1),
        text("roman", "Roman numeral", "MMXXV"),
    ],
    added_at="2025-11-11", visibility=_roman_visibility,
)
def roman_numeral(values: Values) -> List[ResultRow]:
    if values["mode"] == TO_NUMBER:
        parsed = roman_to_int(values["roman"])
        return [row("Number", PLACEHOLDER if parsed is None else format_int(parsed), True)]
    numeral = int_to_roman(values["number"])
    return [row("Roman numeral", numeral or PLACEHOLDER, True)]


@calculator(
    "currency-converter", "Currency Converter (USD ↔ CAD)", CONV,
    "Convert between USD and CAD using a rate you enter.",
    [
        number("amount", "Amount", 100, unit="money", min=0, step=0.01),
        select("dir", "Direction", "usd-cad", [
            ("usd-cad", "USD → CAD"),
            ("cad-usd", "CAD → USD"),
        ]),
        number("rate", "CAD per USD (rate)", 1.34, step=0.0001),
    ],
    added_at="2025-12-30",
)
def currency_converter(values: Values) -> List[ResultRow]:
    """The rate is always quoted as CAD per USD, whichever way the conversion runs."""
    amount, rate = values["amount"], values["rate"]
    if not is_finite(amount) or amount < 0 or not is_finite(rate) or rate <= 0:
        return []
    if values["dir"] == "usd-cad":
        converted, source, target = amount * rate, "$ USD", "$ CAD"
    else:
        converted, source, target = amount / rate, "$ CAD", "$ USD"
    return [
        row("Converted", format_money(converted), True),
        row("Input", f"{format_money(amount)} {source}"),
        row("Output", target),
    ]


SPEED_UNITS = [("ms", "m/s"), ("kmh", "km/h"), ("mph", "mph")]


@calculator(
    "speed-conversion", "Speed Conversion Calculator", CONV,
    "Convert speed between m/s, km/h, and mph.",
    [
        number("value", "Value", 60, step=0.01),
        select("unit", "Unit", "kmh", SPEED_UNITS),
    ],
    added_at="2025-12-30",
)
def speed_conversion(values: Values) -> List[ResultRow]:
    return _selected_unit_rows(values, SPEED, SPEED_UNITS)


@calculator(
    "energy-conversion", "Energy Conversion Calculator", CONV,
    "Convert energy between J, kJ, kcal, and Wh.",
    [
        number("value", "Value", 1000, step=0.01),
        select("unit", "Unit", "J", [
            ("J", "Joule (J)"),
            ("kJ", "Kilojoule (kJ)"),
            ("kcal", "Kilocalorie (kcal)"),
            ("Wh", "Watt-hour (Wh)"),
        ]),
    ],
    added_at="2025-12-30",
)
def energy_conversion(values: Values) -> List[ResultRow]:
    return _selected_unit_rows(values, ENERGY, [(unit, unit) for unit in ENERGY])


@calculator(
    "fuel-efficiency", "Fuel Efficiency Converter (MPG ↔ L/100km)", CONV,
    "Convert between MPG and L/100km.",
    [
        number("value", "Value", 30, step=0.01),
        select("mode", "Mode", "mpg-l100", [
            ("mpg-l100", "MPG → L/100km"),
            ("l100-mpg", "L/100km → MPG"),
        ]),
    ],
    added_at="2025-12-30",
)
def fuel_efficiency(values: Values) -> List[ResultRow]:
    """MPG and L/100km are reciprocal, so both directions divide the same constant."""
    value = values["value"]
    if not is_finite(value) or value <= 0:
        return []
    label = "L/100km" if values["mode"] == "mpg-l100" else "MPG"
    return [
        row(label, format_number(MPG_L100KM_CONSTANT / value), True),
        row("Input", format_number(value)),
    ]


@calculator(
    "data-storage", "Data Storage Converter (KB to TB)", CONV,
    "Convert between KB, MB, GB, and TB.",
    [
        number("value", "Value", 1024, step=0.01),
        select("unit", "Unit", "KB", [(unit, unit) for unit in DATA_STORAGE]),
    ],
    added_at="2025-12-30",
)
def data_storage(values: Values) -> List[ResultRow]:
    return _selected_unit_rows(values, DATA_STORAGE, [(unit, unit) for unit in DATA_STORAGE])


@calculator(
    "angle-conversion", "Angle Conversion (Degrees ↔ Radians)", CONV,
    "Convert angle between degrees and radians.",
    [
        number("value", "Value", 180, step=0.0001),
        select("mode", "Mode", "deg-rad", [
            ("deg-rad", "Degrees → Radians"),
            ("rad-deg", "Radians → Degrees"),
        ]),
    ],
    added_at="2025-12-30",
)
def angle_conversion(values: Values) -> List[ResultRow]:
    value = values["value"]
    if not is_finite(value):
        return []
    if values["mode"] == "deg-rad":
        label, converted = "Radians", value * math.pi / 180
    else:
        label, converted = "Degrees", value * 180 / math.pi
    return [
        row(label, format_number(converted), True),
        row("Input", format_number(value)),
    ]
