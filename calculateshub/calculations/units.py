"""
Unit Conversion

Linear unit tables: each unit maps to its size in one base unit, so a
value converts to every unit in the table in a single pass.
"""

from typing import Any, Dict, Mapping, Optional

from calculateshub.calculations.primitives import is_finite, to_number

# Base: meter
LENGTH = {
    "m": 1.0,
    "km": 1000.0,
    "mi": 1609.344,
    "ft": 0.3048,
    "in": 0.0254,
}

# Base: square meter
AREA = {
    "m2": 1.0,
    "km2": 1_000_000.0,
    "ft2": 0.09290304,
    "in2": 0.00064516,
    "yd2": 0.83612736,
    "acre": 4046.8564224,
    "ha": 10000.0,
}

# Base: pascal
PRESSURE = {
    "Pa": 1.0,
    "kPa": 1000.0,
    "bar": 100000.0,
    "psi": 6894.757293168,
    "atm": 101325.0,
    "mmHg": 133.322387415,
}

# Base: second
TIME = {
    "s": 1.0,
    "min": 60.0,
    "hr": 3600.0,
    "day": 86400.0,
    "week": 604800.0,
    "year": 31536000.0,  # 365 days
}

# Base: liter
VOLUME = {
    "mL": 0.001,
    "L": 1.0,
    "m3": 1000.0,
    "gal": 3.785411784,
    "qt": 0.946352946,
    "cup": 0.2365882365,
    "floz": 0.0295735295625,
}

# Base: kilogram
WEIGHT = {
    "g": 0.001,
    "kg": 1.0,
    "t": 1000.0,
    "lb": 0.45359237,
    "oz": 0.028349523125,
}

# Base: meters per second
SPEED = {
    "ms": 1.0,
    "kmh": 1000 / 3600,
    "mph": 0.44704,
}

# Base: joule
ENERGY = {
    "J": 1.0,
    "kJ": 1000.0,
    "kcal": 4184.0,
    "Wh": 3600.0,
}

# Base: byte (binary multiples)
DATA_STORAGE = {
    "KB": 1024.0,
    "MB": 1024.0 ** 2,
    "GB": 1024.0 ** 3,
    "TB": 1024.0 ** 4,
}

# MPG <-> L/100km are reciprocal: L/100km = K / MPG and MPG = K / (L/100km)
MPG_L100KM_CONSTANT = 235.214583

POUND_KG = 0.45359237
INCH_CM = 2.54


def convert_units(
    value: Any, from_unit: str, table: Mapping[str, float]
) -> Optional[Dict[str, float]]:
    """
    Convert a value to every unit in a table.

    Args:
        value: Amount expressed in from_unit
        from_unit: Key of the unit the value is expressed in
        table: Unit key -> size of that unit in the table's base unit

    Returns:
        Mapping of unit key -> equivalent value, or None for an unknown
        unit or a non-finite value
    """
    v = to_number(value)
    if not is_finite(v):
        return None
    factor = table.get(from_unit)
    if not factor:
        return None
    base = v * factor
    return {unit: base / size for unit, size in table.items()}


def celsius_from(value: float, scale: str) -> float:
    """Convert a temperature on the given scale (C, F or K) to Celsius."""
    if scale == "F":
        return (value - 32) * (5 / 9)
    if scale == "K":
        return value - 273.15
    return value


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * (9 / 5) + 32


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + 273.15
