"""
Input parsing for calculators.

Raw values arrive as strings or loose primitives, the way form controls
produce them. They are parsed into a typed mapping before any calculator
runs: numbers become floats (NaN when unusable), dates become
datetime.date (None when unusable), selects are restricted to their
options and text stays text.
"""

from datetime import date, timedelta
from typing import Any, Dict, Mapping, Optional

from calculateshub.calculations.dates import parse_date
from calculateshub.calculations.primitives import to_number
from calculateshub.catalog.models import CalculatorDefinition, FieldSpec, FieldType

# Blank end dates default to a week after the start date
DEFAULT_DATE_SPAN_DAYS = 7


def default_values(definition: CalculatorDefinition, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Initial form values for a calculator.

    Date fields without a default are filled with today's date, except an
    "end" field, which defaults to one week after "start".
    """
    today = today or date.today()
    values: Dict[str, Any] = {}
    for spec in definition.fields:
        if spec.type != FieldType.DATE:
            values[spec.key] = spec.default if spec.default is not None else ""
            continue
        if spec.default:
            values[spec.key] = spec.default
        elif spec.key == "end" and definition.get_field("start") is not None:
            start = parse_date(definition.get_field("start").default) or today
            values[spec.key] = (start + timedelta(days=DEFAULT_DATE_SPAN_DAYS)).isoformat()
        else:
            values[spec.key] = today.isoformat()
    return values


def parse_value(spec: FieldSpec, raw: Any) -> Any:
    """Parse one raw value according to its field type."""
    if spec.type == FieldType.NUMBER:
        return to_number(raw)
    if spec.type == FieldType.DATE:
        return parse_date(raw)
    if spec.type == FieldType.SELECT:
        value = "" if raw is None else str(raw).strip()
        return value if value in spec.option_values else spec.default
    return "" if raw is None else str(raw)


def parse_inputs(
    definition: CalculatorDefinition,
    raw: Optional[Mapping[str, Any]],
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    Build the typed input mapping for a calculator.

    Keys missing from raw take the calculator's default values; keys the
    calculator does not declare are ignored.
    """
    raw = raw or {}
    defaults = default_values(definition, today)
    parsed: Dict[str, Any] = {}
    for spec in definition.fields:
        value = raw.get(spec.key)
        if value is None:
            value = defaults[spec.key]
        parsed[spec.key] = parse_value(spec, value)
    return parsed
