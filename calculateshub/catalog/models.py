"""
Catalog data model: calculator definitions, their input fields and the
result rows they produce.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from calculateshub.calculations.primitives import is_finite


class Category(str, Enum):
    """Top-level calculator categories, in navigation order."""

    FINANCIAL = "Financial"
    BUSINESS = "Business"
    ECOMMERCE = "E-commerce"
    MATH = "Math"
    CONVERSIONS = "Conversions"
    MISCELLANEOUS = "Miscellaneous"


class FieldType(str, Enum):
    NUMBER = "number"
    SELECT = "select"
    DATE = "date"
    TEXT = "text"


@dataclass(frozen=True)
class SelectOption:
    value: str
    label: str


@dataclass(frozen=True)
class FieldSpec:
    """One input of a calculator form."""

    key: str
    label: str
    type: FieldType = FieldType.NUMBER
    default: Any = None
    unit: Optional[str] = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None
    options: Tuple[SelectOption, ...] = ()

    def __post_init__(self):
        if self.type == FieldType.NUMBER and is_finite(self.default):
            if self.min is not None and self.default < self.min:
                raise ValueError(f"Default for '{self.key}' is below its minimum")
            if self.max is not None and self.default > self.max:
                raise ValueError(f"Default for '{self.key}' is above its maximum")
        if self.type == FieldType.SELECT:
            if not self.options:
                raise ValueError(f"Select field '{self.key}' has no options")
            if self.default not in self.option_values:
                raise ValueError(f"Default for '{self.key}' is not one of its options")

    @property
    def option_values(self) -> Tuple[str, ...]:
        return tuple(option.value for option in self.options)

    def option_label(self, value: str) -> Optional[str]:
        for option in self.options:
            if option.value == value:
                return option.label
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "key": self.key,
            "label": self.label,
            "type": self.type.value,
            "default": self.default,
        }
        for name in ("unit", "min", "max", "step"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        if self.options:
            data["options"] = [{"value": o.value, "label": o.label} for o in self.options]
        return data


@dataclass(frozen=True)
class ResultRow:
    """One labeled, pre-formatted output value."""

    label: str
    value: str
    emphasis: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "value": self.value, "emphasis": self.emphasis}


Values = Mapping[str, Any]
ComputeFn = Callable[[Values], List[ResultRow]]
VisibilityFn = Callable[[Values], Dict[str, bool]]
# (principal, annual rate in percent, term in months)
LoanTermsFn = Callable[[Values], Tuple[float, float, float]]


@dataclass
class CalculatorDefinition:
    """A calculator: its input schema and its pure compute function."""

    id: str
    name: str
    category: Category
    description: str
    fields: Tuple[FieldSpec, ...]
    compute: ComputeFn
    field_visibility: Optional[VisibilityFn] = None
    loan_terms: Optional[LoanTermsFn] = None
    popular: bool = False
    added_at: Optional[date] = None
    slug: str = ""
    field_index: Dict[str, FieldSpec] = field(init=False, repr=False)

    def __post_init__(self):
        self.field_index = {}
        for spec in self.fields:
            if spec.key in self.field_index:
                raise ValueError(f"Duplicate field '{spec.key}' in calculator '{self.id}'")
            self.field_index[spec.key] = spec

    def get_field(self, key: str) -> Optional[FieldSpec]:
        return self.field_index.get(key)

    def visibility(self, values: Values) -> Dict[str, bool]:
        """Visibility of every field; fields default to visible."""
        shown = {spec.key: True for spec in self.fields}
        if self.field_visibility is not None:
            shown.update(self.field_visibility(values))
        return shown

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "category": self.category.value,
            "description": self.description,
            "popular": self.popular,
            "added_at": self.added_at.isoformat() if self.added_at else None,
        }

    def to_dict(self) -> Dict[str, Any]:
        data = self.summary()
        data["fields"] = [spec.to_dict() for spec in self.fields]
        data["has_schedule"] = self.loan_terms is not None
        return data


# Field and row constructors used by the catalog modules


def number(key: str, label: str, default: Any, unit: Optional[str] = None,
           min: Optional[float] = None, max: Optional[float] = None,
           step: Optional[float] = None) -> FieldSpec:
    return FieldSpec(key=key, label=label, type=FieldType.NUMBER, default=default,
                     unit=unit, min=min, max=max, step=step)


def select(key: str, label: str, default: str, options: List[Tuple[str, str]]) -> FieldSpec:
    return FieldSpec(
        key=key,
        label=label,
        type=FieldType.SELECT,
        default=default,
        options=tuple(SelectOption(value=v, label=text) for v, text in options),
    )


def text(key: str, label: str, default: str = "") -> FieldSpec:
    return FieldSpec(key=key, label=label, type=FieldType.TEXT, default=default)


def date_input(key: str, label: str, default: str = "") -> FieldSpec:
    return FieldSpec(key=key, label=label, type=FieldType.DATE, default=default)


def row(label: str, value: str, emphasis: bool = False) -> ResultRow:
    return ResultRow(label=label, value=value, emphasis=emphasis)
