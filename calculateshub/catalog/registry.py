"""
Calculator Registry

Maps calculator identifiers to their definitions. Calculators register
themselves at import time through the @calculator decorator; the registry
keeps catalog order, assigns URL slugs and runs computations behind a
parse-then-compute boundary that never raises.
"""

import logging
import re
from itertools import islice
from datetime import date
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from calculateshub.calculations.amortization import (
    AmortizationRow,
    amortization_rows,
)
from calculateshub.catalog.inputs import parse_inputs
from calculateshub.catalog.models import (
    CalculatorDefinition,
    Category,
    FieldSpec,
    LoanTermsFn,
    ResultRow,
    VisibilityFn,
)

logger = logging.getLogger(__name__)

DEFAULT_RELATED_LIMIT = 6

_QUOTES = re.compile(r"['\"]")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(text: Any) -> str:
    """Lowercase, drop quotes, collapse other non-alphanumerics into dashes."""
    value = str(text or "").lower().strip()
    value = _QUOTES.sub("", value)
    value = _NON_ALNUM.sub("-", value)
    return value.strip("-")


class CalculatorRegistry:
    """Ordered collection of calculator definitions."""

    def __init__(self):
        self._by_id: Dict[str, CalculatorDefinition] = {}
        self._by_slug: Dict[str, CalculatorDefinition] = {}
        self._slug_counts: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[CalculatorDefinition]:
        return iter(self._by_id.values())

    def __contains__(self, calculator_id: object) -> bool:
        return calculator_id in self._by_id

    def register(self, definition: CalculatorDefinition) -> CalculatorDefinition:
        """
        Add a definition and assign its slug.

        Raises:
            ValueError: If the identifier is already registered
        """
        if definition.id in self._by_id:
            raise ValueError(f"Calculator '{definition.id}' is already registered")

        base = slugify(definition.name) or slugify(definition.id) or "tool"
        count = self._slug_counts.get(base, 0) + 1
        self._slug_counts[base] = count
        definition.slug = base if count == 1 else f"{base}-{count}"

        self._by_id[definition.id] = definition
        self._by_slug[definition.slug] = definition
        return definition

    def get(self, calculator_id: str) -> Optional[CalculatorDefinition]:
        return self._by_id.get(calculator_id)

    def get_by_slug(self, slug: str) -> Optional[CalculatorDefinition]:
        return self._by_slug.get(slug)

    def all(self) -> List[CalculatorDefinition]:
        return list(self._by_id.values())

    def by_category(self, category: str) -> List[CalculatorDefinition]:
        return [d for d in self._by_id.values() if d.category.value == category]

    def categories(self) -> List[str]:
        """Category names in the order they first appear in the catalog."""
        seen: List[str] = []
        for definition in self._by_id.values():
            if definition.category.value not in seen:
                seen.append(definition.category.value)
        return seen

    def related(self, calculator_id: str, limit: Any = DEFAULT_RELATED_LIMIT) -> List[CalculatorDefinition]:
        """
        Other calculators to suggest next to one calculator.

        Calculators from the same category come first, then the rest of the
        catalog, both in catalog order.
        """
        definition = self.get(calculator_id)
        try:
            size = max(0, int(limit or DEFAULT_RELATED_LIMIT))
        except (TypeError, ValueError, OverflowError):
            size = DEFAULT_RELATED_LIMIT
        if definition is None or size == 0:
            return []
        others = [d for d in self._by_id.values() if d.id != definition.id]
        same = [d for d in others if d.category == definition.category]
        rest = [d for d in others if d.category != definition.category]
        return (same + rest)[:size]

    def compute(self, calculator_id: str, raw: Optional[Mapping[str, Any]]) -> Optional[List[ResultRow]]:
        """
        Parse raw values and run a calculator.

        Returns:
            Result rows (empty when the inputs cannot be calculated), or
            None for an unknown identifier
        """
        definition = self.get(calculator_id)
        if definition is None:
            return None
        values = parse_inputs(definition, raw)
        try:
            rows = definition.compute(values)
        except Exception:
            logger.exception("Calculator %s failed", calculator_id)
            return []
        logger.debug("Computed %s: %d result rows", calculator_id, len(rows))
        return rows

    def visibility(self, calculator_id: str, raw: Optional[Mapping[str, Any]]) -> Optional[Dict[str, bool]]:
        definition = self.get(calculator_id)
        if definition is None:
            return None
        return definition.visibility(parse_inputs(definition, raw))

    def loan_terms(
        self, calculator_id: str, raw: Optional[Mapping[str, Any]]
    ) -> Optional[Tuple[float, float, float]]:
        """(principal, annual rate in percent, months) for loan calculators, else None."""
        definition = self.get(calculator_id)
        if definition is None or definition.loan_terms is None:
            return None
        return definition.loan_terms(parse_inputs(definition, raw))

    def schedule_for(
        self,
        calculator_id: str,
        raw: Optional[Mapping[str, Any]],
        limit: Optional[int] = None,
    ) -> List[AmortizationRow]:
        """
        Amortization schedule for calculators that describe a level-payment loan.

        Only the first limit rows are generated when a limit is given.
        """
        terms = self.loan_terms(calculator_id, raw)
        if terms is None:
            return []
        return list(islice(amortization_rows(*terms), limit))


registry = CalculatorRegistry()


def calculator(
    id: str,
    name: str,
    category: Category,
    description: str,
    fields: Sequence[FieldSpec],
    popular: bool = False,
    added_at: Optional[str] = None,
    visibility: Optional[VisibilityFn] = None,
    loan_terms: Optional[LoanTermsFn] = None,
    target: Optional[CalculatorRegistry] = None,
):
    """
    Register the decorated compute function as a calculator.

    Example:
        @calculator("tip", "Tip Calculator", Category.MISCELLANEOUS,
                    "Split a bill with tip.", [number("bill", "Bill", 50)])
        def tip(values):
            ...
    """
    def decorator(compute):
        definition = CalculatorDefinition(
            id=id,
            name=name,
            category=category,
            description=description,
            fields=tuple(fields),
            compute=compute,
            field_visibility=visibility,
            loan_terms=loan_terms,
            popular=popular,
            added_at=date.fromisoformat(added_at) if added_at else None,
        )
        (target or registry).register(definition)
        return compute

    return decorator
