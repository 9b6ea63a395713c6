"""
Calculator catalog API endpoints.

List the catalog, describe one calculator's inputs and run it with
user-supplied values. Values are sent as raw form values (strings or
numbers); parsing and validation happen in the catalog.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from calculateshub.catalog import registry
from calculateshub.calculations.primitives import is_finite
from calculateshub.catalog.models import CalculatorDefinition
from calculateshub.config import get_settings

router = APIRouter()


class CalculatorValues(BaseModel):
    """Raw input values keyed by field key. Missing keys use field defaults."""

    values: Dict[str, Any] = {}


class ResultRowResponse(BaseModel):
    label: str
    value: str
    emphasis: bool = False


class ComputeResponse(BaseModel):
    """Result rows for one calculator run."""

    id: str
    results: List[ResultRowResponse]


def _get_definition(calculator_id: str) -> CalculatorDefinition:
    definition = registry.get(calculator_id) or registry.get_by_slug(calculator_id)
    if definition is None:
        raise HTTPException(status_code=404, detail="Calculator not found")
    return definition


@router.get("")
async def list_calculators(category: Optional[str] = None):
    """List calculator summaries, optionally filtered by category name."""
    definitions = registry.by_category(category) if category else registry.all()
    return [definition.summary() for definition in definitions]


@router.get("/categories")
async def list_categories():
    """Category names in catalog order."""
    return registry.categories()


@router.get("/{calculator_id}")
async def get_calculator(calculator_id: str):
    """Full definition of one calculator, including its input fields."""
    return _get_definition(calculator_id).to_dict()


@router.post("/{calculator_id}/compute", response_model=ComputeResponse)
async def compute_calculator(calculator_id: str, inputs: CalculatorValues):
    """Run a calculator. An empty result list means the inputs could not be calculated."""
    definition = _get_definition(calculator_id)
    rows = registry.compute(definition.id, inputs.values) or []
    return ComputeResponse(
        id=definition.id,
        results=[ResultRowResponse(**row.to_dict()) for row in rows],
    )


@router.post("/{calculator_id}/visibility")
async def calculator_visibility(calculator_id: str, inputs: CalculatorValues):
    """Which optional fields should be shown for the given values."""
    definition = _get_definition(calculator_id)
    return registry.visibility(definition.id, inputs.values) or {}


@router.post("/{calculator_id}/schedule")
async def calculator_schedule(calculator_id: str, inputs: CalculatorValues):
    """Monthly amortization schedule for loan calculators."""
    definition = _get_definition(calculator_id)
    if definition.loan_terms is None:
        raise HTTPException(status_code=400, detail="Calculator has no amortization schedule")

    limit = get_settings().schedule_row_limit
    _, _, term = registry.loan_terms(definition.id, inputs.values)
    # One row past the limit tells whether the schedule was cut
    rows = registry.schedule_for(definition.id, inputs.values, limit + 1)
    return {
        "id": definition.id,
        "term_months": int(term) if is_finite(term) else None,
        "truncated": len(rows) > limit,
        "schedule": [row.to_dict() for row in rows[:limit]],
    }


@router.get("/{calculator_id}/related")
async def related_calculators(calculator_id: str, limit: int = 6):
    """Calculators to suggest alongside this one."""
    definition = _get_definition(calculator_id)
    return [d.summary() for d in registry.related(definition.id, limit)]
