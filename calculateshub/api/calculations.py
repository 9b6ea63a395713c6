"""
Calculation API endpoints.

Direct access to the engine helpers that produce more than a handful of
result rows: amortization schedules, debt payoff simulations, fraction
approximation and the random generators.
"""

import logging
import random
from itertools import chain, islice
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from calculateshub.calculations.amortization import (
    MAX_TERM_MONTHS,
    amortization_rows,
    monthly_payment,
    schedule_totals,
)
from calculateshub.calculations.debt import AVALANCHE, SNOWBALL, simulate_debt_payoff
from calculateshub.calculations.primitives import is_finite
from calculateshub.calculations.randomness import (
    DEFAULT_PASSWORD_LENGTH,
    default_source,
    make_password,
    random_int_inclusive,
)
from calculateshub.calculations.rational import best_rational, fraction_to_mixed_string
from calculateshub.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def _random_source():
    if get_settings().use_system_random:
        return default_source()
    return random.Random()


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float = Field(gt=0)
    annual_rate: float = Field(ge=0, description="Annual interest rate in percent, e.g. 6.5")
    months: int = Field(gt=0, le=MAX_TERM_MONTHS)


@router.post("/amortization")
async def calculate_amortization(inputs: AmortizationInput):
    """Generate a level-payment amortization schedule."""
    payment = monthly_payment(inputs.principal, inputs.annual_rate, inputs.months)
    if not is_finite(payment):
        raise HTTPException(status_code=400, detail="Loan terms do not produce a finite payment")

    rows = amortization_rows(inputs.principal, inputs.annual_rate, inputs.months)
    limit = get_settings().schedule_row_limit
    schedule = list(islice(rows, limit))
    # Totals cover the whole term; rows past the limit are summed, not kept
    totals = schedule_totals(chain(schedule, rows))

    return {
        "monthly_payment": payment,
        "schedule": [row.to_dict() for row in schedule],
        "truncated": totals["months"] > limit,
        **totals,
    }


class DebtInput(BaseModel):
    """One debt in a payoff plan."""

    name: str = "Debt"
    balance: float = Field(gt=0)
    apr: float = Field(ge=0)
    minimum: float = Field(ge=0)


class DebtPayoffInput(BaseModel):
    """Input for a snowball or avalanche payoff simulation."""

    debts: List[DebtInput] = Field(min_length=1)
    extra_payment: float = Field(default=0.0, ge=0)
    strategy: str = Field(default=AVALANCHE, pattern=f"^({AVALANCHE}|{SNOWBALL})$")


class DebtPayoffResponse(BaseModel):
    months: int
    total_interest: float
    total_paid: float
    payoff_order: List[str]


@router.post("/debt-payoff", response_model=DebtPayoffResponse)
async def calculate_debt_payoff(inputs: DebtPayoffInput):
    """Simulate paying off several debts with the chosen strategy."""
    result = simulate_debt_payoff(
        [debt.model_dump() for debt in inputs.debts],
        inputs.extra_payment,
        strategy=inputs.strategy,
        max_months=get_settings().max_debt_months,
    )
    if result is None:
        raise HTTPException(
            status_code=400,
            detail="Debts are not paid off within the simulation horizon",
        )
    return DebtPayoffResponse(
        months=result.months,
        total_interest=result.total_interest,
        total_paid=result.total_paid,
        payoff_order=list(result.order),
    )


@router.get("/fraction")
async def approximate_fraction(value: float, max_denominator: Optional[int] = None):
    """Best rational approximation of a decimal value."""
    limit = max_denominator or get_settings().default_max_denominator
    fraction = best_rational(value, limit)
    if fraction is None:
        raise HTTPException(status_code=400, detail="Value cannot be approximated")
    return {
        "numerator": fraction.n,
        "denominator": fraction.d,
        "fraction": str(fraction),
        "mixed": fraction_to_mixed_string(fraction),
    }


@router.get("/random-int")
async def random_integer(minimum: float = 1, maximum: float = 100):
    """Uniform random integer between minimum and maximum, inclusive."""
    lo, hi = min(minimum, maximum), max(minimum, maximum)
    drawn = random_int_inclusive(lo, hi, source=_random_source())
    if drawn is None:
        raise HTTPException(status_code=400, detail="Range contains no usable integers")
    return {"value": drawn, "minimum": lo, "maximum": hi}


@router.get("/password")
async def generate_password(
    length: int = DEFAULT_PASSWORD_LENGTH,
    lower: bool = True,
    upper: bool = True,
    numbers: bool = True,
    symbols: bool = False,
    exclude_ambiguous: bool = False,
):
    """Generate a password from the selected character classes."""
    password = make_password(
        length,
        lower=lower,
        upper=upper,
        numbers=numbers,
        symbols=symbols,
        exclude_ambiguous=exclude_ambiguous,
        source=_random_source(),
    )
    logger.debug("Generated password of length %d", len(password))
    return {"password": password, "length": len(password)}
