"""
Debt Payoff Simulations

Month-by-month payoff simulations for multiple debts (snowball and
avalanche strategies) and for a single credit card paid with a minimum
payment rule. Both are capped at 100 years so pathological inputs (minimums
smaller than the accruing interest) still terminate.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from calculateshub.calculations.amortization import monthly_rate
from calculateshub.calculations.primitives import is_finite, to_number

logger = logging.getLogger(__name__)

MAX_MONTHS = 1200
AVALANCHE = "avalanche"
SNOWBALL = "snowball"

# A card balance at or below half a cent counts as paid off
CARD_PAID_THRESHOLD = 0.005


@dataclass
class Debt:
    """A debt being paid down. Mutated in place during one simulation."""

    name: str
    balance: float
    apr: float  # Annual percentage rate, e.g. 21.99
    minimum: float  # Minimum monthly payment

    @property
    def active(self) -> bool:
        return self.balance > 0

    def is_valid(self) -> bool:
        return (
            is_finite(self.balance)
            and self.balance > 0
            and is_finite(self.apr)
            and self.apr >= 0
            and is_finite(self.minimum)
            and self.minimum >= 0
        )


@dataclass(frozen=True)
class DebtPayoffResult:
    """Outcome of a successful payoff simulation."""

    months: int
    total_interest: float
    total_paid: float
    order: Tuple[str, ...]

    @property
    def payoff_order(self) -> str:
        return " → ".join(self.order)


@dataclass(frozen=True)
class MinimumPaymentResult:
    """Outcome of a credit card minimum payment simulation."""

    months: int
    total_interest: float
    total_paid: float
    paid_off: bool


DebtInput = Union[Debt, Mapping]


def _coerce_debt(raw: DebtInput) -> Debt:
    if isinstance(raw, Debt):
        return Debt(name=raw.name or "Debt", balance=raw.balance, apr=raw.apr, minimum=raw.minimum)
    return Debt(
        name=str(raw.get("name") or "Debt"),
        balance=to_number(raw.get("balance")),
        apr=to_number(raw.get("apr")),
        minimum=to_number(raw.get("minimum", raw.get("min"))),
    )


def order_debts(debts: List[Debt], strategy: str) -> List[Debt]:
    """
    Order debts by payoff priority.

    Avalanche pays the highest APR first, snowball the smallest balance
    first. Ties are broken by name.
    """
    if strategy == AVALANCHE:
        return sorted(debts, key=lambda d: (-d.apr, d.name))
    return sorted(debts, key=lambda d: (d.balance, d.name))


def simulate_debt_payoff(
    debts: Iterable[DebtInput],
    extra_payment: float,
    strategy: str = SNOWBALL,
    max_months: int = MAX_MONTHS,
) -> Optional[DebtPayoffResult]:
    """
    Simulate paying off several debts with a fixed monthly budget.

    Each month every active debt accrues interest, then receives its
    minimum payment in priority order; whatever is left of the budget
    (sum of active minimums plus the extra payment) goes to the debts in
    priority order. The priority order is fixed up front.

    Args:
        debts: Debts to pay off, as Debt objects or mappings with
            name/balance/apr/minimum keys
        extra_payment: Extra amount paid each month on top of the minimums
        strategy: "avalanche" or "snowball"
        max_months: Simulation horizon

    Returns:
        DebtPayoffResult, or None when no valid debts were given or the
        debts are not paid off within the horizon
    """
    ledger = [d for d in (_coerce_debt(raw) for raw in debts) if d.is_valid()]
    if not ledger:
        return None

    extra = to_number(extra_payment)
    extra = extra if is_finite(extra) and extra >= 0 else 0.0

    ledger = order_debts(ledger, strategy)

    months = 0
    total_interest = 0.0
    total_paid = 0.0

    while months < max_months:
        active = [d for d in ledger if d.active]
        if not active:
            break

        months += 1

        for debt in active:
            r = monthly_rate(debt.apr)
            interest = debt.balance * r if r > 0 else 0.0
            debt.balance += interest
            total_interest += interest

        remaining = sum(d.minimum for d in active) + extra

        for debt in active:
            if remaining <= 0:
                break
            pay = min(debt.balance, max(0.0, debt.minimum), remaining)
            debt.balance -= pay
            remaining -= pay
            total_paid += pay

        for debt in ledger:
            if remaining <= 0:
                break
            if not debt.active:
                continue
            pay = min(debt.balance, remaining)
            debt.balance -= pay
            remaining -= pay
            total_paid += pay

    if any(d.active for d in ledger):
        logger.debug(
            "Debts not paid off within %d months using %s strategy", max_months, strategy
        )
        return None

    return DebtPayoffResult(
        months=months,
        total_interest=total_interest,
        total_paid=total_paid,
        order=tuple(d.name for d in ledger),
    )


def simulate_minimum_payments(
    balance: float,
    apr: float,
    min_pct: float,
    min_floor: float,
    extra: float = 0.0,
    max_months: int = MAX_MONTHS,
) -> MinimumPaymentResult:
    """
    Simulate paying a credit card with a percent-of-balance minimum.

    Each month interest accrues, then the payment is the larger of the
    floor and min_pct of the balance, plus the extra amount, capped at the
    balance.

    Args:
        balance: Starting balance
        apr: Annual percentage rate
        min_pct: Minimum payment as a percent of the balance
        min_floor: Minimum payment floor in dollars
        extra: Extra amount paid every month
        max_months: Simulation horizon

    Returns:
        MinimumPaymentResult; paid_off is False when the horizon was hit
    """
    r = monthly_rate(apr)
    months = 0
    total_interest = 0.0
    total_paid = 0.0

    while months < max_months and balance > CARD_PAID_THRESHOLD:
        months += 1
        interest = balance * r if r > 0 else 0.0
        balance += interest
        total_interest += interest

        pay = max(min_floor, balance * (min_pct / 100)) + extra
        if pay > balance:
            pay = balance
        if pay <= 0:
            break
        balance -= pay
        total_paid += pay

    return MinimumPaymentResult(
        months=months,
        total_interest=total_interest,
        total_paid=total_paid,
        paid_off=balance <= CARD_PAID_THRESHOLD,
    )
