"""
Loan Amortization Calculations

Implements the level monthly payment and a month-by-month amortization
schedule for fixed-rate loans. Rates are given as annual percentages
(e.g., 6.25 for 6.25%).
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator

from calculateshub.calculations.primitives import NAN, is_finite, power

# Balances below this are floating point residue, not money owed
BALANCE_EPSILON = 1e-8

# Longest term the schedule endpoints accept (100 years)
MAX_TERM_MONTHS = 1200


@dataclass(frozen=True)
class AmortizationRow:
    """One month of an amortization schedule."""

    month: int  # 1-based
    payment: float
    principal: float
    interest: float
    balance: float  # Balance after this month's payment

    def to_dict(self) -> Dict[str, float]:
        return {
            "month": self.month,
            "payment": self.payment,
            "principal": self.principal,
            "interest": self.interest,
            "balance": self.balance,
        }


def monthly_rate(annual_rate_pct: float) -> float:
    """Convert an annual percentage rate to a monthly periodic rate."""
    return (annual_rate_pct / 100) / 12


def monthly_payment(principal: float, annual_rate_pct: float, months: float) -> float:
    """
    Calculate the level monthly payment for a fixed-rate loan.

    Args:
        principal: Loan principal amount
        annual_rate_pct: Annual interest rate in percent (e.g., 8.9 for 8.9%)
        months: Number of monthly payments

    Returns:
        Monthly payment, or NaN when the term or principal is unusable
    """
    if not is_finite(principal) or not is_finite(months) or months <= 0:
        return NAN

    r = monthly_rate(annual_rate_pct) if is_finite(annual_rate_pct) else NAN

    if not is_finite(r) or r == 0:
        # Straight-line repayment
        return principal / months

    growth = power(1 + r, months)
    if not is_finite(growth) or growth == 1:
        return NAN
    return principal * (r * growth) / (growth - 1)


def amortization_rows(
    principal: float, annual_rate_pct: float, months: float
) -> Iterator[AmortizationRow]:
    """
    Generate the amortization schedule one month at a time.

    The final payment's principal portion is capped at the remaining
    balance, and the schedule ends as soon as the balance reaches zero.

    Args:
        principal: Loan principal amount
        annual_rate_pct: Annual interest rate in percent
        months: Loan term in months (truncated to a whole number)

    Yields:
        AmortizationRow for each month until the loan is paid off
    """
    if not is_finite(principal) or not is_finite(months) or not is_finite(annual_rate_pct):
        return
    n = math.trunc(months)
    r = monthly_rate(annual_rate_pct)
    if n <= 0 or r < 0:
        return

    payment = monthly_payment(principal, annual_rate_pct, n)
    if not is_finite(payment):
        return

    balance = principal
    for month in range(1, n + 1):
        interest = 0.0 if r == 0 else balance * r
        principal_paid = payment - interest
        if principal_paid > balance:
            principal_paid = balance
        balance = balance - principal_paid
        if balance < BALANCE_EPSILON:
            balance = 0.0

        yield AmortizationRow(
            month=month,
            payment=payment,
            principal=principal_paid,
            interest=interest,
            balance=balance,
        )

        if balance == 0:
            break


def schedule_totals(rows: Iterable[AmortizationRow]) -> Dict[str, float]:
    """Sum payments, principal and interest over a schedule."""
    totals = {"months": 0, "total_payment": 0.0, "total_principal": 0.0, "total_interest": 0.0}
    for row in rows:
        totals["months"] += 1
        totals["total_payment"] += row.payment
        totals["total_principal"] += row.principal
        totals["total_interest"] += row.interest
    return totals


def loan_totals(payment: float, months: float, principal: float) -> Dict[str, float]:
    """
    Total paid and total interest for a level-payment loan.

    Uses payment x term, the way the loan calculators quote them, rather
    than summing a schedule.
    """
    total_paid = payment * months
    return {"total_paid": total_paid, "total_interest": total_paid - principal}
