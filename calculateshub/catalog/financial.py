"""
Financial Calculators

Loans, savings growth, credit cards and debt payoff.
"""

from typing import List

from calculateshub.calculations.amortization import loan_totals, monthly_payment
from calculateshub.calculations.debt import (
    AVALANCHE,
    MAX_MONTHS,
    SNOWBALL,
    simulate_debt_payoff,
    simulate_minimum_payments,
)
from calculateshub.calculations.formatting import (
    INFINITY_SYMBOL,
    format_int,
    format_money,
    format_number,
    format_percent_from_rate,
)
from calculateshub.calculations.primitives import (
    INF,
    NAN,
    all_finite,
    clamp,
    is_finite,
    power,
    round_half_up,
    safe_div,
    to_number,
)
from calculateshub.catalog.models import Category, ResultRow, Values, number, row, select, text
from calculateshub.catalog.registry import calculator

FIN = Category.FINANCIAL


def _payoff_time(months: int) -> str:
    return f"{format_int(months)} months ({format_number(months / 12)} years)"


def _mortgage_terms(values: Values):
    return (
        values["homePrice"] - values["downPayment"],
        values["interestRate"],
        values["termYears"] * 12,
    )


def _loan_terms(values: Values):
    return values["principal"], values["interestRate"], values["termMonths"]


@calculator(
    "mortgage", "Mortgage Calculator", FIN,
    "Estimate monthly payments with taxes, insurance, and PMI.",
    [
        number("homePrice", "Home price", 400000, unit="USD", min=0, step=1000),
        number("downPayment", "Down payment", 80000, unit="USD", min=0, step=1000),
        number("interestRate", "Interest rate", 6.25, unit="%", min=0, step=0.01),
        number("termYears", "Loan term", 30, unit="years", min=1, step=1),
        number("propertyTax", "Property tax", 4200, unit="USD/year", min=0, step=100),
        number("homeInsurance", "Home insurance", 1600, unit="USD/year", min=0, step=100),
        number("pmiRate", "PMI rate (optional)", 0.5, unit="%/year", min=0, step=0.01),
    ],
    popular=True, added_at="2025-12-25", loan_terms=_mortgage_terms,
)
def mortgage(values: Values) -> List[ResultRow]:
    """
    Monthly housing payment: principal and interest plus escrow items.

    PMI applies only while the loan-to-value ratio is above 80%.
    """
    home_price = values["homePrice"]
    loan_amount, rate, months = _mortgage_terms(values)
    pi = monthly_payment(loan_amount, rate, months)
    monthly_tax = values["propertyTax"] / 12
    monthly_ins = values["homeInsurance"] / 12
    ltv = safe_div(loan_amount, home_price)
    pmi_rate = values["pmiRate"]
    pmi_monthly = 0.0
    if is_finite(ltv) and ltv > 0.80 and is_finite(pmi_rate) and pmi_rate > 0:
        pmi_monthly = loan_amount * (pmi_rate / 100) / 12
    total_monthly = pi + monthly_tax + monthly_ins + pmi_monthly
    totals = loan_totals(pi, months, loan_amount)

    return [
        row("Total monthly payment", format_money(total_monthly), True),
        row("Principal & interest", format_money(pi)),
        row("Property tax", format_money(monthly_tax)),
        row("Insurance", format_money(monthly_ins)),
        row("PMI", format_money(pmi_monthly)),
        row("Loan amount", format_money(loan_amount)),
        row("Total interest (term)", format_money(totals["total_interest"])),
    ]


@calculator(
    "loan", "Loan Payment Calculator", FIN,
    "Calculate monthly payment, interest, and total cost.",
    [
        number("principal", "Loan amount", 15000, unit="USD", min=0, step=100),
        number("interestRate", "Interest rate", 8.9, unit="%", min=0, step=0.01),
        number("termMonths", "Term", 60, unit="months", min=1, step=1),
    ],
    popular=True, added_at="2025-12-22", loan_terms=_loan_terms,
)
def loan(values: Values) -> List[ResultRow]:
    principal, rate, months = _loan_terms(values)
    payment = monthly_payment(principal, rate, months)
    totals = loan_totals(payment, months, principal)
    return [
        row("Monthly payment", format_money(payment), True),
        row("Total interest", format_money(totals["total_interest"])),
        row("Total paid", format_money(totals["total_paid"])),
    ]


@calculator(
    "compound-interest", "Compound Interest Calculator", FIN,
    "Project investment growth with contributions over time.",
    [
        number("principal", "Starting amount", 10000, unit="USD", min=0, step=100),
        number("contribution", "Monthly contribution", 250, unit="USD", min=0, step=10),
        number("annualRate", "Annual return", 7.0, unit="%", min=-100, step=0.01),
        number("years", "Years", 20, unit="years", min=0, step=1),
        select("compoundsPerYear", "Compounds per year", "12", [
            ("1", "1 (Yearly)"),
            ("4", "4 (Quarterly)"),
            ("12", "12 (Monthly)"),
            ("365", "365 (Daily)"),
        ]),
    ],
    popular=True, added_at="2025-12-20",
)
def compound_interest(values: Values) -> List[ResultRow]:
    """
    Month-by-month growth with end-of-month contributions.

    The compounding frequency is converted to an equivalent monthly rate.
    """
    principal = clamp(values["principal"], 0, INF)
    contribution = clamp(values["contribution"], 0, INF)
    annual_rate = values["annualRate"]
    years = clamp(values["years"], 0, 200)
    periods = clamp(to_number(values["compoundsPerYear"]), 1, 365)
    months = round_half_up(years * 12)

    if not all_finite(principal, contribution, annual_rate, months, periods) or months < 0:
        return []

    periodic_rate = (annual_rate / 100) / periods
    rate = power(1 + periodic_rate, periods / 12) - 1
    balance = principal
    contributed = 0.0
    for _ in range(int(months)):
        balance = balance * (1 + rate) + contribution
        contributed += contribution

    invested = principal + contributed
    return [
        row("Ending balance", format_money(balance), True),
        row("Total invested", format_money(invested)),
        row("Total gain", format_money(balance - invested)),
    ]


@calculator(
    "cagr", "CAGR Calculator", FIN,
    "Find compound annual growth rate between two values.",
    [
        number("startValue", "Starting value", 10000, min=0, step=0.01),
        number("endValue", "Ending value", 18000, min=0, step=0.01),
        number("years", "Years", 3, min=0.01, step=0.01),
    ],
    added_at="2025-12-18",
)
def cagr(values: Values) -> List[ResultRow]:
    start, end, years = values["startValue"], values["endValue"], values["years"]
    if not (start > 0) or not (end > 0) or not (years > 0):
        return []
    multiple = end / start
    return [
        row("CAGR", format_percent_from_rate(power(multiple, 1 / years) - 1), True),
        row("Growth multiple", format_number(multiple)),
    ]


@calculator(
    "simple-interest", "Simple Interest Calculator", FIN,
    "Calculate simple interest and total amount.",
    [
        number("principal", "Principal", 5000, unit="USD", min=0, step=0.01),
        number("annualRate", "Annual rate", 6, unit="%", step=0.01),
        number("years", "Time", 3, unit="years", min=0, step=0.01),
    ],
    added_at="2025-12-08",
)
def simple_interest(values: Values) -> List[ResultRow]:
    p, r, t = values["principal"], values["annualRate"] / 100, values["years"]
    if not all_finite(p, r, t):
        return []
    interest = p * r * t
    return [
        row("Total amount", format_money(p + interest), True),
        row("Interest", format_money(interest)),
    ]


@calculator(
    "savings", "Savings Calculator", FIN,
    "Estimate future value with regular monthly savings.",
    [
        number("initial", "Starting amount", 2000, unit="USD", min=0, step=0.01),
        number("monthly", "Monthly contribution", 200, unit="USD", min=0, step=0.01),
        number("annualRate", "Annual interest rate", 4.5, unit="%", step=0.01),
        number("years", "Years", 10, min=0, step=0.1),
    ],
    added_at="2025-12-07",
)
def savings(values: Values) -> List[ResultRow]:
    initial = clamp(values["initial"], 0, INF)
    monthly = clamp(values["monthly"], 0, INF)
    annual_rate = values["annualRate"]
    years = clamp(values["years"], 0, 200)
    if not all_finite(initial, monthly, annual_rate, years):
        return []

    r = (annual_rate / 100) / 12
    balance = initial
    contributed = 0.0
    for _ in range(int(round_half_up(years * 12))):
        balance = balance * (1 + r) + monthly
        contributed += monthly

    total_contributed = initial + contributed
    return [
        row("Ending balance", format_money(balance), True),
        row("Total contributed", format_money(total_contributed)),
        row("Interest earned", format_money(balance - total_contributed)),
    ]


@calculator(
    "roi", "Return on Investment (ROI) Calculator", FIN,
    "Calculate ROI from cost and current value.",
    [
        number("cost", "Cost (investment)", 10000, unit="USD", min=0, step=0.01),
        number("value", "Current value", 13500, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-06",
)
def roi(values: Values) -> List[ResultRow]:
    cost, value = values["cost"], values["value"]
    if not (cost > 0) or not is_finite(value):
        return []
    profit = value - cost
    return [
        row("ROI", format_percent_from_rate(profit / cost), True),
        row("Profit", format_money(profit)),
    ]


@calculator(
    "net-worth", "Net Worth Calculator", FIN,
    "Compute net worth from assets and liabilities.",
    [
        number("assets", "Total assets", 250000, unit="USD", step=0.01),
        number("liabilities", "Total liabilities", 145000, unit="USD", step=0.01),
    ],
    added_at="2025-12-05",
)
def net_worth(values: Values) -> List[ResultRow]:
    assets, liabilities = values["assets"], values["liabilities"]
    if not all_finite(assets, liabilities):
        return []
    debt_ratio = 0.0 if liabilities == 0 else liabilities / max(assets, 1e-9)
    return [
        row("Net worth", format_money(assets - liabilities), True),
        row("Assets", format_money(assets)),
        row("Liabilities", format_money(liabilities)),
        row("Liabilities / assets", format_percent_from_rate(debt_ratio)),
    ]


@calculator(
    "credit-card-interest", "Credit Card Interest Calculator", FIN,
    "Estimate monthly and daily interest from balance and APR.",
    [
        number("balance", "Current balance", 2500, unit="USD", min=0, step=0.01),
        number("apr", "APR", 24.99, unit="%", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def credit_card_interest(values: Values) -> List[ResultRow]:
    balance, apr = values["balance"], values["apr"]
    if not all_finite(balance, apr) or balance < 0 or apr < 0:
        return []
    return [
        row("Estimated monthly interest", format_money(balance * (apr / 100) / 12), True),
        row("Estimated daily interest", format_money(balance * (apr / 100) / 365)),
        row("Balance", format_money(balance)),
    ]


@calculator(
    "credit-card-minimum-payment", "Credit Card Minimum Payment Calculator", FIN,
    "Estimate payoff time and interest using a minimum payment rule.",
    [
        number("balance", "Starting balance", 4200, unit="USD", min=0, step=0.01),
        number("apr", "APR", 24.99, unit="%", min=0, step=0.01),
        number("minPct", "Minimum payment percent", 2, unit="%", min=0, step=0.1),
        number("minDollar", "Minimum payment floor", 35, unit="USD", min=0, step=1),
        number("extra", "Extra payment", 50, unit="USD", min=0, step=1),
    ],
    added_at="2025-12-30",
)
def credit_card_minimum_payment(values: Values) -> List[ResultRow]:
    balance = values["balance"]
    if not is_finite(balance) or balance <= 0:
        return []
    rest = (values["apr"], values["minPct"], values["minDollar"], values["extra"])
    if not all_finite(*rest) or any(v < 0 for v in rest):
        return []

    result = simulate_minimum_payments(balance, *rest)
    payoff = _payoff_time(result.months) if result.paid_off else f"> {format_int(MAX_MONTHS)} months"
    return [
        row("Payoff time", payoff, True),
        row("Total interest", format_money(result.total_interest)),
        row("Total paid", format_money(result.total_paid)),
    ]


def _debt_fields():
    defaults = [
        ("Card A", 1200, 26.99, 40),
        ("Card B", 3400, 21.99, 85),
        ("Loan", 7800, 11.5, 210),
    ]
    fields = []
    for i, (name, balance, apr, minimum) in enumerate(defaults, start=1):
        fields += [
            text(f"d{i}Name", f"Debt {i} name", name),
            number(f"d{i}Bal", f"Debt {i} balance", balance, unit="USD", min=0, step=0.01),
            number(f"d{i}Apr", f"Debt {i} APR", apr, unit="%", min=0, step=0.01),
            number(f"d{i}Min", f"Debt {i} minimum", minimum, unit="USD", min=0, step=1),
        ]
    fields.append(number("extra", "Extra monthly payment", 100, unit="USD", min=0, step=1))
    return fields


def _debt_payoff(values: Values, strategy: str) -> List[ResultRow]:
    debts = [
        {
            "name": values[f"d{i}Name"],
            "balance": values[f"d{i}Bal"],
            "apr": values[f"d{i}Apr"],
            "minimum": values[f"d{i}Min"],
        }
        for i in (1, 2, 3)
    ]
    result = simulate_debt_payoff(debts, values["extra"], strategy)
    if result is None:
        return []
    return [
        row("Payoff time", _payoff_time(result.months), True),
        row("Total interest", format_money(result.total_interest)),
        row("Total paid", format_money(result.total_paid)),
        row("Payoff order", result.payoff_order),
    ]


@calculator(
    "debt-snowball", "Debt Snowball Calculator", FIN,
    "Estimate payoff time by paying smallest balance first.",
    _debt_fields(),
    added_at="2025-12-30",
)
def debt_snowball(values: Values) -> List[ResultRow]:
    return _debt_payoff(values, SNOWBALL)


@calculator(
    "debt-avalanche", "Debt Avalanche Calculator", FIN,
    "Estimate payoff time by paying highest APR first.",
    _debt_fields(),
    added_at="2025-12-30",
)
def debt_avalanche(values: Values) -> List[ResultRow]:
    return _debt_payoff(values, AVALANCHE)


@calculator(
    "auto-loan", "Auto Loan Calculator", FIN,
    "Estimate monthly car payment and total interest.",
    [
        number("price", "Vehicle price", 28000, unit="USD", min=0, step=100),
        number("down", "Down payment", 3000, unit="USD", min=0, step=100),
        number("trade", "Trade-in value", 0, unit="USD", min=0, step=100),
        number("tax", "Sales tax", 7, unit="%", min=0, step=0.01),
        number("apr", "APR", 6.5, unit="%", min=0, step=0.01),
        number("months", "Term", 60, unit="months", min=1, step=1),
    ],
    added_at="2025-12-30",
)
def auto_loan(values: Values) -> List[ResultRow]:
    """Sales tax is applied to the price left after the down payment and trade-in."""
    price, down, trade = values["price"], values["down"], values["trade"]
    tax, apr, months = values["tax"], values["apr"], values["months"]
    if not all_finite(price, down, trade, tax, apr) or min(price, down, trade, tax, apr) < 0:
        return []
    if not (months > 0):
        return []
    taxable = max(0.0, price - down - trade)
    amount = taxable * (1 + tax / 100)
    payment = monthly_payment(amount, apr, months)
    totals = loan_totals(payment, months, amount)
    return [
        row("Monthly payment", format_money(payment), True),
        row("Loan amount", format_money(amount)),
        row("Total interest", format_money(totals["total_interest"])),
    ]


@calculator(
    "refinance", "Refinance Calculator", FIN,
    "Compare current loan vs refinance to estimate savings.",
    [
        number("balance", "Current loan balance", 185000, unit="USD", min=0, step=100),
        number("currentRate", "Current APR", 7.25, unit="%", min=0, step=0.01),
        number("remainingMonths", "Remaining term", 300, unit="months", min=1, step=1),
        number("newRate", "New APR", 6.25, unit="%", min=0, step=0.01),
        number("newMonths", "New term", 300, unit="months", min=1, step=1),
        number("closing", "Closing costs", 3500, unit="USD", min=0, step=100),
    ],
    added_at="2025-12-30",
)
def refinance(values: Values) -> List[ResultRow]:
    """
    Compare the current and refinanced payments.

    Break-even is the number of months of savings needed to recover the
    closing costs; it is undefined when the refinance does not lower the
    payment.
    """
    balance = values["balance"]
    current_rate, remaining = values["currentRate"], values["remainingMonths"]
    new_rate, new_months = values["newRate"], values["newMonths"]
    closing = values["closing"]
    if not is_finite(balance) or balance <= 0:
        return []
    if not is_finite(current_rate) or current_rate < 0 or not (remaining > 0):
        return []
    if not is_finite(new_rate) or new_rate < 0 or not (new_months > 0):
        return []
    if not is_finite(closing) or closing < 0:
        return []

    current_payment = monthly_payment(balance, current_rate, remaining)
    new_payment = monthly_payment(balance, new_rate, new_months)
    savings_per_month = current_payment - new_payment
    breakeven = closing / savings_per_month if savings_per_month > 0 else NAN
    current_interest = current_payment * remaining - balance
    new_interest = new_payment * new_months - balance

    return [
        row("Monthly savings", format_money(savings_per_month), True),
        row("Current payment", format_money(current_payment)),
        row("New payment", format_money(new_payment)),
        row("Break-even (months)", format_number(breakeven)),
        row("Interest saved (approx)", format_money(current_interest - new_interest)),
    ]


@calculator(
    "amortization-schedule", "Amortization Schedule Calculator", FIN,
    "Calculate payment and show an amortization schedule for a loan.",
    [
        number("principal", "Loan amount", 250000, unit="USD", min=0, step=100),
        number("interestRate", "APR", 6.25, unit="%", min=0, step=0.01),
        number("termMonths", "Term", 360, unit="months", min=1, step=1),
    ],
    added_at="2025-12-30", loan_terms=_loan_terms,
)
def amortization_schedule(values: Values) -> List[ResultRow]:
    principal, rate, months = _loan_terms(values)
    if not (principal > 0) or not is_finite(rate) or rate < 0 or not (months > 0):
        return []
    payment = monthly_payment(principal, rate, months)
    totals = loan_totals(payment, months, principal)
    return [
        row("Monthly payment", format_money(payment), True),
        row("Total interest", format_money(totals["total_interest"])),
        row("Total paid", format_money(totals["total_paid"])),
    ]


@calculator(
    "inflation", "Inflation Calculator", FIN,
    "Estimate future value or purchasing power after inflation.",
    [
        number("amount", "Amount today", 1000, unit="USD", min=0, step=0.01),
        number("rate", "Annual inflation rate", 3.2, unit="%", step=0.01),
        number("years", "Years", 10, min=0, step=0.1),
    ],
    added_at="2025-12-30",
)
def inflation(values: Values) -> List[ResultRow]:
    amount, rate, years = values["amount"], values["rate"], values["years"]
    if not all_finite(amount, rate, years) or amount < 0 or years < 0:
        return []
    factor = power(1 + rate / 100, years)
    purchasing = NAN if factor == 0 else amount / factor
    return [
        row("Future value", format_money(amount * factor), True),
        row("Purchasing power (today's dollars)", format_money(purchasing)),
        row("Inflation factor", format_number(factor)),
    ]


@calculator(
    "emergency-fund", "Emergency Fund Calculator", FIN,
    "Estimate emergency fund target based on monthly expenses.",
    [
        number("expenses", "Monthly expenses", 3200, unit="USD", min=0, step=10),
        number("months", "Months of coverage", 6, min=0, step=1),
        number("saved", "Current emergency savings", 2500, unit="USD", min=0, step=10),
    ],
    added_at="2025-12-30",
)
def emergency_fund(values: Values) -> List[ResultRow]:
    expenses, months, saved = values["expenses"], values["months"], values["saved"]
    if not all_finite(expenses, months, saved) or min(expenses, months, saved) < 0:
        return []
    target = expenses * months
    if expenses == 0:
        coverage = 0.0 if saved == 0 else INF
    else:
        coverage = saved / expenses
    return [
        row("Target emergency fund", format_money(target), True),
        row("Shortfall", format_money(max(0.0, target - saved))),
        row(
            "Current coverage",
            f"{format_number(coverage)} months" if is_finite(coverage) else INFINITY_SYMBOL,
        ),
    ]


@calculator(
    "retirement-savings", "Retirement Savings Calculator", FIN,
    "Estimate retirement balance from savings rate and returns.",
    [
        number("currentAge", "Current age", 30, min=0, step=1),
        number("retireAge", "Retirement age", 65, min=0, step=1),
        number("current", "Current savings", 15000, unit="USD", min=0, step=100),
        number("monthly", "Monthly contribution", 400, unit="USD", min=0, step=10),
        number("return", "Expected annual return", 7, unit="%", step=0.01),
    ],
    added_at="2025-12-30",
)
def retirement_savings(values: Values) -> List[ResultRow]:
    """
    Future value of current savings plus an ordinary annuity of monthly
    contributions until retirement.
    """
    current_age, retire_age = values["currentAge"], values["retireAge"]
    current, monthly, return_pct = values["current"], values["monthly"], values["return"]
    if not is_finite(current_age) or current_age < 0:
        return []
    if not is_finite(retire_age) or retire_age <= current_age:
        return []
    if not all_finite(current, monthly, return_pct) or current < 0 or monthly < 0:
        return []

    months = round_half_up((retire_age - current_age) * 12)
    r = (return_pct / 100) / 12
    growth = power(1 + r, months)
    fv_contrib = monthly * months if r == 0 else monthly * ((growth - 1) / r)
    fv = current * growth + fv_contrib
    invested = current + monthly * months
    return [
        row("Estimated balance at retirement", format_money(fv), True),
        row("Total contributed", format_money(invested)),
        row("Estimated growth", format_money(fv - invested)),
    ]
