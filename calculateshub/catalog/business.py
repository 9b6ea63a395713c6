"""
Business Calculators

Margins, taxes, break-even and working capital.
"""

from typing import List

from calculateshub.calculations.formatting import (
    format_int,
    format_money,
    format_number,
    format_percent_from_rate,
)
from calculateshub.calculations.primitives import (
    NAN,
    all_finite,
    all_non_negative,
    safe_div,
)
from calculateshub.catalog.models import Category, ResultRow, Values, number, row, select
from calculateshub.catalog.registry import calculator

BIZ = Category.BUSINESS

EXCLUSIVE = "exclusive"
INCLUSIVE = "inclusive"


def _tax_fields(rate_label: str, default_rate: float):
    return [
        number("amount", "Amount", 100, unit="USD", step=0.01),
        number("rate", rate_label, default_rate, unit="%", step=0.01),
        select("mode", "Mode", EXCLUSIVE, [
            (EXCLUSIVE, "Tax exclusive (add tax)"),
            (INCLUSIVE, "Tax inclusive (extract tax)"),
        ]),
    ]


def _tax(values: Values, tax_label: str, total_label: str, inclusive_tax_label: str) -> List[ResultRow]:
    """
    Add tax to a net amount, or extract it from a gross amount.

    In inclusive mode the amount already contains the tax, so the base is
    amount / (1 + rate).
    """
    amount = values["amount"]
    rate = values["rate"] / 100
    if not all_finite(amount, rate) or rate < 0:
        return []
    if values["mode"] == INCLUSIVE:
        base = amount / (1 + rate)
        return [
            row(inclusive_tax_label, format_money(amount - base), True),
            row("Base amount", format_money(base)),
            row("Total (inclusive)", format_money(amount)),
        ]
    tax = amount * rate
    return [
        row(total_label, format_money(amount + tax), True),
        row(tax_label, format_money(tax)),
    ]


@calculator(
    "break-even", "Break-Even Calculator", BIZ,
    "Estimate how many units you need to break even.",
    [
        number("fixedCosts", "Fixed costs", 2500, unit="USD", min=0, step=50),
        number("pricePerUnit", "Price per unit", 25, unit="USD", min=0, step=0.01),
        number("variableCostPerUnit", "Variable cost per unit", 8, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-19",
)
def break_even(values: Values) -> List[ResultRow]:
    contribution = values["pricePerUnit"] - values["variableCostPerUnit"]
    return [
        row("Break-even units", format_number(safe_div(values["fixedCosts"], contribution)), True),
        row("Contribution per unit", format_money(contribution)),
    ]


@calculator(
    "profit-margin", "Profit Margin Calculator", BIZ,
    "Compute margin and markup from revenue and costs.",
    [
        number("revenue", "Revenue", 10000, unit="USD", min=0, step=0.01),
        number("cost", "Cost", 7200, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-17",
)
def profit_margin(values: Values) -> List[ResultRow]:
    revenue, cost = values["revenue"], values["cost"]
    if not (revenue > 0) or not all_finite(cost):
        return []
    profit = revenue - cost
    return [
        row("Profit", format_money(profit), True),
        row("Margin", format_percent_from_rate(profit / revenue)),
        row("Markup", format_percent_from_rate(safe_div(profit, cost))),
    ]


@calculator(
    "cash-ratio", "Cash Ratio Calculator", BIZ,
    "Measure cash and equivalents against current liabilities.",
    [
        number("cash", "Cash", 12000, unit="USD", min=0, step=0.01),
        number("equivalents", "Cash equivalents", 8000, unit="USD", min=0, step=0.01),
        number("liabilities", "Current liabilities", 25000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-04",
)
def cash_ratio(values: Values) -> List[ResultRow]:
    cash, equivalents, liabilities = values["cash"], values["equivalents"], values["liabilities"]
    if not all_finite(cash, equivalents) or not (liabilities > 0):
        return []
    liquid = cash + equivalents
    return [
        row("Cash ratio", format_number(liquid / liabilities), True),
        row("Cash + equivalents", format_money(liquid)),
    ]


@calculator(
    "commission", "Commission Calculator", BIZ,
    "Calculate commission from sales and commission rate.",
    [
        number("sales", "Sales amount", 5000, unit="USD", min=0, step=0.01),
        number("rate", "Commission rate", 7.5, unit="%", min=0, step=0.01),
    ],
    added_at="2025-12-03",
)
def commission(values: Values) -> List[ResultRow]:
    sales, rate = values["sales"], values["rate"]
    if not all_finite(sales, rate):
        return []
    return [
        row("Commission", format_money(sales * (rate / 100)), True),
        row("Sales", format_money(sales)),
    ]


@calculator(
    "discount", "Discount Calculator", BIZ,
    "Find discounted price from original price and percent off.",
    [
        number("original", "Original price", 120, unit="USD", min=0, step=0.01),
        number("percent", "Discount", 15, unit="%", min=0, step=0.01),
    ],
    added_at="2025-12-02",
)
def discount(values: Values) -> List[ResultRow]:
    original, percent = values["original"], values["percent"]
    if not all_finite(original, percent):
        return []
    amount = original * (percent / 100)
    return [
        row("Final price", format_money(original - amount), True),
        row("Discount amount", format_money(amount)),
    ]


@calculator(
    "gst", "Goods and Services Tax (GST) Calculator", BIZ,
    "Add or extract GST from an amount.",
    _tax_fields("GST rate", 10),
    added_at="2025-12-01",
)
def gst(values: Values) -> List[ResultRow]:
    return _tax(values, "GST", "Total (with GST)", "Tax")


@calculator(
    "sales-tax", "Sales Tax Calculator", BIZ,
    "Add or extract sales tax from an amount.",
    _tax_fields("Sales tax rate", 8.25),
    added_at="2025-11-30",
)
def sales_tax(values: Values) -> List[ResultRow]:
    return _tax(values, "Tax", "Total (with tax)", "Tax")


@calculator(
    "vat", "Value-Added Tax (VAT) Calculator", BIZ,
    "Add or extract VAT from an amount.",
    _tax_fields("VAT rate", 20),
    added_at="2025-11-29",
)
def vat(values: Values) -> List[ResultRow]:
    return _tax(values, "VAT", "Total (with VAT)", "VAT")


@calculator(
    "gross-profit", "Gross Profit Calculator", BIZ,
    "Calculate gross profit and margin from revenue and COGS.",
    [
        number("revenue", "Revenue", 50000, unit="USD", min=0, step=0.01),
        number("cogs", "COGS", 28000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def gross_profit(values: Values) -> List[ResultRow]:
    revenue, cogs = values["revenue"], values["cogs"]
    if not all_non_negative(revenue, cogs):
        return []
    profit = revenue - cogs
    margin = 0.0 if revenue == 0 else profit / revenue
    return [
        row("Gross profit", format_money(profit), True),
        row("Gross margin", format_percent_from_rate(margin)),
        row("Revenue", format_money(revenue)),
    ]


@calculator(
    "net-profit", "Net Profit Calculator", BIZ,
    "Calculate net profit and net margin.",
    [
        number("revenue", "Revenue", 60000, unit="USD", min=0, step=0.01),
        number("expenses", "Total expenses", 42000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def net_profit(values: Values) -> List[ResultRow]:
    revenue, expenses = values["revenue"], values["expenses"]
    if not all_non_negative(revenue, expenses):
        return []
    profit = revenue - expenses
    margin = 0.0 if revenue == 0 else profit / revenue
    return [
        row("Net profit", format_money(profit), True),
        row("Net margin", format_percent_from_rate(margin)),
        row("Revenue", format_money(revenue)),
    ]


@calculator(
    "operating-margin", "Operating Margin Calculator", BIZ,
    "Measure operating margin from operating income and revenue.",
    [
        number("operatingIncome", "Operating income", 12000, unit="USD", min=0, step=0.01),
        number("revenue", "Revenue", 60000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def operating_margin(values: Values) -> List[ResultRow]:
    income, revenue = values["operatingIncome"], values["revenue"]
    if not all_non_negative(income, revenue):
        return []
    margin = 0.0 if revenue == 0 else income / revenue
    return [
        row("Operating margin", format_percent_from_rate(margin), True),
        row("Operating income", format_money(income)),
        row("Revenue", format_money(revenue)),
    ]


@calculator(
    "working-capital", "Working Capital Calculator", BIZ,
    "Compute working capital and current ratio.",
    [
        number("assets", "Current assets", 35000, unit="USD", min=0, step=0.01),
        number("liabilities", "Current liabilities", 21000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def working_capital(values: Values) -> List[ResultRow]:
    assets, liabilities = values["assets"], values["liabilities"]
    if not all_non_negative(assets, liabilities):
        return []
    ratio = NAN if liabilities == 0 else assets / liabilities
    return [
        row("Working capital", format_money(assets - liabilities), True),
        row("Current ratio", format_number(ratio)),
        row("Assets", format_money(assets)),
    ]


@calculator(
    "cost-per-unit", "Cost Per Unit Calculator", BIZ,
    "Compute cost per unit from total cost and units produced.",
    [
        number("totalCost", "Total cost", 12000, unit="USD", min=0, step=0.01),
        number("units", "Units", 300, min=1, step=1),
    ],
    added_at="2025-12-30",
)
def cost_per_unit(values: Values) -> List[ResultRow]:
    total, units = values["totalCost"], values["units"]
    if not all_non_negative(total) or not (units > 0):
        return []
    return [
        row("Cost per unit", format_money(total / units), True),
        row("Total cost", format_money(total)),
        row("Units", format_int(units)),
    ]


@calculator(
    "markup", "Markup Calculator", BIZ,
    "Calculate markup percent and profit per unit.",
    [
        number("cost", "Unit cost", 12, unit="USD", min=0, step=0.01),
        number("price", "Unit price", 20, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def markup(values: Values) -> List[ResultRow]:
    cost, price = values["cost"], values["price"]
    if not all_non_negative(cost, price):
        return []
    profit = price - cost
    return [
        row("Markup", format_percent_from_rate(safe_div(profit, cost)), True),
        row("Profit per unit", format_money(profit)),
        row("Price", format_money(price)),
    ]


@calculator(
    "revenue-growth", "Revenue Growth Rate Calculator", BIZ,
    "Measure period-over-period revenue growth.",
    [
        number("prior", "Prior period revenue", 50000, unit="USD", min=0, step=0.01),
        number("current", "Current period revenue", 57500, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def revenue_growth(values: Values) -> List[ResultRow]:
    prior, current = values["prior"], values["current"]
    if not all_non_negative(prior, current):
        return []
    return [
        row("Growth rate", format_percent_from_rate(safe_div(current - prior, prior)), True),
        row("Prior", format_money(prior)),
        row("Current", format_money(current)),
    ]


@calculator(
    "clv", "Customer Lifetime Value (CLV) Calculator", BIZ,
    "Estimate CLV from AOV, frequency, retention, and margin.",
    [
        number("aov", "Average order value", 60, unit="USD", min=0, step=0.01),
        number("freq", "Purchases per year", 3, min=0, step=0.01),
        number("years", "Retention (years)", 2, min=0, step=0.1),
        number("margin", "Gross margin", 45, unit="%", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def clv(values: Values) -> List[ResultRow]:
    """Lifetime gross profit: AOV x purchases per year x years retained x margin."""
    aov, freq, years, margin = values["aov"], values["freq"], values["years"], values["margin"]
    if not all_non_negative(aov, freq, years, margin):
        return []
    return [
        row("Estimated CLV", format_money(aov * freq * years * (margin / 100)), True),
        row("AOV", format_money(aov)),
        row("Purchases/year", format_number(freq)),
    ]
