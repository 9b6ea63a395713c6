"""
E-commerce Calculators

Store funnel, advertising, unit economics, inventory and subscription
metrics. Ratios whose denominator can legitimately be zero (ROAS, ACoS,
turnover, days of inventory) are reported as unbounded rather than
rejected.
"""

from typing import List

from calculateshub.calculations.formatting import (
    INFINITY_SYMBOL,
    format_int,
    format_money,
    format_number,
    format_percent_from_rate,
    format_ratio,
)
from calculateshub.calculations.primitives import (
    INF,
    all_non_negative,
    is_finite,
    ratio_or_infinity,
    round_half_up,
    safe_div,
)
from calculateshub.catalog.models import Category, ResultRow, Values, number, row
from calculateshub.catalog.registry import calculator

ECOM = Category.ECOMMERCE


def _count(value: float) -> str:
    return format_int(round_half_up(value))


@calculator(
    "ecom-conversion-rate", "E-commerce Conversion Rate Calculator", ECOM,
    "Calculate conversion rate from sessions and orders.",
    [
        number("sessions", "Sessions", 10000, min=0, step=1),
        number("orders", "Orders", 250, min=0, step=1),
    ],
    popular=True, added_at="2025-12-29",
)
def conversion_rate(values: Values) -> List[ResultRow]:
    sessions, orders = values["sessions"], values["orders"]
    if not (sessions > 0) or not all_non_negative(orders):
        return []
    return [
        row("Conversion rate", format_percent_from_rate(orders / sessions), True),
        row("Orders", format_number(orders)),
        row("Sessions", format_number(sessions)),
    ]


@calculator(
    "cart-abandonment-rate", "Cart Abandonment Rate Calculator", ECOM,
    "Calculate cart abandonment rate from checkouts started and orders.",
    [
        number("checkoutsStarted", "Checkouts started", 1200, min=0, step=1),
        number("orders", "Orders (completed)", 300, min=0, step=1),
    ],
    added_at="2025-12-29",
)
def cart_abandonment_rate(values: Values) -> List[ResultRow]:
    started, orders = values["checkoutsStarted"], values["orders"]
    if not (started > 0) or not all_non_negative(orders):
        return []
    completion = min(1.0, max(0.0, orders / started))
    return [
        row("Cart abandonment rate", format_percent_from_rate(1 - completion), True),
        row("Checkout completion rate", format_percent_from_rate(completion)),
        row("Checkouts started", format_number(started)),
    ]


@calculator(
    "average-order-value", "Average Order Value (AOV) Calculator", ECOM,
    "Calculate AOV from revenue and orders.",
    [
        number("revenue", "Revenue", 25000, unit="USD", min=0, step=0.01),
        number("orders", "Orders", 400, min=0, step=1),
    ],
    popular=True, added_at="2025-12-29",
)
def average_order_value(values: Values) -> List[ResultRow]:
    revenue, orders = values["revenue"], values["orders"]
    if not all_non_negative(revenue) or not (orders > 0):
        return []
    return [
        row("Average order value", format_money(revenue / orders), True),
        row("Revenue", format_money(revenue)),
        row("Orders", format_number(orders)),
    ]


@calculator(
    "customer-acquisition-cost", "Customer Acquisition Cost (CAC) Calculator", ECOM,
    "Calculate CAC from marketing spend and new customers.",
    [
        number("spend", "Marketing spend", 5000, unit="USD", min=0, step=0.01),
        number("newCustomers", "New customers", 200, min=0, step=1),
    ],
    added_at="2025-12-29",
)
def customer_acquisition_cost(values: Values) -> List[ResultRow]:
    spend, customers = values["spend"], values["newCustomers"]
    if not all_non_negative(spend) or not (customers > 0):
        return []
    return [
        row("CAC", format_money(spend / customers), True),
        row("Spend", format_money(spend)),
        row("New customers", format_number(customers)),
    ]


@calculator(
    "return-on-ad-spend", "Return on Ad Spend (ROAS) Calculator", ECOM,
    "Calculate ROAS from ad revenue and ad spend.",
    [
        number("adRevenue", "Revenue from ads", 18000, unit="USD", min=0, step=0.01),
        number("adSpend", "Ad spend", 6000, unit="USD", min=0, step=0.01),
    ],
    popular=True, added_at="2025-12-29",
)
def return_on_ad_spend(values: Values) -> List[ResultRow]:
    revenue, spend = values["adRevenue"], values["adSpend"]
    if not all_non_negative(revenue, spend):
        return []
    return [
        row("ROAS", format_ratio(ratio_or_infinity(revenue, spend), suffix="x"), True),
        row("Revenue", format_money(revenue)),
        row("Spend", format_money(spend)),
    ]


@calculator(
    "acos", "Advertising Cost of Sales (ACoS) Calculator", ECOM,
    "Calculate ACoS from ad spend and ad revenue.",
    [
        number("adSpend", "Ad spend", 6000, unit="USD", min=0, step=0.01),
        number("adRevenue", "Revenue from ads", 18000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-29",
)
def acos(values: Values) -> List[ResultRow]:
    spend, revenue = values["adSpend"], values["adRevenue"]
    if not all_non_negative(spend, revenue):
        return []
    ratio = ratio_or_infinity(spend, revenue)
    return [
        row("ACoS", format_percent_from_rate(ratio) if is_finite(ratio) else INFINITY_SYMBOL, True),
        row("Spend", format_money(spend)),
        row("Revenue", format_money(revenue)),
    ]


@calculator(
    "profit-per-order", "Profit Per Order Calculator", ECOM,
    "Estimate profit per order after costs and fees.",
    [
        number("salePrice", "Sale price", 49.99, unit="USD", min=0, step=0.01),
        number("cogs", "Product cost (COGS)", 18, unit="USD", min=0, step=0.01),
        number("shipping", "Shipping cost", 6, unit="USD", min=0, step=0.01),
        number("fees", "Marketplace/payment fees", 4.25, unit="USD", min=0, step=0.01),
        number("adCost", "Ad cost per order", 7.5, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-29",
)
def profit_per_order(values: Values) -> List[ResultRow]:
    sale = values["salePrice"]
    costs = (values["cogs"], values["shipping"], values["fees"], values["adCost"])
    if not all_non_negative(sale, *costs):
        return []
    total_costs = sum(costs)
    profit = sale - total_costs
    margin = 0.0 if sale == 0 else profit / sale
    return [
        row("Profit per order", format_money(profit), True),
        row("Profit margin", format_percent_from_rate(margin)),
        row("Total costs", format_money(total_costs)),
    ]


@calculator(
    "break-even-roas", "Break-Even ROAS Calculator", ECOM,
    "Estimate the ROAS needed to break even.",
    [number("grossMargin", "Gross margin", 35, unit="%", min=0, max=100, step=0.1)],
    added_at="2025-12-29",
)
def break_even_roas(values: Values) -> List[ResultRow]:
    margin_pct = values["grossMargin"]
    if not is_finite(margin_pct) or margin_pct <= 0:
        return []
    margin = margin_pct / 100
    return [
        row("Break-even ROAS", format_number(1 / margin) + "x", True),
        row("Gross margin", format_percent_from_rate(margin)),
    ]


@calculator(
    "landed-cost", "Landed Cost Calculator", ECOM,
    "Calculate total landed cost per unit.",
    [
        number("productCost", "Product cost", 8, unit="USD", min=0, step=0.01),
        number("shipping", "Shipping", 1.25, unit="USD", min=0, step=0.01),
        number("duty", "Duty", 0.4, unit="USD", min=0, step=0.01),
        number("other", "Other costs", 0.35, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-29",
)
def landed_cost(values: Values) -> List[ResultRow]:
    product, shipping, duty, other = (
        values["productCost"], values["shipping"], values["duty"], values["other"]
    )
    if not all_non_negative(product, shipping, duty, other):
        return []
    return [
        row("Landed cost", format_money(product + shipping + duty + other), True),
        row("Product", format_money(product)),
        row("Shipping", format_money(shipping)),
    ]


@calculator(
    "price-for-margin", "Price for Target Margin Calculator", ECOM,
    "Calculate price needed to hit a target margin.",
    [
        number("cost", "Unit cost", 18, unit="USD", min=0, step=0.01),
        number("targetMargin", "Target margin", 35, unit="%", min=0, max=99.9, step=0.1),
    ],
    added_at="2025-12-29",
)
def price_for_margin(values: Values) -> List[ResultRow]:
    """Price at which (price - cost) / price equals the target margin."""
    cost, margin_pct = values["cost"], values["targetMargin"]
    if not all_non_negative(cost, margin_pct) or margin_pct >= 100:
        return []
    keep = 1 - margin_pct / 100
    price = INF if keep == 0 else cost / keep
    profit = price - cost if is_finite(price) else INF
    return [
        row("Required price", format_money(price) if is_finite(price) else INFINITY_SYMBOL, True),
        row("Profit per unit", format_money(profit) if is_finite(profit) else INFINITY_SYMBOL),
    ]


@calculator(
    "marketplace-fee", "Marketplace Fee Calculator", ECOM,
    "Estimate marketplace fees and net payout.",
    [
        number("salePrice", "Sale price", 49.99, unit="USD", min=0, step=0.01),
        number("feeRate", "Fee rate", 15, unit="%", min=0, step=0.1),
    ],
    added_at="2025-12-29",
)
def marketplace_fee(values: Values) -> List[ResultRow]:
    sale, rate = values["salePrice"], values["feeRate"]
    if not all_non_negative(sale, rate):
        return []
    fee = sale * (rate / 100)
    return [
        row("Fee", format_money(fee), True),
        row("Net payout", format_money(sale - fee)),
    ]


@calculator(
    "payment-processing-fee", "Payment Processing Fee Calculator", ECOM,
    "Estimate payment processing fees for an order.",
    [
        number("amount", "Order amount", 49.99, unit="USD", min=0, step=0.01),
        number("percentFee", "Percent fee", 2.9, unit="%", min=0, step=0.01),
        number("fixedFee", "Fixed fee", 0.3, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-29",
)
def payment_processing_fee(values: Values) -> List[ResultRow]:
    amount, pct, fixed = values["amount"], values["percentFee"], values["fixedFee"]
    if not all_non_negative(amount, pct, fixed):
        return []
    fee = amount * (pct / 100) + fixed
    return [
        row("Processing fee", format_money(fee), True),
        row("Net received", format_money(amount - fee)),
    ]


@calculator(
    "inventory-turnover", "Inventory Turnover Calculator", ECOM,
    "Calculate inventory turnover from COGS and average inventory.",
    [
        number("cogs", "COGS (period)", 120000, unit="USD", min=0, step=0.01),
        number("avgInventory", "Average inventory", 30000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-29",
)
def inventory_turnover(values: Values) -> List[ResultRow]:
    cogs, inventory = values["cogs"], values["avgInventory"]
    if not all_non_negative(cogs, inventory):
        return []
    return [
        row("Inventory turnover", format_ratio(ratio_or_infinity(cogs, inventory)), True),
        row("COGS", format_money(cogs)),
        row("Avg inventory", format_money(inventory)),
    ]


@calculator(
    "reorder-point", "Reorder Point Calculator", ECOM,
    "Estimate reorder point using daily sales and lead time.",
    [
        number("dailySales", "Average daily sales (units)", 12, min=0, step=0.1),
        number("leadTime", "Lead time (days)", 14, min=0, step=1),
        number("safetyStock", "Safety stock (units)", 50, min=0, step=1),
    ],
    added_at="2025-12-29",
)
def reorder_point(values: Values) -> List[ResultRow]:
    daily, lead, safety = values["dailySales"], values["leadTime"], values["safetyStock"]
    if not all_non_negative(daily, lead, safety):
        return []
    demand = daily * lead
    return [
        row("Reorder point", format_number(demand + safety), True),
        row("Lead-time demand", format_number(demand)),
    ]


@calculator(
    "days-of-inventory", "Days of Inventory Calculator", ECOM,
    "Estimate days of inventory remaining.",
    [
        number("inventory", "Inventory on hand (units)", 600, min=0, step=1),
        number("dailySales", "Average daily sales (units)", 12, min=0, step=0.1),
    ],
    added_at="2025-12-29",
)
def days_of_inventory(values: Values) -> List[ResultRow]:
    inventory, daily = values["inventory"], values["dailySales"]
    if not all_non_negative(inventory, daily):
        return []
    return [
        row("Days of inventory", format_ratio(ratio_or_infinity(inventory, daily)), True),
        row("Inventory", format_number(inventory)),
        row("Daily sales", format_number(daily)),
    ]


def _roi_rows(revenue: float, cost: float) -> List[ResultRow]:
    return [
        row("ROI", format_percent_from_rate(safe_div(revenue - cost, cost)), True),
        row("Revenue", format_money(revenue)),
        row("Cost", format_money(cost)),
    ]


@calculator(
    "email-roi", "Email Marketing ROI Calculator", ECOM,
    "Compute ROI from campaign revenue and cost.",
    [
        number("revenue", "Campaign revenue", 8000, unit="USD", min=0, step=0.01),
        number("cost", "Campaign cost", 2000, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def email_roi(values: Values) -> List[ResultRow]:
    revenue, cost = values["revenue"], values["cost"]
    if not all_non_negative(revenue, cost):
        return []
    return _roi_rows(revenue, cost)


@calculator(
    "ctr", "Click-Through Rate (CTR) Calculator", ECOM,
    "Calculate CTR from clicks and impressions.",
    [
        number("clicks", "Clicks", 420, min=0, step=1),
        number("impressions", "Impressions", 28000, min=0, step=1),
    ],
    added_at="2025-12-30",
)
def ctr(values: Values) -> List[ResultRow]:
    clicks, impressions = values["clicks"], values["impressions"]
    if not all_non_negative(clicks) or not (impressions > 0):
        return []
    return [
        row("CTR", format_percent_from_rate(clicks / impressions), True),
        row("Clicks", format_int(clicks)),
        row("Impressions", format_int(impressions)),
    ]


@calculator(
    "cpc", "Cost Per Click (CPC) Calculator", ECOM,
    "Compute CPC from ad spend and clicks.",
    [
        number("cost", "Ad spend", 1200, unit="USD", min=0, step=0.01),
        number("clicks", "Clicks", 2400, min=0, step=1),
    ],
    added_at="2025-12-30",
)
def cpc(values: Values) -> List[ResultRow]:
    cost, clicks = values["cost"], values["clicks"]
    if not all_non_negative(cost) or not (clicks > 0):
        return []
    return [
        row("CPC", format_money(cost / clicks), True),
        row("Spend", format_money(cost)),
        row("Clicks", format_int(clicks)),
    ]


@calculator(
    "cpm", "Cost Per Mille (CPM) Calculator", ECOM,
    "Compute CPM from ad spend and impressions.",
    [
        number("cost", "Ad spend", 800, unit="USD", min=0, step=0.01),
        number("impressions", "Impressions", 160000, min=0, step=1),
    ],
    added_at="2025-12-30",
)
def cpm(values: Values) -> List[ResultRow]:
    cost, impressions = values["cost"], values["impressions"]
    if not all_non_negative(cost) or not (impressions > 0):
        return []
    return [
        row("CPM", format_money(cost / impressions * 1000), True),
        row("Spend", format_money(cost)),
        row("Impressions", format_int(impressions)),
    ]


@calculator(
    "retention-rate", "Customer Retention Rate Calculator", ECOM,
    "Estimate retention from period start, end, and new customers.",
    [
        number("start", "Start customers", 5000, min=0, step=1),
        number("end", "End customers", 5200, min=0, step=1),
        number("new", "New customers", 400, min=0, step=1),
    ],
    added_at="2025-12-30",
)
def retention_rate(values: Values) -> List[ResultRow]:
    """Retention = (end customers - new customers) / start customers."""
    start, end, new = values["start"], values["end"], values["new"]
    if not (start > 0) or not all_non_negative(end, new):
        return []
    retained = end - new
    return [
        row("Retention rate", format_percent_from_rate(retained / start), True),
        row("Retained customers", format_int(max(0.0, round_half_up(retained)))),
        row("Start customers", _count(start)),
    ]


@calculator(
    "refund-rate", "Refund Rate Calculator", ECOM,
    "Compute refund percentage from refunds and orders.",
    [
        number("refunds", "Refunds", 42, min=0, step=1),
        number("orders", "Total orders", 5200, min=0, step=1),
    ],
    added_at="2025-12-30",
)
def refund_rate(values: Values) -> List[ResultRow]:
    refunds, orders = values["refunds"], values["orders"]
    if not all_non_negative(refunds) or not (orders > 0):
        return []
    return [
        row("Refund rate", format_percent_from_rate(refunds / orders), True),
        row("Refunds", _count(refunds)),
        row("Orders", _count(orders)),
    ]


@calculator(
    "churn-rate", "Churn Rate Calculator", ECOM,
    "Compute churn from customers lost and starting customers.",
    [
        number("lost", "Customers lost", 120, min=0, step=1),
        number("start", "Start customers", 5000, min=0, step=1),
    ],
    added_at="2025-12-30",
)
def churn_rate(values: Values) -> List[ResultRow]:
    lost, start = values["lost"], values["start"]
    if not all_non_negative(lost) or not (start > 0):
        return []
    return [
        row("Churn rate", format_percent_from_rate(lost / start), True),
        row("Lost customers", _count(lost)),
        row("Start customers", _count(start)),
    ]


@calculator(
    "subscription-mrr", "Subscription MRR Calculator", ECOM,
    "Compute monthly recurring revenue from subscribers and price.",
    [
        number("subs", "Subscribers", 1200, min=0, step=1),
        number("price", "Price per month", 12, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def subscription_mrr(values: Values) -> List[ResultRow]:
    subscribers, price = values["subs"], values["price"]
    if not all_non_negative(subscribers, price):
        return []
    return [
        row("MRR", format_money(subscribers * price), True),
        row("Subscribers", _count(subscribers)),
        row("Price", format_money(price)),
    ]


@calculator(
    "subscription-arpu", "Subscription ARPU Calculator", ECOM,
    "Compute ARPU from revenue and active users.",
    [
        number("revenue", "Monthly revenue", 24000, unit="USD", min=0, step=0.01),
        number("users", "Active users", 3000, min=0, step=1),
    ],
    added_at="2025-12-30",
)
def subscription_arpu(values: Values) -> List[ResultRow]:
    revenue, users = values["revenue"], values["users"]
    if not all_non_negative(revenue) or not (users > 0):
        return []
    return [
        row("ARPU", format_money(revenue / users), True),
        row("Revenue", format_money(revenue)),
        row("Users", _count(users)),
    ]


@calculator(
    "influencer-roi", "Influencer ROI Calculator", ECOM,
    "Compute ROI of influencer campaign from revenue and cost.",
    [
        number("revenue", "Attributed revenue", 5000, unit="USD", min=0, step=0.01),
        number("cost", "Influencer cost", 1500, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def influencer_roi(values: Values) -> List[ResultRow]:
    revenue, cost = values["revenue"], values["cost"]
    if not all_non_negative(revenue, cost):
        return []
    return _roi_rows(revenue, cost)
