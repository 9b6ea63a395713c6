"""
Miscellaneous Calculators

Everyday tools: tips, dates and ages, GPA, random values, health metrics
and a debt-to-income check.
"""

from datetime import date
from typing import Dict, List

from calculateshub.calculations.dates import (
    ZONE_OFFSETS,
    calendar_walk_diff,
    diff_ymd,
    long_date,
    shift_time_zone,
    weekday_name,
)
from calculateshub.calculations.formatting import (
    format_int,
    format_money,
    format_number,
    format_percent_from_rate,
)
from calculateshub.calculations.primitives import (
    all_finite,
    clamp,
    is_finite,
    power,
    round_half_up,
    truncate,
)
from calculateshub.calculations.randomness import (
    make_password,
    random_float01,
    random_int_inclusive,
)
from calculateshub.calculations.statistics import weighted_average
from calculateshub.calculations.units import INCH_CM, POUND_KG
from calculateshub.catalog.models import (
    Category,
    ResultRow,
    Values,
    date_input,
    number,
    row,
    select,
)
from calculateshub.catalog.registry import calculator

MISC = Category.MISCELLANEOUS

YES_NO = [("yes", "Yes"), ("no", "No")]

GRADE_POINTS = [
    ("4", "A (4.0)"), ("3.7", "A- (3.7)"), ("3.3", "B+ (3.3)"),
    ("3", "B (3.0)"), ("2.7", "B- (2.7)"), ("2.3", "C+ (2.3)"),
    ("2", "C (2.0)"), ("1.7", "C- (1.7)"), ("1.3", "D+ (1.3)"),
    ("1", "D (1.0)"), ("0", "F (0.0)"),
]
GPA_COURSES = 6

ZONES = [
    ("PST", "Pacific (PST)"),
    ("MST", "Mountain (MST)"),
    ("CST", "Central (CST)"),
    ("EST", "Eastern (EST)"),
    ("AST", "Atlantic (AST)"),
    ("NST", "Newfoundland (NST)"),
    ("AKST", "Alaska (AKST)"),
    ("HST", "Hawaii (HST)"),
]

# Upper bounds (exclusive) for the BMI categories
BMI_CATEGORIES = [(18.5, "Underweight"), (25, "Normal"), (30, "Overweight")]

# Debt-to-income thresholds (exclusive)
DTI_LIKELY = 0.36
DTI_BORDERLINE = 0.43


@calculator(
    "tip", "Tip Calculator", MISC,
    "Split a bill with tip across multiple people.",
    [
        number("bill", "Bill amount", 74.50, unit="USD", min=0, step=0.01),
        number("tipPercent", "Tip percent", 18, unit="%", min=0, step=0.1),
        number("people", "People", 2, min=1, step=1),
    ],
    added_at="2025-12-10",
)
def tip(values: Values) -> List[ResultRow]:
    bill, tip_percent, people = values["bill"], values["tipPercent"], values["people"]
    if not all_finite(bill, tip_percent) or not (people >= 1):
        return []
    tip_amount = bill * (tip_percent / 100)
    total = bill + tip_amount
    return [
        row("Total", format_money(total), True),
        row("Tip", format_money(tip_amount)),
        row("Per person", format_money(total / people)),
    ]


@calculator(
    "age", "Age Calculator", MISC,
    "Calculate age from a birth date.",
    [
        date_input("birth", "Birth date", "1995-01-01"),
        date_input("asOf", "As of date"),
    ],
    added_at="2025-12-25",
)
def age(values: Values) -> List[ResultRow]:
    """Age on the "as of" date, or today when that date is missing."""
    diff = diff_ymd(values["birth"], values["asOf"] or date.today())
    if diff is None:
        return []
    return [
        row("Age", f"{diff.years} years, {diff.months} months, {diff.days} days", True),
        row("Total days", format_int(diff.total_days)),
    ]


@calculator(
    "day-of-week", "Day of the Week Calculator", MISC,
    "Find the weekday for a given date.",
    [date_input("date", "Date")],
    added_at="2025-12-25",
)
def day_of_week(values: Values) -> List[ResultRow]:
    day = values["date"]
    if day is None:
        return []
    return [
        row("Day", weekday_name(day), True),
        row("Date", long_date(day)),
    ]


def _gpa_fields():
    fields = []
    for i in range(1, GPA_COURSES + 1):
        fields.append(select(f"g{i}", f"Course {i} grade", "4", GRADE_POINTS))
        fields.append(number(f"c{i}", f"Course {i} credits", 3 if i <= 3 else 0, min=0, step=0.5))
    return fields


@calculator(
    "gpa", "Grade Point Average (GPA) Calculator", MISC,
    "Estimate GPA from course grades and credits.",
    _gpa_fields(),
    added_at="2025-12-25",
)
def gpa(values: Values) -> List[ResultRow]:
    """Credit-weighted average of grade points; courses without credits are skipped."""
    pairs = [
        (float(values[f"g{i}"]), values[f"c{i}"])
        for i in range(1, GPA_COURSES + 1)
    ]
    result = weighted_average(pairs)
    if result is None:
        return []
    average, credits = result
    return [
        row("GPA", format_number(average), True),
        row("Total credits", format_number(credits)),
    ]


@calculator(
    "password-generator", "Password Generator", MISC,
    "Generate a strong password based on your preferences.",
    [
        number("length", "Password length", 16, min=4, max=64, step=1),
        select("lower", "Include lowercase", "yes", YES_NO),
        select("upper", "Include uppercase", "yes", YES_NO),
        select("numbers", "Include numbers", "yes", YES_NO),
        select("symbols", "Include symbols", "no", YES_NO),
        select("excludeAmbiguous", "Exclude ambiguous (Il1O0)", "yes", YES_NO),
    ],
    added_at="2025-12-25",
)
def password_generator(values: Values) -> List[ResultRow]:
    password = make_password(
        values["length"],
        lower=values["lower"] == "yes",
        upper=values["upper"] == "yes",
        numbers=values["numbers"] == "yes",
        symbols=values["symbols"] == "yes",
        exclude_ambiguous=values["excludeAmbiguous"] == "yes",
    )
    return [
        row("Password", password, True),
        row("Length", format_int(len(password))),
    ]


def _random_visibility(values: Values) -> Dict[str, bool]:
    return {"decimals": values.get("mode") == "decimal"}


@calculator(
    "random-number", "Random Number Generator", MISC,
    "Generate a random integer or decimal between two numbers.",
    [
        number("min", "Minimum", 1, step=1),
        number("max", "Maximum", 100, step=1),
        select("mode", "Mode", "integer", [("integer", "Integer"), ("decimal", "Decimal")]),
        number("decimals", "Decimal places", 2, min=0, max=10, step=1),
    ],
    added_at="2025-12-25", visibility=_random_visibility,
)
def random_number(values: Values) -> List[ResultRow]:
    """
    Draw a random value between min and max (in either order).

    Decimal mode rounds a uniform draw to 0-10 decimal places; integer mode
    draws uniformly from the whole numbers in the range.
    """
    minimum, maximum = values["min"], values["max"]
    if not all_finite(minimum, maximum):
        return []
    lo, hi = min(minimum, maximum), max(minimum, maximum)

    if values["mode"] == "decimal":
        factor = power(10, clamp(truncate(values["decimals"]), 0, 10))
        draw = lo + random_float01() * (hi - lo)
        return [row("Random number", format_number(round_half_up(draw * factor) / factor), True)]

    drawn = random_int_inclusive(lo, hi)
    if drawn is None:
        return []
    return [row("Random integer", format_int(drawn), True)]


@calculator(
    "date-difference", "Date Difference Calculator", MISC,
    "Compute time between two dates in years, months, and days.",
    [
        date_input("start", "Start date"),
        date_input("end", "End date"),
    ],
    added_at="2025-12-30",
)
def date_difference(values: Values) -> List[ResultRow]:
    start, end = values["start"], values["end"]
    if start is None or end is None:
        return []
    diff = calendar_walk_diff(start, end)
    return [
        row(
            "Difference",
            f"{format_int(diff.years)}y {format_int(diff.months)}m {format_int(diff.days)}d",
            True,
        ),
        row("Total days", format_int(diff.total_days)),
    ]


@calculator(
    "time-zone-converter", "Time Zone Converter (US & Canada)", MISC,
    "Convert local time between common US/Canada zones.",
    [
        date_input("date", "Date"),
        number("hour", "Hour (0–23)", 9, min=0, max=23, step=1),
        number("minute", "Minute", 30, min=0, max=59, step=1),
        select("from", "From zone", "EST", ZONES),
        select("to", "To zone", "PST", ZONES),
    ],
    added_at="2025-12-30",
)
def time_zone_converter(values: Values) -> List[ResultRow]:
    """Fixed standard-time offsets; daylight saving time is not applied."""
    hour, minute = truncate(values["hour"]), truncate(values["minute"])
    if not is_finite(hour) or not 0 <= hour <= 23:
        return []
    if not is_finite(minute) or not 0 <= minute <= 59:
        return []
    source, target = values["from"], values["to"]
    if source not in ZONE_OFFSETS or target not in ZONE_OFFSETS:
        return []

    day = values["date"] or date.today()
    shifted = shift_time_zone(day, int(hour), int(minute), source, target)
    if shifted is None:
        return []
    return [
        row("Converted time", f"{shifted:%Y-%m-%d %H:%M} {target}", True),
        row("Original", f"{day.isoformat()} {int(hour):02d}:{int(minute):02d} {source}"),
    ]


@calculator(
    "bmi", "BMI Calculator", MISC,
    "Compute Body Mass Index in metric or imperial units.",
    [
        select("unit", "Units", "metric", [
            ("metric", "Metric (kg, cm)"),
            ("imperial", "Imperial (lb, in)"),
        ]),
        number("weight", "Weight", 70, min=0, step=0.1),
        number("height", "Height", 175, min=0, step=0.1),
    ],
    added_at="2025-12-30",
)
def bmi(values: Values) -> List[ResultRow]:
    weight, height = values["weight"], values["height"]
    if not is_finite(weight) or weight <= 0 or not is_finite(height) or height <= 0:
        return []
    if values["unit"] == "imperial":
        weight *= POUND_KG
        height *= INCH_CM
    meters = height / 100
    index = weight / (meters * meters)

    category = "Obese"
    for bound, name in BMI_CATEGORIES:
        if index < bound:
            category = name
            break
    return [
        row("BMI", format_number(index), True),
        row("Category", category),
    ]


@calculator(
    "bmr", "BMR Calculator", MISC,
    "Estimate Basal Metabolic Rate (Mifflin–St Jeor).",
    [
        select("gender", "Gender", "male", [("male", "Male"), ("female", "Female")]),
        number("age", "Age", 30, min=0, step=1),
        number("weight", "Weight (kg)", 70, min=0, step=0.1),
        number("height", "Height (cm)", 175, min=0, step=0.1),
    ],
    added_at="2025-12-30",
)
def bmr(values: Values) -> List[ResultRow]:
    """Mifflin-St Jeor: 10w + 6.25h - 5a, plus 5 for men or minus 161 for women."""
    years, weight, height = values["age"], values["weight"], values["height"]
    if not all_finite(years, weight, height) or min(years, weight, height) <= 0:
        return []
    male = values["gender"] == "male"
    rate = 10 * weight + 6.25 * height - 5 * years + (5 if male else -161)
    return [
        row("BMR", format_number(rate), True),
        row("Gender", "Male" if male else "Female"),
    ]


@calculator(
    "loan-eligibility", "Loan Eligibility Calculator", MISC,
    "Estimate DTI ratio and simple eligibility flag.",
    [
        number("income", "Monthly income", 4500, unit="USD", min=0, step=0.01),
        number("debts", "Current monthly debts", 800, unit="USD", min=0, step=0.01),
        number("payment", "Proposed loan payment", 900, unit="USD", min=0, step=0.01),
    ],
    added_at="2025-12-30",
)
def loan_eligibility(values: Values) -> List[ResultRow]:
    income, debts, payment = values["income"], values["debts"], values["payment"]
    if not is_finite(income) or income <= 0:
        return []
    if not all_finite(debts, payment) or debts < 0 or payment < 0:
        return []
    dti = (debts + payment) / income
    if dti < DTI_LIKELY:
        verdict = "Likely eligible"
    elif dti < DTI_BORDERLINE:
        verdict = "Borderline"
    else:
        verdict = "High DTI"
    return [
        row("DTI", format_percent_from_rate(dti), True),
        row("Verdict", verdict),
    ]
