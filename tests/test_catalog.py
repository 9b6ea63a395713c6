"""
Tests for the calculator catalog: registry, input parsing and calculators.
"""

import logging
from datetime import date

import pytest

from calculateshub.catalog import registry
from calculateshub.catalog.inputs import default_values, parse_inputs
from calculateshub.catalog.models import Category, number, select
from calculateshub.catalog.registry import CalculatorRegistry, calculator, slugify


def results(calculator_id, **values):
    """Compute and return {label: value}."""
    return {r.label: r.value for r in registry.compute(calculator_id, values)}


class TestRegistry:
    """Test catalog registration and lookup."""

    def test_catalog_size(self):
        """Test that every calculator is registered."""
        assert len(registry) == 101

    def test_slugs_unique(self):
        """Test that slugs do not collide."""
        slugs = [d.slug for d in registry]
        assert len(slugs) == len(set(slugs))

    def test_slugify(self):
        """Test slug generation from names."""
        assert slugify("Mean, Median, Mode Calculator") == "mean-median-mode-calculator"
        assert slugify("Currency Converter (USD ↔ CAD)") == "currency-converter-usd-cad"
        assert slugify("Return on Ad Spend's") == "return-on-ad-spends"

    def test_lookup_by_slug(self):
        """Test lookup by URL slug."""
        assert registry.get_by_slug("loan-payment-calculator").id == "loan"

    def test_categories_in_catalog_order(self):
        """Test category order."""
        assert registry.categories() == [c.value for c in Category]

    def test_by_category(self):
        """Test filtering by category name."""
        math_ids = [d.id for d in registry.by_category("Math")]
        assert "prime-checker" in math_ids
        assert all(d.category == Category.MATH for d in registry.by_category("Math"))

    def test_related_prefers_same_category(self):
        """Test that related tools come from the same category first."""
        related = registry.related("loan", 4)
        assert len(related) == 4
        assert all(d.category == Category.FINANCIAL for d in related)
        assert "loan" not in [d.id for d in related]

    def test_related_unknown(self):
        """Test related tools for an unknown id."""
        assert registry.related("nope") == []

    def test_duplicate_id_rejected(self):
        """Test that registering an id twice fails."""
        local = CalculatorRegistry()
        fields = [number("x", "X", 1)]

        @calculator("dup", "Dup", Category.MATH, "", fields, target=local)
        def first(values):
            return []

        with pytest.raises(ValueError):
            @calculator("dup", "Dup", Category.MATH, "", fields, target=local)
            def second(values):
                return []

    def test_repeated_names_get_numbered_slugs(self):
        """Test numbered slugs for repeated names."""
        local = CalculatorRegistry()
        for calculator_id in ("a", "b"):
            calculator(calculator_id, "Same Name", Category.MATH, "", [], target=local)(
                lambda values: []
            )
        assert [d.slug for d in local] == ["same-name", "same-name-2"]

    def test_compute_unknown_id(self):
        """Test computing an unknown calculator."""
        assert registry.compute("nope", {}) is None

    def test_compute_failure_is_logged(self, caplog):
        """Test that a failing calculator logs and returns no rows."""
        local = CalculatorRegistry()

        @calculator("boom", "Boom", Category.MATH, "", [], target=local)
        def boom(values):
            raise RuntimeError("broken")

        with caplog.at_level(logging.ERROR):
            assert local.compute("boom", {}) == []
        assert "boom" in caplog.text

    @pytest.mark.parametrize("definition", registry.all(), ids=lambda d: d.id)
    def test_defaults_produce_results(self, definition):
        """Test that every calculator computes with its defaults."""
        rows = registry.compute(definition.id, None)
        assert rows
        assert all(isinstance(r.value, str) for r in rows)


class TestInputs:
    """Test raw input parsing."""

    def test_invalid_select_falls_back_to_default(self):
        """Test that unknown select values use the default."""
        definition = registry.get("temperature")
        assert parse_inputs(definition, {"from": "X"})["from"] == "C"

    def test_number_parsing(self):
        """Test number parsing, NaN and defaults."""
        parsed = parse_inputs(registry.get("loan"), {"principal": "abc", "termMonths": "36"})
        assert parsed["termMonths"] == 36
        assert parsed["principal"] != parsed["principal"]  # NaN
        assert parsed["interestRate"] == 8.9

    def test_blank_dates_default(self):
        """Test today and start-plus-a-week date defaults."""
        defaults = default_values(registry.get("date-difference"), today=date(2025, 1, 1))
        assert defaults == {"start": "2025-01-01", "end": "2025-01-08"}

    def test_field_default_validation(self):
        """Test that invalid field defaults are rejected."""
        with pytest.raises(ValueError):
            number("x", "X", -1, min=0)
        with pytest.raises(ValueError):
            select("s", "S", "c", [("a", "A"), ("b", "B")])

    def test_field_visibility(self):
        """Test field visibility for mode selects."""
        assert registry.visibility("random-number", {})["decimals"] is False
        assert registry.visibility("random-number", {"mode": "decimal"})["decimals"] is True
        shown = registry.visibility("roman-numeral", {"mode": "toNumber"})
        assert shown == {"mode": True, "number": False, "roman": True}


class TestFinancialCalculators:
    """Test financial calculators."""

    def test_loan_default(self):
        """Test the loan calculator's default payment."""
        assert results("loan")["Monthly payment"] == "$310.65"

    def test_loan_invalid_principal(self):
        """Test that a bad principal shows a dash."""
        assert results("loan", principal="abc")["Monthly payment"] == "—"

    def test_loan_schedule(self):
        """Test schedules for loan and non-loan calculators."""
        rows = registry.schedule_for("loan", {"principal": 1200, "interestRate": 0, "termMonths": 12})
        assert len(rows) == 12
        assert rows[0].payment == 100
        assert registry.schedule_for("percentage", {}) == []

    def test_schedule_limit(self):
        """Test that a limit stops schedule generation early."""
        values = {"principal": 1000, "interestRate": 0, "termMonths": 3000000}
        rows = registry.schedule_for("loan", values, 10)
        assert [r.month for r in rows] == list(range(1, 11))
        assert registry.loan_terms("loan", values) == (1000, 0, 3000000)
        assert registry.loan_terms("tip", values) is None

    def test_debt_strategies(self):
        """Test that both debt calculators produce results."""
        avalanche = registry.compute("debt-avalanche", None)
        snowball = registry.compute("debt-snowball", None)
        assert avalanche and snowball


class TestMathCalculators:
    """Test math calculators."""

    def test_fraction_simplifier_default(self):
        """Test the default fraction."""
        assert results("fraction-simplifier")["Simplified"] == "3/4"

    def test_fraction_simplifier_invalid(self):
        """Test a zero denominator."""
        assert registry.compute("fraction-simplifier", {"fraction": "3/0"}) == []

    def test_fraction_simplifier_huge(self):
        """Test a numerator too large for a float."""
        rows = results("fraction-simplifier", fraction="9" * 400 + "/3")
        assert rows["Simplified"] == "3" * 400 + "/1"
        assert registry.compute("fraction-simplifier", {"fraction": "7" * 5000 + "/3"}) == []

    def test_lcm(self):
        """Test the default LCM."""
        assert results("lcm")["LCM"] == "36"

    def test_prime_checker(self):
        """Test a prime and a composite."""
        assert results("prime-checker", n=97)["Prime?"] == "Yes"
        assert results("prime-checker", n=91)["Prime?"] == "No"

    def test_factorial_capped(self):
        """Test that n is capped at 20."""
        assert results("factorial", n=25)["n!"] == "2432902008176640000"

    def test_mean_median_mode(self):
        """Test the default sample."""
        rows = results("mean-median-mode")
        assert rows == {"Mean": "14.4", "Median": "15", "Mode": "15"}


class TestConversionCalculators:
    """Test conversion calculators."""

    def test_roman_default(self):
        """Test number to numeral."""
        assert results("roman-numeral")["Roman numeral"] == "MMXXV"

    def test_roman_to_number(self):
        """Test numeral to number and a rejected numeral."""
        assert results("roman-numeral", mode="toNumber", roman="mcmxciv")["Number"] == "1,994"
        assert results("roman-numeral", mode="toNumber", roman="IIII")["Number"] == "—"

    def test_temperature(self):
        """Test Celsius to Fahrenheit and Kelvin."""
        rows = results("temperature", value=100, **{"from": "C"})
        assert rows["Fahrenheit (°F)"] == "212"
        assert rows["Kelvin (K)"] == "373.15"


class TestMiscellaneousCalculators:
    """Test everyday calculators."""

    def test_age(self):
        """Test age on a given date."""
        rows = results("age", birth="1995-01-01", asOf="2025-06-15")
        assert rows["Age"] == "30 years, 5 months, 14 days"

    def test_age_birth_after_as_of(self):
        """Test a birth date after the as-of date."""
        assert registry.compute("age", {"birth": "2030-01-01", "asOf": "2025-01-01"}) == []

    def test_day_of_week(self):
        """Test weekday and long date."""
        rows = results("day-of-week", date="2025-06-15")
        assert rows == {"Day": "Sunday", "Date": "June 15, 2025"}

    def test_date_difference(self):
        """Test a difference starting at a month end."""
        rows = results("date-difference", start="2024-01-31", end="2024-03-01")
        assert rows == {"Difference": "0y 1m 1d", "Total days": "30"}

    def test_time_zone_converter(self):
        """Test a conversion across midnight."""
        rows = results(
            "time-zone-converter", date="2025-01-01", hour=1, minute=30,
            **{"from": "EST", "to": "PST"},
        )
        assert rows["Converted time"] == "2024-12-31 22:30 PST"
        assert rows["Original"] == "2025-01-01 01:30 EST"

    def test_time_zone_bad_hour(self):
        """Test an out-of-range hour."""
        assert registry.compute("time-zone-converter", {"hour": 24}) == []

    def test_gpa_default(self):
        """Test the default grades and credits."""
        assert results("gpa") == {"GPA": "4", "Total credits": "9"}

    def test_bmi(self):
        """Test the default metric BMI."""
        rows = results("bmi")
        assert rows == {"BMI": "22.857143", "Category": "Normal"}

    def test_bmr(self):
        """Test the default BMR."""
        assert results("bmr")["BMR"] == "1,648.75"

    def test_loan_eligibility(self):
        """Test the default debt-to-income verdict."""
        assert results("loan-eligibility") == {"DTI": "37.78%", "Verdict": "Borderline"}

    def test_random_number_degenerate_ranges(self):
        """Test single-value and empty ranges."""
        assert results("random-number", min=3, max=3)["Random integer"] == "3"
        assert results("random-number", min=5, max=5, mode="decimal")["Random number"] == "5"
        assert registry.compute("random-number", {"min": 1.2, "max": 1.8}) == []

    def test_password_length(self):
        """Test the requested password length."""
        rows = results("password-generator", length=24)
        assert rows["Length"] == "24"
        assert len(rows["Password"]) == 24
