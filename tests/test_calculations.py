"""
Tests for the calculation engine.
"""

import math
from collections import Counter
from datetime import date

import pytest

from calculateshub.calculations.amortization import (
    amortization_rows,
    loan_totals,
    monthly_payment,
    schedule_totals,
)
from calculateshub.calculations.dates import (
    add_months,
    calendar_walk_diff,
    days_in_month,
    diff_ymd,
    long_date,
    parse_date,
    shift_time_zone,
    weekday_name,
)
from calculateshub.calculations.debt import (
    AVALANCHE,
    MAX_MONTHS,
    SNOWBALL,
    simulate_debt_payoff,
    simulate_minimum_payments,
)
from calculateshub.calculations.formatting import (
    format_int,
    format_money,
    format_number,
    format_percent_from_rate,
    format_ratio,
)
from calculateshub.calculations.primitives import (
    clamp,
    gcd_int,
    is_finite,
    is_prime,
    lcm_int,
    power,
    ratio_or_infinity,
    round_half_up,
    safe_div,
    to_number,
)
from calculateshub.calculations.randomness import (
    AMBIGUOUS,
    DIGITS,
    LOWERCASE,
    SYMBOLS,
    UPPERCASE,
    make_password,
    random_float01,
    random_int_inclusive,
)
from calculateshub.calculations.rational import (
    Fraction,
    best_rational,
    fraction_to_mixed_string,
    parse_fraction_string,
    simplify_fraction,
)
from calculateshub.calculations.roman import int_to_roman, roman_to_int
from calculateshub.calculations.statistics import describe, population_std, weighted_average
from calculateshub.calculations.units import (
    AREA,
    DATA_STORAGE,
    ENERGY,
    LENGTH,
    PRESSURE,
    SPEED,
    TIME,
    VOLUME,
    WEIGHT,
    convert_units,
)


THREE_DEBTS = [
    {"name": "Card A", "balance": 2500, "apr": 24.99, "minimum": 75},
    {"name": "Card B", "balance": 6000, "apr": 19.99, "minimum": 150},
    {"name": "Car", "balance": 9000, "apr": 6.5, "minimum": 250},
]

UNIT_TABLES = [LENGTH, AREA, PRESSURE, TIME, VOLUME, WEIGHT, SPEED, ENERGY, DATA_STORAGE]

LOANS = [
    (1000, 0, 12),
    (15000, 8.9, 60),
    (250000, 6.25, 360),
    (5000, 24.99, 24),
    (100, 0.01, 1200),
]


class TestPrimitives:
    """Test numeric coercion and guards."""

    def test_to_number_parses_form_strings(self):
        """Test that padded numeric strings and ints become floats."""
        assert to_number(" 12.5 ") == 12.5
        assert to_number(3) == 3.0

    def test_to_number_invalid_is_nan(self):
        """Test that unusable input becomes NaN."""
        for raw in ["", "abc", None, "1_000", "inf", float("inf")]:
            assert math.isnan(to_number(raw))

    def test_is_finite_rejects_bool(self):
        """Test that booleans are not treated as numbers."""
        assert not is_finite(True)

    def test_is_finite_huge_int(self):
        """Test that an int too large for a float is non-finite instead of raising."""
        assert not is_finite(10 ** 400)
        assert is_finite(10 ** 300)

    def test_clamp_leaves_non_finite(self):
        """Test clamping to bounds and NaN pass-through."""
        assert clamp(5, 0, 3) == 3
        assert clamp(-1, 0, 3) == 0
        assert math.isnan(clamp(float("nan"), 0, 3))

    def test_safe_div(self):
        """Test division with a zero denominator."""
        assert safe_div(10, 4) == 2.5
        assert math.isnan(safe_div(1, 0))

    def test_ratio_or_infinity(self):
        """Test zero-denominator ratios."""
        assert ratio_or_infinity(0, 0) == 0
        assert ratio_or_infinity(5, 0) == float("inf")
        assert ratio_or_infinity(6, 3) == 2

    def test_power_edge_cases(self):
        """Test overflow and negative-base powers."""
        assert power(2, 10) == 1024
        assert math.isnan(power(-8, 0.5))
        assert power(10, 400) == float("inf")

    def test_round_half_up(self):
        """Test that halves round toward positive infinity."""
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(2.4) == 2

    def test_gcd_never_zero(self):
        """Test gcd with zero inputs."""
        assert gcd_int(0, 0) == 1
        assert gcd_int(42, 56) == 14

    def test_lcm(self):
        """Test lcm including zero and negative inputs."""
        assert lcm_int(12, 18) == 36
        assert lcm_int(0, 5) == 0
        assert lcm_int(-4, 6) == 12

    def test_is_prime(self):
        """Test primality for small numbers, a Mersenne prime and a Carmichael number."""
        assert [n for n in range(30) if is_prime(n)] == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
        assert is_prime(2_147_483_647)
        assert not is_prime(561)


class TestFormatting:
    """Test display formatting."""

    def test_money(self):
        """Test dollar formatting with separators and rounding."""
        assert format_money(1234.5) == "$1,234.50"
        assert format_money(-5) == "-$5.00"
        assert format_money(0.005) == "$0.01"

    def test_number_trims_zeros(self):
        """Test up-to-six-decimal formatting."""
        assert format_number(2.5) == "2.5"
        assert format_number(1 / 3) == "0.333333"
        assert format_number(1000000) == "1,000,000"

    def test_int_and_percent(self):
        """Test integer and percent formatting."""
        assert format_int(1234.5) == "1,235"
        assert format_percent_from_rate(0.125) == "12.5%"

    def test_non_finite_placeholder(self):
        """Test that NaN and infinity display as a dash."""
        for fmt in (format_money, format_number, format_int, format_percent_from_rate):
            assert fmt(float("nan")) == "—"
            assert fmt(float("inf")) == "—"

    def test_ratio_infinity(self):
        """Test that unbounded ratios display as infinity."""
        assert format_ratio(float("inf"), "x") == "∞"
        assert format_ratio(4, "x") == "4x"


class TestAmortization:
    """Test loan amortization calculations."""

    def test_loan_default_payment(self):
        """Test payment for 15,000 at 8.9% over 60 months."""
        payment = monthly_payment(15000, 8.9, 60)
        assert payment == pytest.approx(310.65, abs=0.01)

    def test_zero_rate_is_straight_line(self):
        """Test that a 0% loan divides the principal evenly."""
        assert monthly_payment(1200, 0, 12) == 100

    def test_invalid_term(self):
        """Test that a zero term has no payment."""
        assert math.isnan(monthly_payment(1000, 5, 0))

    @pytest.mark.parametrize("principal,rate,months", LOANS)
    def test_payments_cover_principal_and_interest(self, principal, rate, months):
        """Test that payment times term equals principal plus scheduled interest."""
        payment = monthly_payment(principal, rate, months)
        totals = schedule_totals(amortization_rows(principal, rate, months))
        assert totals["total_principal"] == pytest.approx(principal, abs=0.01)
        assert payment * months == pytest.approx(principal + totals["total_interest"], abs=0.01)

    def test_schedule_pays_off_principal(self):
        """Test schedule length and final balance."""
        rows = list(amortization_rows(100000, 6, 60))
        assert len(rows) == 60
        assert rows[-1].balance == pytest.approx(0, abs=0.01)
        assert schedule_totals(rows)["total_interest"] > 0

    def test_schedule_is_lazy(self):
        """Test that rows can be drawn one at a time."""
        rows = amortization_rows(300000, 6.5, 360)
        first = next(rows)
        assert first.month == 1
        assert first.interest == pytest.approx(1625.0)

    def test_invalid_loan_yields_nothing(self):
        """Test that unusable loans produce no rows."""
        assert list(amortization_rows(float("nan"), 5, 12)) == []
        assert list(amortization_rows(1000, -1, 12)) == []

    def test_loan_totals(self):
        """Test payment-times-term totals."""
        totals = loan_totals(100, 12, 1000)
        assert totals == {"total_paid": 1200, "total_interest": 200}


class TestDebtPayoff:
    """Test snowball and avalanche simulations."""

    def test_avalanche_interest_not_above_snowball(self):
        """Test that avalanche never pays more interest than snowball."""
        avalanche = simulate_debt_payoff(THREE_DEBTS, 200, AVALANCHE)
        snowball = simulate_debt_payoff(THREE_DEBTS, 200, SNOWBALL)
        assert avalanche is not None and snowball is not None
        assert avalanche.total_interest <= snowball.total_interest

    @pytest.mark.parametrize("strategy", [AVALANCHE, SNOWBALL])
    def test_total_paid_is_balances_plus_interest(self, strategy):
        """Test that everything paid is the starting balances plus interest."""
        result = simulate_debt_payoff(THREE_DEBTS, 200, strategy)
        balances = sum(d["balance"] for d in THREE_DEBTS)
        assert result.months < MAX_MONTHS
        assert result.total_paid == pytest.approx(balances + result.total_interest, abs=0.01)

    def test_payoff_order(self):
        """Test strategy ordering by APR and by balance."""
        avalanche = simulate_debt_payoff(THREE_DEBTS, 200, AVALANCHE)
        snowball = simulate_debt_payoff(THREE_DEBTS, 200, SNOWBALL)
        assert avalanche.order == ("Card A", "Card B", "Car")
        assert snowball.payoff_order == "Card A → Card B → Car"

    def test_inputs_not_mutated(self):
        """Test that the caller's debts are left untouched."""
        debts = [dict(d) for d in THREE_DEBTS]
        simulate_debt_payoff(debts, 100, AVALANCHE)
        assert debts == THREE_DEBTS

    def test_unpayable_returns_none(self):
        """Test that minimums below the interest never finish."""
        debts = [{"name": "Card", "balance": 10000, "apr": 30, "minimum": 10}]
        assert simulate_debt_payoff(debts, 0, AVALANCHE) is None

    def test_no_valid_debts(self):
        """Test that zero balances are ignored."""
        assert simulate_debt_payoff([{"balance": 0, "apr": 5, "minimum": 10}], 0) is None

    def test_minimum_payment_simulation(self):
        """Test credit card payoff with a percent minimum and a floor."""
        result = simulate_minimum_payments(3000, 22.99, 3, 25)
        assert result.paid_off
        assert result.total_paid == pytest.approx(3000 + result.total_interest, abs=0.01)

    def test_minimum_payment_horizon(self):
        """Test that a zero payment is reported as not paid off."""
        result = simulate_minimum_payments(3000, 60, 0, 0, max_months=24)
        assert not result.paid_off


class TestRational:
    """Test fractions and rational approximation."""

    def test_parse_and_simplify(self):
        """Test that 42/56 reduces to 3/4."""
        fraction = parse_fraction_string("42/56")
        assert fraction == Fraction(3, 4)
        assert fraction_to_mixed_string(fraction) == "3/4"

    def test_parse_rejects_malformed(self):
        """Test strings that are not n/d."""
        for text in ["", "3/0", "1.5/2", "a/b", "3"]:
            assert parse_fraction_string(text) is None

    def test_parse_huge_numerator(self):
        """Test a numerator too large for a float."""
        fraction = parse_fraction_string("9" * 400 + "/3")
        assert fraction == Fraction(int("3" * 400), 1)
        assert fraction.value == float("inf")

    def test_parse_past_integer_digit_limit(self):
        """Test that overly long digit strings are rejected."""
        assert parse_fraction_string("7" * 5000 + "/3") is None

    def test_sign_on_numerator(self):
        """Test that a negative denominator moves its sign."""
        assert simplify_fraction(3, -6) == Fraction(-1, 2)

    def test_mixed_numbers(self):
        """Test mixed number rendering."""
        assert fraction_to_mixed_string(Fraction(-3, 2)) == "-1 1/2"
        assert fraction_to_mixed_string(Fraction(8, 1)) == "8"

    def test_best_rational(self):
        """Test convergents and the semiconvergent at the bound."""
        assert best_rational(0.75) == Fraction(3, 4)
        assert best_rational(-0.125) == Fraction(-1, 8)
        assert best_rational(math.pi, 100) == Fraction(311, 99)
        assert best_rational(float("nan")) is None

    @pytest.mark.parametrize("value", [0.75, -2.3333, math.pi, 0.1, 123.456, 1e-5])
    def test_best_rational_is_reduced(self, value):
        """Test that approximations are already in lowest terms."""
        fraction = best_rational(value)
        assert simplify_fraction(fraction.n, fraction.d) == fraction
        assert fraction.d <= 10000


class TestRoman:
    """Test Roman numeral codec."""

    def test_concrete_values(self):
        """Test 2025 and a lowercase numeral."""
        assert int_to_roman(2025) == "MMXXV"
        assert roman_to_int("MMXXV") == 2025
        assert roman_to_int("mcmxciv") == 1994

    def test_round_trip(self):
        """Test every supported value round-trips."""
        for n in range(1, 4000):
            assert roman_to_int(int_to_roman(n)) == n

    def test_rejects_non_canonical(self):
        """Test that non-canonical numerals are rejected."""
        for text in ["IIII", "VX", "IC", "", "ABC"]:
            assert roman_to_int(text) is None

    def test_out_of_range(self):
        """Test values outside 1-3999."""
        assert int_to_roman(0) is None
        assert int_to_roman(4000) is None


class TestDates:
    """Test calendar arithmetic."""

    def test_diff_ymd(self):
        """Test age-style difference in years, months and days."""
        diff = diff_ymd(date(1995, 1, 1), date(2025, 6, 15))
        assert (diff.years, diff.months, diff.days) == (30, 5, 14)
        assert diff.total_days == (date(2025, 6, 15) - date(1995, 1, 1)).days

    def test_diff_ymd_end_before_start(self):
        """Test that a reversed range has no difference."""
        assert diff_ymd(date(2025, 1, 2), date(2025, 1, 1)) is None

    def test_add_months_clamps(self):
        """Test month stepping at month ends."""
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
        assert days_in_month(2024, 2) == 29

    def test_calendar_walk(self):
        """Test walking from a month end."""
        diff = calendar_walk_diff(date(2024, 1, 31), date(2024, 3, 1))
        assert (diff.years, diff.months, diff.days) == (0, 1, 1)

    def test_calendar_walk_negative(self):
        """Test that a reversed range gives negative days."""
        diff = calendar_walk_diff(date(2025, 1, 10), date(2025, 1, 3))
        assert (diff.years, diff.months, diff.days) == (0, 0, -7)

    def test_weekday_and_long_date(self):
        """Test weekday names and long dates."""
        assert weekday_name(date(2025, 6, 15)) == "Sunday"
        assert long_date(date(2025, 6, 15)) == "June 15, 2025"

    def test_parse_date(self):
        """Test ISO parsing and invalid dates."""
        assert parse_date("2025-06-15") == date(2025, 6, 15)
        assert parse_date("") is None
        assert parse_date("2025-02-30") is None

    def test_time_zone_shift(self):
        """Test a shift across midnight and an unknown zone."""
        shifted = shift_time_zone(date(2025, 1, 1), 1, 30, "EST", "PST")
        assert shifted.isoformat() == "2024-12-31T22:30:00"
        assert shift_time_zone(date(2025, 1, 1), 9, 0, "EST", "XYZ") is None

    def test_half_hour_zone(self):
        """Test Newfoundland's half-hour offset."""
        shifted = shift_time_zone(date(2025, 1, 1), 9, 0, "EST", "NST")
        assert (shifted.hour, shifted.minute) == (10, 30)


class TestUnits:
    """Test unit conversion tables."""

    @pytest.mark.parametrize("table", UNIT_TABLES)
    def test_identity(self, table):
        """Test that converting into the source unit returns the value."""
        for unit in table:
            assert convert_units(12.5, unit, table)[unit] == pytest.approx(12.5)

    def test_length(self):
        """Test miles to feet."""
        converted = convert_units(1, "mi", LENGTH)
        assert converted["ft"] == pytest.approx(5280)

    def test_weight(self):
        """Test pounds to kilograms."""
        assert convert_units(1, "lb", WEIGHT)["kg"] == pytest.approx(0.45359237)

    def test_unknown_unit(self):
        """Test unknown units and non-numeric values."""
        assert convert_units(1, "parsec", LENGTH) is None
        assert convert_units("abc", "m", LENGTH) is None


class TestRandomness:
    """Test random generation with a seeded source."""

    def test_int_in_range(self, seeded_source):
        """Test that every value in a small range is drawn."""
        draws = [random_int_inclusive(1, 6, seeded_source) for _ in range(500)]
        assert set(draws) == {1, 2, 3, 4, 5, 6}

    def test_int_is_uniform(self, seeded_source):
        """Test that draw frequencies stay close to uniform."""
        draws = 60000
        counts = Counter(random_int_inclusive(1, 6, seeded_source) for _ in range(draws))
        expected = draws / 6
        chi_square = sum((counts[face] - expected) ** 2 / expected for face in range(1, 7))
        # 5 degrees of freedom; 25.7 is the 0.9999 quantile
        assert chi_square < 25.7

    def test_int_span_limit(self, seeded_source):
        """Test that ranges wider than 2**32 are rejected."""
        assert random_int_inclusive(0, 2 ** 32, seeded_source) is None
        assert 0 <= random_int_inclusive(0, 2 ** 32 - 1, seeded_source) < 2 ** 32

    def test_int_rounds_bounds_inward(self, seeded_source):
        """Test that fractional bounds round inward."""
        assert random_int_inclusive(1.2, 1.8, seeded_source) is None
        assert random_int_inclusive(1.2, 2.8, seeded_source) == 2

    def test_float_in_unit_interval(self, seeded_source):
        """Test that floats stay in [0, 1)."""
        for _ in range(100):
            assert 0 <= random_float01(seeded_source) < 1

    def test_password_classes(self, seeded_source):
        """Test that every selected class appears and ambiguous characters do not."""
        password = make_password(20, symbols=True, exclude_ambiguous=True, source=seeded_source)
        assert len(password) == 20
        assert any(c in LOWERCASE for c in password)
        assert any(c in UPPERCASE for c in password)
        assert any(c in DIGITS for c in password)
        assert any(c in SYMBOLS for c in password)
        assert not any(c in AMBIGUOUS for c in password)

    def test_password_length_clamped(self, seeded_source):
        """Test length clamping and the blank default."""
        assert len(make_password(200, source=seeded_source)) == 64
        assert len(make_password(1, source=seeded_source)) == 4
        assert len(make_password("", source=seeded_source)) == 16

    def test_password_no_classes_uses_alphanumerics(self, seeded_source):
        """Test the fallback pool when no class is selected."""
        password = make_password(12, False, False, False, False, source=seeded_source)
        assert password.isalnum()


class TestStatistics:
    """Test descriptive statistics."""

    def test_describe(self):
        """Test mean, median and mode."""
        summary = describe([10, 12, 15, 15, 20])
        assert summary.mean == pytest.approx(14.4)
        assert summary.median == 15
        assert summary.mode == 15

    def test_mode_tie_takes_smallest(self):
        """Test the smallest value wins a mode tie."""
        assert describe([3, 1, 2]).mode == 1

    def test_describe_skips_blanks(self):
        """Test that NaN entries are left out."""
        assert describe([float("nan"), 4]).count == 1
        assert describe([float("nan")]) is None

    def test_population_std(self):
        """Test standard deviation dividing by n."""
        assert population_std([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(2.0)

    def test_weighted_average(self):
        """Test GPA-style weighting and zero weights."""
        average, total = weighted_average([(4, 3), (3, 3), (2, 0)])
        assert average == pytest.approx(3.5)
        assert total == 6
        assert weighted_average([(4, 0)]) is None
