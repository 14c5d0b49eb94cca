"""
Unit tests for BigInteger.

Verifies:
- Parsing and rendering of decimal text, including very long values
- Truncating division with a sign-of-dividend remainder
- Sign-then-magnitude ordering
- Float / bool rejection
"""

import pytest

from money_kernel.domain.big_integer import BigInteger
from money_kernel.exceptions import DivisionByZeroError, NumberFormatError


class TestConstruction:
    """Tests for BigInteger construction."""

    def test_from_int(self):
        assert BigInteger(42).value == 42

    def test_of_passes_instances_through(self):
        value = BigInteger(7)
        assert BigInteger.of(value) is value

    def test_of_string(self):
        assert BigInteger.of("-123") == BigInteger(-123)

    def test_float_rejected(self):
        """Floats never become integers silently."""
        with pytest.raises(TypeError):
            BigInteger(1.0)

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            BigInteger(True)

    def test_zero_and_one(self):
        assert BigInteger.zero().value == 0
        assert BigInteger.one().value == 1

    def test_ten_to_the(self):
        assert BigInteger.ten_to_the(3) == BigInteger(1000)
        assert BigInteger.ten_to_the(0) == BigInteger(1)

    def test_ten_to_the_negative_rejected(self):
        with pytest.raises(ValueError):
            BigInteger.ten_to_the(-1)


class TestDecimalText:
    """Tests for from_decimal_string / to_decimal_string."""

    @pytest.mark.parametrize("text,expected", [
        ("0", 0),
        ("+5", 5),
        ("-5", -5),
        ("007", 7),
        ("-0", 0),
    ])
    def test_parse(self, text, expected):
        assert BigInteger.from_decimal_string(text).value == expected

    @pytest.mark.parametrize("text", ["", "+", "-", "1.5", " 1", "1 ", "1_000", "abc", "--1", "1e3"])
    def test_malformed_text_rejected(self, text):
        with pytest.raises(NumberFormatError) as exc_info:
            BigInteger.from_decimal_string(text)
        assert exc_info.value.text == text
        assert exc_info.value.code == "NUMBER_FORMAT"

    def test_renders_canonical_text(self):
        assert str(BigInteger.from_decimal_string("-007")) == "-7"
        assert str(BigInteger(0)) == "0"

    def test_repr(self):
        assert repr(BigInteger(5)) == "BigInteger('5')"

    def test_very_long_value_survives_round_trip(self):
        """Values far beyond the interpreter's int/str digit limit still convert."""
        digits = "9" * 12000
        value = BigInteger.from_decimal_string("-" + digits)
        assert value.is_negative
        assert value.to_decimal_string() == "-" + digits

    def test_long_value_with_internal_zeros(self):
        """Zero-filled limbs keep their leading zeros."""
        digits = "1" + "0" * 2500 + "7"
        assert BigInteger.from_decimal_string(digits).to_decimal_string() == digits


class TestArithmetic:
    """Tests for exact integer arithmetic."""

    def test_add_subtract_multiply(self):
        a = BigInteger(12)
        assert a.add(30) == BigInteger(42)
        assert a.subtract("20") == BigInteger(-8)
        assert a.multiply(BigInteger(-3)) == BigInteger(-36)

    def test_never_overflows(self):
        big = BigInteger(2).pow(256)
        assert big.multiply(big) == BigInteger(2**512)

    @pytest.mark.parametrize("dividend,divisor,quotient,remainder", [
        (7, 2, 3, 1),
        (-7, 2, -3, -1),
        (7, -2, -3, 1),
        (-7, -2, 3, -1),
        (6, 3, 2, 0),
        (0, 5, 0, 0),
    ])
    def test_division_truncates_toward_zero(self, dividend, divisor, quotient, remainder):
        """Remainder takes the sign of the dividend."""
        q, r = BigInteger(dividend).divide_with_remainder(divisor)
        assert (q.value, r.value) == (quotient, remainder)
        assert q.value * divisor + r.value == dividend

    def test_quotient_and_remainder_helpers(self):
        assert BigInteger(-7).quotient(2) == BigInteger(-3)
        assert BigInteger(-7).remainder(2) == BigInteger(-1)

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            BigInteger(5).divide_with_remainder(0)
        assert exc_info.value.dividend == "5"

    def test_negate_and_abs(self):
        assert BigInteger(5).negate() == BigInteger(-5)
        assert BigInteger(-5).abs() == BigInteger(5)

    def test_pow_rejects_negative_exponent(self):
        with pytest.raises(ValueError):
            BigInteger(2).pow(-1)

    def test_gcd_is_non_negative(self):
        assert BigInteger(-12).gcd(18) == BigInteger(6)

    def test_operators(self):
        a = BigInteger(10)
        assert a + 5 == BigInteger(15)
        assert 5 + a == BigInteger(15)
        assert a - 3 == BigInteger(7)
        assert 3 - a == BigInteger(-7)
        assert a * 2 == BigInteger(20)
        assert -a == BigInteger(-10)
        assert abs(BigInteger(-4)) == BigInteger(4)
        assert int(a) == 10

    def test_float_operand_not_supported(self):
        with pytest.raises(TypeError):
            BigInteger(1) + 1.5


class TestComparison:
    """Tests for sign-then-magnitude ordering."""

    @pytest.mark.parametrize("a,b,expected", [
        (1, 2, -1),
        (2, 1, 1),
        (-1, -2, 1),
        (-2, -1, -1),
        (-1, 1, -1),
        (0, -1, 1),
        (0, 0, 0),
        (-5, -5, 0),
    ])
    def test_compare(self, a, b, expected):
        assert BigInteger(a).compare(BigInteger(b)) == expected

    def test_ordering_operators(self):
        assert BigInteger(-3) < BigInteger(2)
        assert BigInteger(2) <= 2
        assert BigInteger(3) > 2
        assert BigInteger(-1) >= BigInteger(-1)

    def test_properties(self):
        assert BigInteger(-4).signum == -1
        assert BigInteger(0).signum == 0
        assert BigInteger(9).signum == 1
        assert BigInteger(-4).magnitude == 4
        assert BigInteger(-4).is_even
        assert not BigInteger(3).is_even
        assert BigInteger(0).is_zero

    def test_hashable_by_value(self):
        assert {BigInteger(3), BigInteger(3), BigInteger(4)} == {BigInteger(3), BigInteger(4)}
