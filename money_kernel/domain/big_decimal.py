"""
BigDecimal -- Immutable arbitrary-precision decimal value object.

Responsibility:
    Represents ``unscaled x 10**-scale`` exactly, with a BigInteger unscaled
    value and an explicit non-negative scale. Provides exact addition,
    subtraction and multiplication, policy-driven division and rescaling,
    numeric comparison, and a canonical text form that preserves scale.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends on big_integer and rounding. Imported by money and codec.

Invariants enforced:
    - scale is always an explicit int >= 0.
    - plus / minus produce max(scale_a, scale_b); multiplied_by produces
      scale_a + scale_b. None of them ever round.
    - divided_by always takes an explicit target scale and policy; there
      is no implicit scale inference.
    - ``==`` is structural (same unscaled AND same scale); is_equal_to and
      the ordering operators compare numeric value.
    - Floats are rejected at every entry point.

Failure modes:
    - NumberFormatError on malformed text.
    - DivisionByZeroError on a zero divisor.
    - RoundingNecessaryError when UNNECESSARY is in effect and the result
      is inexact.
    - TypeError on float / bool / unsupported input types.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal

from money_kernel.domain.big_integer import BigInteger
from money_kernel.domain.rounding import RoundingPolicy, round_quotient
from money_kernel.exceptions import (
    DivisionByZeroError,
    NumberFormatError,
    RoundingNecessaryError,
)

_DECIMAL_TEXT = re.compile(
    r"(?P<sign>[+-])?"
    r"(?P<integral>[0-9]*)"
    r"(?:\.(?P<fraction>[0-9]*))?"
    r"(?:[eE](?P<exponent>[+-]?[0-9]+))?"
)

# Largest exponent magnitude accepted from text or Decimal. Wider exponents
# would materialise millions of digits from a few bytes of input.
_MAX_EXPONENT = 10_000


def _check_scale(scale: int) -> int:
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise TypeError(f"scale must be an int, got {type(scale).__name__}")
    if scale < 0:
        raise ValueError(f"scale must be non-negative: {scale}")
    return scale


@dataclass(frozen=True, slots=True)
class BigDecimal:
    """
    Arbitrary-precision decimal number.

    Contract:
        Value is ``unscaled * 10**-scale``. Two instances are ``==`` only when
        both unscaled and scale match; use is_equal_to for numeric equality.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - unscaled is always a BigInteger, scale always a non-negative int
        - str() always renders exactly ``scale`` fractional digits

    Non-goals:
        - Does NOT emulate floating point (no NaN, no infinities, no -0)
        - Does NOT implement sqrt, log or other transcendental functions
    """

    unscaled: BigInteger
    scale: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.unscaled, BigInteger):
            object.__setattr__(self, "unscaled", BigInteger(self.unscaled))
        _check_scale(self.scale)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, value: BigDecimal | BigInteger | int | str | Decimal) -> BigDecimal:
        """
        Coerce a number into a BigDecimal without loss.

        Accepts BigDecimal (returned as-is), BigInteger and int (scale 0),
        decimal text (see parse) and finite ``decimal.Decimal`` values.

        Raises:
            NumberFormatError: If text or a Decimal is not a finite number.
            TypeError: For float, bool and any other type.
        """
        if isinstance(value, BigDecimal):
            return value
        if isinstance(value, BigInteger):
            return cls(value, 0)
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, Decimal):
            return cls._from_decimal(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(BigInteger(value), 0)
        raise TypeError(
            f"Cannot build BigDecimal from {type(value).__name__}; "
            f"pass decimal text, int or Decimal (floats are never accepted)"
        )

    @classmethod
    def of_unscaled_value(cls, unscaled: BigInteger | int | str, scale: int = 0) -> BigDecimal:
        """Build ``unscaled * 10**-scale`` directly, e.g. (1050, 2) -> 10.50."""
        return cls(BigInteger.of(unscaled), _check_scale(scale))

    @classmethod
    def zero(cls) -> BigDecimal:
        return cls(BigInteger.zero(), 0)

    @classmethod
    def one(cls) -> BigDecimal:
        return cls(BigInteger.one(), 0)

    @classmethod
    def parse(cls, text: str) -> BigDecimal:
        """
        Parse decimal text.

        Grammar:
            ``[+|-] digits [. [digits]]``, ``[+|-] . digits``, each with an
            optional exponent ``e[+|-]digits``. At least one mantissa digit is
            required. The scale is the number of fractional digits minus the
            exponent, floored at 0 (``"1.50"`` -> scale 2, ``"1.5e-3"`` ->
            ``0.0015``, ``"1.5e3"`` -> ``1500``).

        Raises:
            NumberFormatError: On empty input, more than one decimal point,
                an empty mantissa, an exponent beyond _MAX_EXPONENT, or any
                other character.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        if not text:
            raise NumberFormatError(text, "empty string")
        if text.count(".") > 1:
            raise NumberFormatError(text, "multiple decimal points")
        match = _DECIMAL_TEXT.fullmatch(text)
        if match is None:
            raise NumberFormatError(text, "not a valid decimal number")

        integral = match.group("integral") or ""
        fraction = match.group("fraction") or ""
        if not integral and not fraction:
            raise NumberFormatError(text, "empty mantissa")

        sign = match.group("sign") or ""
        unscaled = BigInteger.from_decimal_string(sign + integral + fraction)
        exponent = match.group("exponent")
        shift = BigInteger.from_decimal_string(exponent).value if exponent else 0
        if abs(shift) > _MAX_EXPONENT:
            raise NumberFormatError(text, "exponent out of range")
        scale = len(fraction) - shift
        if scale < 0:
            return cls(unscaled.multiply(BigInteger.ten_to_the(-scale)), 0)
        return cls(unscaled, scale)

    @classmethod
    def _from_decimal(cls, value: Decimal) -> BigDecimal:
        if not value.is_finite():
            raise NumberFormatError(str(value), "not a finite number")
        sign, digits, exponent = value.as_tuple()
        if abs(exponent) > _MAX_EXPONENT:
            raise NumberFormatError(str(value), "exponent out of range")
        magnitude = BigInteger.from_decimal_string("".join(map(str, digits)) or "0")
        unscaled = magnitude.negate() if sign else magnitude
        if exponent >= 0:
            return cls(unscaled.multiply(BigInteger.ten_to_the(exponent)), 0)
        return cls(unscaled, -exponent)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def signum(self) -> int:
        return self.unscaled.signum

    @property
    def is_zero(self) -> bool:
        return self.unscaled.is_zero

    @property
    def is_positive(self) -> bool:
        return self.unscaled.is_positive

    @property
    def is_negative(self) -> bool:
        return self.unscaled.is_negative

    @property
    def integral_part(self) -> BigInteger:
        """Integer part, truncated toward zero."""
        return self.unscaled.quotient(BigInteger.ten_to_the(self.scale))

    @property
    def fractional_part(self) -> BigDecimal:
        """``self - integral_part`` at this scale; carries the sign of self."""
        return BigDecimal(self.unscaled.remainder(BigInteger.ten_to_the(self.scale)), self.scale)

    # ------------------------------------------------------------------
    # Exact arithmetic
    # ------------------------------------------------------------------

    def _aligned(self, other: BigDecimal) -> tuple[BigInteger, BigInteger, int]:
        """Both unscaled values expressed at the larger of the two scales."""
        scale = max(self.scale, other.scale)
        a = self.unscaled.multiply(BigInteger.ten_to_the(scale - self.scale))
        b = other.unscaled.multiply(BigInteger.ten_to_the(scale - other.scale))
        return a, b, scale

    def plus(self, other: BigDecimal | BigInteger | int | str | Decimal) -> BigDecimal:
        that = BigDecimal.of(other)
        a, b, scale = self._aligned(that)
        return BigDecimal(a.add(b), scale)

    def minus(self, other: BigDecimal | BigInteger | int | str | Decimal) -> BigDecimal:
        that = BigDecimal.of(other)
        a, b, scale = self._aligned(that)
        return BigDecimal(a.subtract(b), scale)

    def multiplied_by(self, other: BigDecimal | BigInteger | int | str | Decimal) -> BigDecimal:
        that = BigDecimal.of(other)
        return BigDecimal(self.unscaled.multiply(that.unscaled), self.scale + that.scale)

    def power(self, exponent: int) -> BigDecimal:
        """Raise to a non-negative integer power; result scale is scale * exponent."""
        if isinstance(exponent, bool) or not isinstance(exponent, int) or exponent < 0:
            raise ValueError(f"Exponent must be a non-negative int: {exponent!r}")
        return BigDecimal(self.unscaled.pow(exponent), self.scale * exponent)

    def negated(self) -> BigDecimal:
        return BigDecimal(self.unscaled.negate(), self.scale)

    def abs(self) -> BigDecimal:
        return self if not self.is_negative else self.negated()

    # ------------------------------------------------------------------
    # Division and rescaling
    # ------------------------------------------------------------------

    def divided_by(
        self,
        divisor: BigDecimal | BigInteger | int | str | Decimal,
        scale: int,
        rounding: RoundingPolicy,
    ) -> BigDecimal:
        """
        Divide, rounding the exact quotient to ``scale`` with ``rounding``.

        Preconditions:
            - scale is a non-negative int; rounding is a RoundingPolicy.

        Raises:
            DivisionByZeroError: If divisor is zero.
            RoundingNecessaryError: If rounding is UNNECESSARY and the
                quotient is not exact at ``scale``.
        """
        _check_scale(scale)
        rounding = RoundingPolicy.from_name(rounding)
        that = BigDecimal.of(divisor)
        if that.is_zero:
            raise DivisionByZeroError(str(self))

        # result_unscaled = (u1 * 10**-s1) / (u2 * 10**-s2) * 10**scale
        shift = scale + that.scale - self.scale
        numerator = self.unscaled
        denominator = that.unscaled
        if shift >= 0:
            numerator = numerator.multiply(BigInteger.ten_to_the(shift))
        else:
            denominator = denominator.multiply(BigInteger.ten_to_the(-shift))
        try:
            return BigDecimal(round_quotient(numerator, denominator, rounding), scale)
        except RoundingNecessaryError:
            raise RoundingNecessaryError(f"{self} / {that}", scale) from None

    def exactly_divided_by(self, divisor: BigDecimal | BigInteger | int | str | Decimal) -> BigDecimal:
        """
        Divide exactly, choosing the smallest scale that holds the quotient.

        Raises:
            DivisionByZeroError: If divisor is zero.
            RoundingNecessaryError: If the quotient has a non-terminating
                decimal expansion (e.g. 1 / 3).
        """
        that = BigDecimal.of(divisor)
        if that.is_zero:
            raise DivisionByZeroError(str(self))

        numerator = self.unscaled
        denominator = that.unscaled
        if denominator.is_negative:
            numerator, denominator = numerator.negate(), denominator.negate()
        common = numerator.gcd(denominator)
        numerator = numerator.quotient(common)
        denominator = denominator.quotient(common)

        # Terminating iff the reduced denominator is 2**a * 5**b.
        rest, twos, fives = denominator, 0, 0
        while rest.remainder(2).is_zero:
            rest, twos = rest.quotient(2), twos + 1
        while rest.remainder(5).is_zero:
            rest, fives = rest.quotient(5), fives + 1
        if rest != BigInteger.one():
            raise RoundingNecessaryError(f"{self} / {that}")

        digits = max(twos, fives)
        unscaled = numerator.multiply(BigInteger.ten_to_the(digits)).quotient(denominator)
        scale = digits + self.scale - that.scale
        if scale < 0:
            return BigDecimal(unscaled.multiply(BigInteger.ten_to_the(-scale)), 0)
        return BigDecimal(unscaled, scale).strip_trailing_zeros()

    def to_scale(self, scale: int, rounding: RoundingPolicy = RoundingPolicy.UNNECESSARY) -> BigDecimal:
        """
        Return this value at ``scale``.

        Widening pads with zeros and is always exact. Narrowing rounds with
        ``rounding`` (UNNECESSARY by default, which raises if any non-zero
        digit would be dropped).
        """
        _check_scale(scale)
        rounding = RoundingPolicy.from_name(rounding)
        if scale == self.scale:
            return self
        if scale > self.scale:
            return BigDecimal(self.unscaled.multiply(BigInteger.ten_to_the(scale - self.scale)), scale)
        try:
            unscaled = round_quotient(
                self.unscaled, BigInteger.ten_to_the(self.scale - scale), rounding
            )
        except RoundingNecessaryError:
            raise RoundingNecessaryError(str(self), scale) from None
        return BigDecimal(unscaled, scale)

    def strip_trailing_zeros(self) -> BigDecimal:
        """Smallest-scale representation of the same value (``1.500`` -> ``1.5``)."""
        unscaled, scale = self.unscaled, self.scale
        while scale > 0:
            quotient, remainder = unscaled.divide_with_remainder(10)
            if not remainder.is_zero:
                break
            unscaled, scale = quotient, scale - 1
        return BigDecimal(unscaled, scale)

    def to_big_integer(self) -> BigInteger:
        """Exact integer value; raises RoundingNecessaryError if fractional."""
        return self.to_scale(0).unscaled

    def to_decimal(self) -> Decimal:
        """Standard-library Decimal with identical digits and exponent."""
        return Decimal(str(self))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare_to(self, other: BigDecimal | BigInteger | int | str | Decimal) -> int:
        """Numeric three-way comparison (-1, 0, 1); scale is ignored."""
        a, b, _ = self._aligned(BigDecimal.of(other))
        return a.compare(b)

    def is_equal_to(self, other: BigDecimal | BigInteger | int | str | Decimal) -> bool:
        return self.compare_to(other) == 0

    def is_greater_than(self, other: BigDecimal | BigInteger | int | str | Decimal) -> bool:
        return self.compare_to(other) > 0

    def is_greater_than_or_equal_to(self, other: BigDecimal | BigInteger | int | str | Decimal) -> bool:
        return self.compare_to(other) >= 0

    def is_less_than(self, other: BigDecimal | BigInteger | int | str | Decimal) -> bool:
        return self.compare_to(other) < 0

    def is_less_than_or_equal_to(self, other: BigDecimal | BigInteger | int | str | Decimal) -> bool:
        return self.compare_to(other) <= 0

    @classmethod
    def min(cls, first: BigDecimal | BigInteger | int | str | Decimal, *rest) -> BigDecimal:
        """Numerically smallest value; the first one wins among equals."""
        result = cls.of(first)
        for value in rest:
            candidate = cls.of(value)
            if candidate.is_less_than(result):
                result = candidate
        return result

    @classmethod
    def max(cls, first: BigDecimal | BigInteger | int | str | Decimal, *rest) -> BigDecimal:
        """Numerically largest value; the first one wins among equals."""
        result = cls.of(first)
        for value in rest:
            candidate = cls.of(value)
            if candidate.is_greater_than(result):
                result = candidate
        return result

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    @staticmethod
    def _operand(other: object) -> BigDecimal | None:
        if isinstance(other, (BigDecimal, BigInteger, Decimal)):
            return BigDecimal.of(other)
        if isinstance(other, int) and not isinstance(other, bool):
            return BigDecimal.of(other)
        return None

    def __add__(self, other: object) -> BigDecimal:
        that = self._operand(other)
        return NotImplemented if that is None else self.plus(that)

    __radd__ = __add__

    def __sub__(self, other: object) -> BigDecimal:
        that = self._operand(other)
        return NotImplemented if that is None else self.minus(that)

    def __rsub__(self, other: object) -> BigDecimal:
        that = self._operand(other)
        return NotImplemented if that is None else that.minus(self)

    def __mul__(self, other: object) -> BigDecimal:
        that = self._operand(other)
        return NotImplemented if that is None else self.multiplied_by(that)

    __rmul__ = __mul__

    def __neg__(self) -> BigDecimal:
        return self.negated()

    def __abs__(self) -> BigDecimal:
        return self.abs()

    def __lt__(self, other: object) -> bool:
        that = self._operand(other)
        return NotImplemented if that is None else self.compare_to(that) < 0

    def __le__(self, other: object) -> bool:
        that = self._operand(other)
        return NotImplemented if that is None else self.compare_to(that) <= 0

    def __gt__(self, other: object) -> bool:
        that = self._operand(other)
        return NotImplemented if that is None else self.compare_to(that) > 0

    def __ge__(self, other: object) -> bool:
        that = self._operand(other)
        return NotImplemented if that is None else self.compare_to(that) >= 0

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        digits = self.unscaled.abs().to_decimal_string()
        sign = "-" if self.is_negative else ""
        if self.scale == 0:
            return sign + digits
        digits = digits.rjust(self.scale + 1, "0")
        return f"{sign}{digits[:-self.scale]}.{digits[-self.scale:]}"

    def __repr__(self) -> str:
        return f"BigDecimal({str(self)!r})"
