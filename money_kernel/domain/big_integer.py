"""
BigInteger -- Immutable, unbounded signed integer value object.

Responsibility:
    The integer foundation of BigDecimal. Provides exact integer arithmetic,
    truncating division with a sign-of-dividend remainder, total ordering,
    and decimal text conversion that is not subject to the interpreter's
    integer string-conversion digit limit.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by rounding, big_decimal, money. No outward dependencies except
    money_kernel.exceptions.

Invariants enforced:
    - Immutable: every operation returns a new BigInteger.
    - Never overflows; magnitude is bounded only by memory.
    - divide_with_remainder truncates toward zero (NOT floor division) and the
      remainder takes the sign of the dividend.
    - Never constructed from float or bool.

Failure modes:
    - NumberFormatError on malformed decimal text.
    - DivisionByZeroError on a zero divisor.
    - TypeError on float / bool / non-integer input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from functools import lru_cache

from money_kernel.exceptions import DivisionByZeroError, NumberFormatError

_DECIMAL_INTEGER = re.compile(r"[+-]?[0-9]+")

# Text conversion works on base-10**_LIMB_DIGITS limbs. Each limb stays well
# below the interpreter's int/str conversion limit (4300 digits by default).
_LIMB_DIGITS = 1000
_LIMB_BASE = 10**_LIMB_DIGITS


@lru_cache(maxsize=256)
def _pow10(exponent: int) -> int:
    return 10**exponent


def _parse_magnitude(digits: str) -> int:
    value = 0
    for start in range(0, len(digits), _LIMB_DIGITS):
        chunk = digits[start:start + _LIMB_DIGITS]
        value = value * _pow10(len(chunk)) + int(chunk)
    return value


def _format_magnitude(value: int) -> str:
    if value < _LIMB_BASE:
        return str(value)
    limbs: list[int] = []
    while value:
        value, low = divmod(value, _LIMB_BASE)
        limbs.append(low)
    # Most significant limb unpadded, the rest zero-filled to full width.
    head = str(limbs[-1])
    return head + "".join(f"{limb:0{_LIMB_DIGITS}d}" for limb in reversed(limbs[:-1]))


@dataclass(frozen=True, slots=True)
class BigInteger:
    """
    Arbitrary-precision signed integer.

    Contract:
        Wraps an exact integer value. Equality and hashing are by value;
        ordering compares sign first, then magnitude.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - value is always an int, never bool or float

    Non-goals:
        - Does NOT implement bitwise operations
        - Does NOT implement floor division; use divide_with_remainder
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(
                f"BigInteger requires an int, got {type(self.value).__name__}"
            )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, value: BigInteger | int | str) -> BigInteger:
        """
        Coerce an int, decimal string or BigInteger into a BigInteger.

        Raises:
            NumberFormatError: If a string is not a plain decimal integer.
            TypeError: If value is a float, bool or other type.
        """
        if isinstance(value, BigInteger):
            return value
        if isinstance(value, str):
            return cls.from_decimal_string(value)
        return cls(value)

    @classmethod
    def from_decimal_string(cls, text: str) -> BigInteger:
        """
        Parse an optionally signed run of ASCII decimal digits.

        Preconditions:
            - text matches ``[+-]?[0-9]+`` exactly; no whitespace, no
              underscores, no non-ASCII digits.

        Raises:
            NumberFormatError: On any other input.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        if _DECIMAL_INTEGER.fullmatch(text) is None:
            raise NumberFormatError(
                text, "expected an optional sign followed by decimal digits"
            )
        negative = text[0] == "-"
        digits = text[1:] if text[0] in "+-" else text
        magnitude = _parse_magnitude(digits)
        return cls(-magnitude if negative else magnitude)

    @classmethod
    def zero(cls) -> BigInteger:
        return _ZERO

    @classmethod
    def one(cls) -> BigInteger:
        return _ONE

    @classmethod
    def ten_to_the(cls, exponent: int) -> BigInteger:
        """Return 10**exponent for a non-negative exponent."""
        if exponent < 0:
            raise ValueError(f"Exponent must be non-negative: {exponent}")
        return cls(_pow10(exponent))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def signum(self) -> int:
        """-1, 0 or 1."""
        return (self.value > 0) - (self.value < 0)

    @property
    def magnitude(self) -> int:
        return -self.value if self.value < 0 else self.value

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    @property
    def is_negative(self) -> bool:
        return self.value < 0

    @property
    def is_positive(self) -> bool:
        return self.value > 0

    @property
    def is_even(self) -> bool:
        return self.value % 2 == 0

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: BigInteger | int | str) -> BigInteger:
        return BigInteger(self.value + BigInteger.of(other).value)

    def subtract(self, other: BigInteger | int | str) -> BigInteger:
        return BigInteger(self.value - BigInteger.of(other).value)

    def multiply(self, other: BigInteger | int | str) -> BigInteger:
        return BigInteger(self.value * BigInteger.of(other).value)

    def divide_with_remainder(
        self, divisor: BigInteger | int | str
    ) -> tuple[BigInteger, BigInteger]:
        """
        Truncating division.

        Postconditions:
            - quotient is rounded toward zero
            - remainder has the sign of the dividend (self)
            - self == quotient * divisor + remainder
            - abs(remainder) < abs(divisor)

        Raises:
            DivisionByZeroError: If divisor is zero.
        """
        d = BigInteger.of(divisor).value
        if d == 0:
            raise DivisionByZeroError(str(self))
        n = self.value
        quotient = abs(n) // abs(d)
        if (n < 0) != (d < 0):
            quotient = -quotient
        remainder = n - d * quotient
        return BigInteger(quotient), BigInteger(remainder)

    def quotient(self, divisor: BigInteger | int | str) -> BigInteger:
        return self.divide_with_remainder(divisor)[0]

    def remainder(self, divisor: BigInteger | int | str) -> BigInteger:
        return self.divide_with_remainder(divisor)[1]

    def negate(self) -> BigInteger:
        return BigInteger(-self.value)

    def abs(self) -> BigInteger:
        return self if self.value >= 0 else BigInteger(-self.value)

    def pow(self, exponent: int) -> BigInteger:
        if isinstance(exponent, bool) or not isinstance(exponent, int) or exponent < 0:
            raise ValueError(f"Exponent must be a non-negative int: {exponent!r}")
        return BigInteger(self.value**exponent)

    def gcd(self, other: BigInteger | int | str) -> BigInteger:
        """Greatest common divisor; always non-negative."""
        return BigInteger(math.gcd(self.value, BigInteger.of(other).value))

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, other: BigInteger | int | str) -> int:
        """
        Three-way comparison returning -1, 0 or 1.

        Orders by sign first; for equal signs, by magnitude (larger
        magnitude is greater when positive, smaller when negative).
        """
        that = BigInteger.of(other)
        if self.signum != that.signum:
            return -1 if self.signum < that.signum else 1
        if self.magnitude == that.magnitude:
            return 0
        larger = self.magnitude > that.magnitude
        if self.signum > 0:
            return 1 if larger else -1
        return -1 if larger else 1

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, (BigInteger, int)) or isinstance(other, bool):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, (BigInteger, int)) or isinstance(other, bool):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, (BigInteger, int)) or isinstance(other, bool):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, (BigInteger, int)) or isinstance(other, bool):
            return NotImplemented
        return self.compare(other) >= 0

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: object) -> BigInteger:
        if not isinstance(other, (BigInteger, int)) or isinstance(other, bool):
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other: object) -> BigInteger:
        if not isinstance(other, (BigInteger, int)) or isinstance(other, bool):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: object) -> BigInteger:
        if not isinstance(other, int) or isinstance(other, bool):
            return NotImplemented
        return BigInteger(other).subtract(self)

    def __mul__(self, other: object) -> BigInteger:
        if not isinstance(other, (BigInteger, int)) or isinstance(other, bool):
            return NotImplemented
        return self.multiply(other)

    __rmul__ = __mul__

    def __neg__(self) -> BigInteger:
        return self.negate()

    def __abs__(self) -> BigInteger:
        return self.abs()

    def __int__(self) -> int:
        return self.value

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def to_decimal_string(self) -> str:
        text = _format_magnitude(self.magnitude)
        return "-" + text if self.value < 0 else text

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        return f"BigInteger({self.to_decimal_string()!r})"


_ZERO = BigInteger(0)
_ONE = BigInteger(1)
