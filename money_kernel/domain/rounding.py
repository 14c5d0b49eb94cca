"""
Rounding -- Closed set of rounding policies and the quotient rounder.

Responsibility:
    Defines RoundingPolicy and round_quotient(), the single function that
    turns an exact rational numerator/denominator into an integer under a
    policy. BigDecimal.divided_by, BigDecimal.to_scale and every Money
    rescale go through round_quotient; nothing else in the kernel rounds.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Ties (remainder exactly half of the denominator) are resolved only by
      the HALF_* policies, each in its documented direction.
    - UNNECESSARY never rounds: any non-zero remainder raises.
    - Exact quotients are returned unchanged under every policy.

Failure modes:
    - DivisionByZeroError if the denominator is zero.
    - RoundingNecessaryError under UNNECESSARY when the quotient is inexact.
"""

from __future__ import annotations

import decimal
from enum import Enum

from money_kernel.domain.big_integer import BigInteger
from money_kernel.exceptions import DivisionByZeroError, RoundingNecessaryError


class RoundingPolicy(str, Enum):
    """Rounding rule applied when a result is not representable at a scale."""

    UP = "up"  # Away from zero
    DOWN = "down"  # Toward zero
    CEILING = "ceiling"  # Toward +infinity
    FLOOR = "floor"  # Toward -infinity
    HALF_UP = "half_up"  # Nearest; ties away from zero
    HALF_DOWN = "half_down"  # Nearest; ties toward zero
    HALF_CEILING = "half_ceiling"  # Nearest; ties toward +infinity
    HALF_FLOOR = "half_floor"  # Nearest; ties toward -infinity
    HALF_EVEN = "half_even"  # Nearest; ties to the even neighbour
    UNNECESSARY = "unnecessary"  # Assert exactness

    @classmethod
    def from_name(cls, name: str | RoundingPolicy) -> RoundingPolicy:
        """
        Resolve a policy from its value or name, case-insensitively.

        Accepts ``"half_down"``, ``"HALF_DOWN"``, ``"halfDown"`` and
        ``"half-down"`` alike.

        Raises:
            ValueError: If the name does not identify a policy.
        """
        if isinstance(name, RoundingPolicy):
            return name
        if not isinstance(name, str):
            raise ValueError(f"Unknown rounding policy: {name!r}")
        key = name.strip().replace("-", "_")
        if "_" not in key and not key.isupper() and not key.islower():
            # camelCase -> snake_case
            key = "".join("_" + c.lower() if c.isupper() else c for c in key).lstrip("_")
        key = key.lower()
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown rounding policy: {name!r}") from None

    def to_decimal_rounding(self) -> str:
        """
        The standard-library ``decimal`` rounding constant for this policy.

        Raises:
            ValueError: For HALF_CEILING, HALF_FLOOR and UNNECESSARY, which
                the decimal module does not offer.
        """
        try:
            return _DECIMAL_ROUNDING[self]
        except KeyError:
            raise ValueError(f"No decimal module equivalent for {self.value}") from None


_DECIMAL_ROUNDING: dict[RoundingPolicy, str] = {
    RoundingPolicy.UP: decimal.ROUND_UP,
    RoundingPolicy.DOWN: decimal.ROUND_DOWN,
    RoundingPolicy.CEILING: decimal.ROUND_CEILING,
    RoundingPolicy.FLOOR: decimal.ROUND_FLOOR,
    RoundingPolicy.HALF_UP: decimal.ROUND_HALF_UP,
    RoundingPolicy.HALF_DOWN: decimal.ROUND_HALF_DOWN,
    RoundingPolicy.HALF_EVEN: decimal.ROUND_HALF_EVEN,
}


def round_quotient(
    numerator: BigInteger | int,
    denominator: BigInteger | int,
    policy: RoundingPolicy,
) -> BigInteger:
    """
    Round the exact rational ``numerator / denominator`` to an integer.

    Preconditions:
        - policy is a RoundingPolicy.

    Postconditions:
        - Returns the truncated quotient when the division is exact.
        - Otherwise returns the truncated quotient or its neighbour one step
          further from zero, as selected by the policy.

    Raises:
        DivisionByZeroError: If denominator is zero.
        RoundingNecessaryError: If policy is UNNECESSARY and the division
            leaves a remainder.
    """
    policy = RoundingPolicy.from_name(policy)
    num = BigInteger.of(numerator)
    den = BigInteger.of(denominator)
    if den.is_zero:
        raise DivisionByZeroError(str(num))
    if den.is_negative:
        num, den = num.negate(), den.negate()

    quotient, remainder = num.divide_with_remainder(den)
    if remainder.is_zero:
        return quotient

    # With a positive denominator the sign of the exact result is the sign
    # of the numerator, and "away from zero" is quotient + sign.
    sign = num.signum
    away = quotient.add(sign)

    if policy is RoundingPolicy.UNNECESSARY:
        raise RoundingNecessaryError(f"{num}/{den}")
    if policy is RoundingPolicy.UP:
        return away
    if policy is RoundingPolicy.DOWN:
        return quotient
    if policy is RoundingPolicy.CEILING:
        return away if sign > 0 else quotient
    if policy is RoundingPolicy.FLOOR:
        return away if sign < 0 else quotient

    # Nearest: compare twice the remainder with the denominator.
    half = remainder.abs().multiply(2).compare(den)
    if half > 0:
        return away
    if half < 0:
        return quotient

    # Exact tie
    match policy:
        case RoundingPolicy.HALF_UP:
            return away
        case RoundingPolicy.HALF_DOWN:
            return quotient
        case RoundingPolicy.HALF_CEILING:
            return away if sign > 0 else quotient
        case RoundingPolicy.HALF_FLOOR:
            return away if sign < 0 else quotient
        case RoundingPolicy.HALF_EVEN:
            return quotient if quotient.is_even else away
        case _:
            raise ValueError(f"Unhandled rounding policy: {policy}")
