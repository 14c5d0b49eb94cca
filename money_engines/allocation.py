"""
Module: money_engines.allocation
Responsibility:
    Split a Money or BigDecimal total into parts by integer ratios using the
    largest-remainder method, so that no smallest unit is lost or
    duplicated.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import money_kernel.

Invariants enforced:
    - Conservation: the parts always sum exactly to the total, for any
      positive ratio sequence and any total, negative totals included.
    - Determinism: leftover units go to the largest fractional remainders,
      ties broken by ascending index, so replays yield identical parts.
    - Order: part i corresponds to ratio i.
    - Currency: every Money part carries the total's currency.

Failure modes:
    - InvalidPartitionError on an empty ratio sequence, a non-positive
      ratio, or a non-integer ratio.
    - RoundingNecessaryError if a caller scale narrower than the total's
      scale would drop digits. For Money totals a requested scale below the
      currency's decimal places is raised to them.
    - TypeError if the total is not Money or a BigDecimal-coercible number.

Usage:
    from money_engines.allocation import AllocationEngine
    from money_kernel.domain.money import Money

    engine = AllocationEngine()
    parts = engine.allocate(Money.of("10.00", "USD"), [1, 1, 1])
    # (Money('3.34', 'USD'), Money('3.33', 'USD'), Money('3.33', 'USD'))
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from money_engines.tracer import traced_engine
from money_kernel.domain.big_decimal import BigDecimal
from money_kernel.domain.big_integer import BigInteger
from money_kernel.domain.money import Money
from money_kernel.exceptions import InvalidPartitionError
from money_kernel.logging_config import get_logger

logger = get_logger("engines.allocation")

Total = Money | BigDecimal | BigInteger | int | str | Decimal


def _floor_divmod(numerator: BigInteger, denominator: BigInteger) -> tuple[BigInteger, BigInteger]:
    """Floor quotient and non-negative remainder for a positive denominator."""
    quotient, remainder = numerator.divide_with_remainder(denominator)
    if remainder.is_negative:
        quotient = quotient.subtract(1)
        remainder = remainder.add(denominator)
    return quotient, remainder


def _validate_ratios(ratios: Sequence[int]) -> list[int]:
    ratio_list = list(ratios)
    if not ratio_list:
        raise InvalidPartitionError(ratio_list, "at least one ratio is required")
    for ratio in ratio_list:
        if isinstance(ratio, bool) or not isinstance(ratio, int):
            raise InvalidPartitionError(ratio_list, f"ratio {ratio!r} is not an integer")
        if ratio <= 0:
            raise InvalidPartitionError(ratio_list, f"ratio {ratio} is not positive")
    return ratio_list


class AllocationEngine:
    """
    Allocate totals across parts by integer ratios.

    Contract:
        Pure functions, no I/O. Works on the total's smallest-unit count at
        the working scale: the Money's (or BigDecimal's) own scale, the
        ``scale`` argument, or the engine's configured default scale. For a
        Money total the working scale is never below the currency's
        decimal places, so a default of 0 leaves USD at 2.
    Guarantees:
        - sum(parts) == total, exactly.
        - Each part differs from its exact rational share by less than one
          smallest unit.
    Non-goals:
        - Does not cap parts at per-target eligible amounts.
        - Does not pick ratios; callers supply them.
    """

    def __init__(self, default_scale: int | None = None):
        if default_scale is not None and (
            isinstance(default_scale, bool) or not isinstance(default_scale, int) or default_scale < 0
        ):
            raise ValueError(f"default_scale must be a non-negative int: {default_scale!r}")
        self._default_scale = default_scale

    @property
    def default_scale(self) -> int | None:
        return self._default_scale

    @traced_engine("allocation", "1.0", fingerprint_fields=("total", "ratios", "scale"))
    def allocate(
        self,
        total: Total,
        ratios: Sequence[int],
        *,
        scale: int | None = None,
    ) -> tuple[Money, ...] | tuple[BigDecimal, ...]:
        """
        Split ``total`` into ``len(ratios)`` parts proportional to ``ratios``.

        Preconditions:
            - ratios is a non-empty sequence of positive ints.
        Postconditions:
            - Returns a tuple, one part per ratio, in ratio order.
            - Parts are Money when total is Money, BigDecimal otherwise.
            - The parts sum exactly to total.
        Raises:
            InvalidPartitionError: On an empty or non-positive ratio set.
            RoundingNecessaryError: If ``scale`` would drop digits of total.
        """
        return self._allocate(total, _validate_ratios(ratios), scale)

    @traced_engine("allocation", "1.0", fingerprint_fields=("total", "count", "scale"))
    def allocate_equal(
        self,
        total: Total,
        count: int,
        *,
        scale: int | None = None,
    ) -> tuple[Money, ...] | tuple[BigDecimal, ...]:
        """Split ``total`` into ``count`` parts that differ by at most one unit."""
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise InvalidPartitionError([count], "count must be a positive integer")
        return self._allocate(total, [1] * count, scale)

    def _allocate(
        self,
        total: Total,
        ratios: list[int],
        scale: int | None,
    ) -> tuple[Money, ...] | tuple[BigDecimal, ...]:
        """Largest-remainder allocation on signed smallest-unit counts."""
        if scale is None:
            scale = self._default_scale

        if isinstance(total, Money):
            if scale is not None:
                # Money never goes below its currency's canonical scale.
                scale = max(scale, total.currency.decimal_places)
            working = total if scale is None else total.to_scale(scale)
            amount = working.amount
        else:
            amount = BigDecimal.of(total)
            if scale is not None:
                amount = amount.to_scale(scale)

        logger.info("allocation_started", extra={
            "total": str(total),
            "scale": amount.scale,
            "part_count": len(ratios),
        })

        units = amount.unscaled
        denominator = BigInteger(sum(ratios))

        shares: list[BigInteger] = []
        remainders: list[BigInteger] = []
        for ratio in ratios:
            share, remainder = _floor_divmod(units.multiply(ratio), denominator)
            shares.append(share)
            remainders.append(remainder)

        # Floor shares never overshoot, so 0 <= leftover < len(ratios).
        leftover = int(units.subtract(sum(shares, BigInteger.zero())))
        order = sorted(range(len(ratios)), key=lambda i: (-int(remainders[i]), i))
        for index in order[:leftover]:
            shares[index] = shares[index].add(1)

        parts_amounts = [BigDecimal(share, amount.scale) for share in shares]

        allocated = sum(parts_amounts, BigDecimal.zero())
        # INVARIANT: conservation -- parts sum exactly to the total
        assert allocated.is_equal_to(amount), (
            f"Allocation conservation violated: {allocated} != {amount}"
        )

        logger.info("allocation_completed", extra={
            "total": str(total),
            "part_count": len(parts_amounts),
            "leftover_units": leftover,
            "parts": [str(part) for part in parts_amounts],
        })

        if isinstance(total, Money):
            return tuple(Money(part, total.currency) for part in parts_amounts)
        return tuple(parts_amounts)
