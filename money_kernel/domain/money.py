"""
Money -- Immutable currency-aware amount value object.

Responsibility:
    Pairs a BigDecimal amount with a Currency so the two are never
    separated, and refuses every binary operation across currencies.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Depends on big_decimal, rounding and currency.

Invariants enforced:
    - Every binary Money operation (plus, minus, comparisons) requires both
      operands to share a currency code; otherwise CurrencyMismatchError.
    - amount.scale is the currency's canonical scale unless the caller
      explicitly asked for a wider one; it is never narrower.
    - Money + Money is exact at the wider scale. Every other operation keeps
      this Money's scale; anything that would produce extra digits is
      rounded with an explicit policy (UNNECESSARY by default).
    - The default policy used by Money.of lives in a MoneyContext, so it is
      configurable instead of hard-coded.

Failure modes:
    - CurrencyMismatchError on cross-currency operations.
    - UnknownCurrencyError on unregistered codes.
    - NumberFormatError on malformed amount text.
    - RoundingNecessaryError when a result does not fit the scale exactly
      under UNNECESSARY.
    - DivisionByZeroError on division by zero.
    - TypeError for float amounts or factors.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from money_kernel.domain.big_decimal import BigDecimal
from money_kernel.domain.big_integer import BigInteger
from money_kernel.domain.currency import Currency
from money_kernel.domain.rounding import RoundingPolicy
from money_kernel.exceptions import CurrencyMismatchError, NumberFormatError

Number = BigDecimal | BigInteger | int | str | Decimal


@dataclass(frozen=True, slots=True)
class MoneyContext:
    """
    Defaults applied when constructing Money from arbitrary-precision input.

    HALF_DOWN (an exact midpoint rounds toward zero) is the out-of-the-box
    policy; money_config can supply another one.
    """

    default_rounding: RoundingPolicy = RoundingPolicy.HALF_DOWN

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_rounding", RoundingPolicy.from_name(self.default_rounding))


DEFAULT_CONTEXT = MoneyContext()


@dataclass(frozen=True, slots=True)
class Money:
    """
    Monetary amount value object.

    Contract:
        Pairs a BigDecimal amount with its Currency. Arithmetic never mixes
        currencies and never silently drops digits.

    Guarantees:
        - Immutable and hashable (frozen dataclass with slots)
        - amount.scale >= currency.decimal_places
        - ``==`` is structural: same currency, same amount digits, same scale

    Non-goals:
        - Does NOT perform currency conversion
        - Does NOT format for display (locale-aware formatting is a
          collaborating layer's job)
    """

    amount: BigDecimal
    currency: Currency

    def __post_init__(self) -> None:
        currency = Currency.of(self.currency)
        object.__setattr__(self, "currency", currency)
        if not isinstance(self.amount, BigDecimal):
            object.__setattr__(self, "amount", BigDecimal.of(self.amount))
        if self.amount.scale < currency.decimal_places:
            # Padding is exact; narrower-than-canonical amounts never exist.
            object.__setattr__(self, "amount", self.amount.to_scale(currency.decimal_places))

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def of(
        cls,
        amount: Number,
        currency: Currency | str,
        rounding: RoundingPolicy | None = None,
        *,
        scale: int | None = None,
        context: MoneyContext = DEFAULT_CONTEXT,
    ) -> Money:
        """
        Create Money rounded or padded to the currency's canonical scale.

        Preconditions:
            - amount is decimal text, int, BigDecimal, BigInteger or Decimal
              (never float)
            - scale, when given, is >= the currency's decimal places

        Postconditions:
            - amount.scale == scale if given, else currency.decimal_places

        Raises:
            NumberFormatError: If amount text is malformed.
            UnknownCurrencyError: If the currency code is not registered.
            RoundingNecessaryError: If rounding is UNNECESSARY and the
                amount has more digits than the target scale.

        Args:
            amount: The monetary amount.
            currency: ISO 4217 code or Currency.
            rounding: Policy for amounts with excess digits; defaults to
                ``context.default_rounding``.
            scale: Explicitly widened scale.
            context: Source of the default rounding policy.
        """
        resolved = Currency.of(currency)
        target = resolved.decimal_places if scale is None else cls._check_scale(scale, resolved)
        policy = RoundingPolicy.from_name(rounding) if rounding is not None else context.default_rounding
        return cls(BigDecimal.of(amount).to_scale(target, policy), resolved)

    @classmethod
    def of_minor_units(cls, units: BigInteger | int, currency: Currency | str) -> Money:
        """
        Create Money from an integer count of the currency's smallest unit.

        Example:
            Money.of_minor_units(1050, "USD") -> 10.50 USD
            Money.of_minor_units(1050, "JPY") -> 1050 JPY
        """
        resolved = Currency.of(currency)
        return cls(BigDecimal(BigInteger.of(units), resolved.decimal_places), resolved)

    @classmethod
    def zero(cls, currency: Currency | str) -> Money:
        """Create a zero amount in the given currency."""
        resolved = Currency.of(currency)
        return cls(BigDecimal(BigInteger.zero(), resolved.decimal_places), resolved)

    @classmethod
    def total(cls, first: Money, *others: Money) -> Money:
        """Sum of one or more Money values of the same currency."""
        result = first
        for money in others:
            result = result.plus(money)
        return result

    @classmethod
    def parse(cls, text: str) -> Money:
        """
        Inverse of str(): ``"10.00 USD"`` -> Money. The stored scale is kept.

        Raises:
            NumberFormatError: If text is not ``<amount> <code>``.
            UnknownCurrencyError: If the code is not registered.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected str, got {type(text).__name__}")
        parts = text.split(" ")
        if len(parts) != 2:
            raise NumberFormatError(text, "expected '<amount> <currency code>'")
        amount, code = parts
        return cls(BigDecimal.parse(amount), Currency.of(code))

    @staticmethod
    def _check_scale(scale: int, currency: Currency) -> int:
        if isinstance(scale, bool) or not isinstance(scale, int):
            raise TypeError(f"scale must be an int, got {type(scale).__name__}")
        if scale < currency.decimal_places:
            raise ValueError(
                f"scale {scale} is narrower than {currency.code}'s "
                f"{currency.decimal_places} decimal places"
            )
        return scale

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_amount(self) -> BigDecimal:
        return self.amount

    def get_currency(self) -> str:
        return self.currency.code

    @property
    def currency_code(self) -> str:
        return self.currency.code

    @property
    def scale(self) -> int:
        return self.amount.scale

    @property
    def minor_units(self) -> int:
        """
        Amount as an integer count of the currency's smallest unit.

        Raises RoundingNecessaryError for a widened amount that is not a
        whole number of minor units.
        """
        return int(self.amount.to_scale(self.currency.decimal_places).unscaled)

    @property
    def is_zero(self) -> bool:
        return self.amount.is_zero

    @property
    def is_positive(self) -> bool:
        return self.amount.is_positive

    @property
    def is_negative(self) -> bool:
        return self.amount.is_negative

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _same_currency(self, other: Money, operation: str) -> None:
        if other.currency.code != self.currency.code:
            raise CurrencyMismatchError(self.currency.code, other.currency.code, operation)

    def _operand(self, other: Money | Number, operation: str) -> BigDecimal:
        if isinstance(other, Money):
            self._same_currency(other, operation)
            return other.amount
        return BigDecimal.of(other)

    def _rescaled(self, amount: BigDecimal, rounding: RoundingPolicy) -> Money:
        return Money(amount.to_scale(self.scale, rounding), self.currency)

    def _sum(self, other: Money | Number, result: BigDecimal, rounding: RoundingPolicy | None) -> Money:
        if isinstance(other, Money) and rounding is None:
            # Both scales are at least canonical, so max() is too.
            return Money(result, self.currency)
        return self._rescaled(result, rounding or RoundingPolicy.UNNECESSARY)

    def plus(
        self,
        other: Money | Number,
        rounding: RoundingPolicy | None = None,
    ) -> Money:
        """
        Add Money of the same currency, or a plain number.

        Money + Money is exact at the wider of the two scales. A plain number
        is added at this Money's scale (UNNECESSARY unless ``rounding`` is
        given); passing ``rounding`` also rescales a Money sum to this scale.
        """
        return self._sum(other, self.amount.plus(self._operand(other, "add")), rounding)

    def minus(
        self,
        other: Money | Number,
        rounding: RoundingPolicy | None = None,
    ) -> Money:
        """Subtract Money of the same currency, or a plain number; scale rules as plus."""
        return self._sum(other, self.amount.minus(self._operand(other, "subtract")), rounding)

    def multiplied_by(
        self,
        factor: Number,
        rounding: RoundingPolicy = RoundingPolicy.UNNECESSARY,
    ) -> Money:
        """Multiply by a scalar, rounding the product back to this scale."""
        if isinstance(factor, Money):
            raise TypeError("Cannot multiply Money by Money")
        return self._rescaled(self.amount.multiplied_by(factor), rounding)

    def divided_by(
        self,
        divisor: Number,
        rounding: RoundingPolicy = RoundingPolicy.UNNECESSARY,
    ) -> Money:
        """Divide by a scalar, rounding the quotient to this scale."""
        if isinstance(divisor, Money):
            raise TypeError("Cannot divide Money by Money")
        return Money(self.amount.divided_by(divisor, self.scale, rounding), self.currency)

    def to_scale(
        self,
        scale: int,
        rounding: RoundingPolicy = RoundingPolicy.UNNECESSARY,
    ) -> Money:
        """Rescale, never below the currency's canonical scale."""
        return Money(self.amount.to_scale(self._check_scale(scale, self.currency), rounding), self.currency)

    def negated(self) -> Money:
        return Money(self.amount.negated(), self.currency)

    def abs(self) -> Money:
        return Money(self.amount.abs(), self.currency)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare_to(self, other: Money) -> int:
        """Numeric three-way comparison; currencies must match."""
        if not isinstance(other, Money):
            raise TypeError(f"Cannot compare Money with {type(other).__name__}")
        self._same_currency(other, "compare")
        return self.amount.compare_to(other.amount)

    def is_equal_to(self, other: Money) -> bool:
        return self.compare_to(other) == 0

    def is_greater_than(self, other: Money) -> bool:
        return self.compare_to(other) > 0

    def is_greater_than_or_equal_to(self, other: Money) -> bool:
        return self.compare_to(other) >= 0

    def is_less_than(self, other: Money) -> bool:
        return self.compare_to(other) < 0

    def is_less_than_or_equal_to(self, other: Money) -> bool:
        return self.compare_to(other) <= 0

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: object) -> Money:
        """Add two Money values. Must be same currency."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.plus(other)

    def __sub__(self, other: object) -> Money:
        """Subtract two Money values. Must be same currency."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.minus(other)

    def __mul__(self, factor: object) -> Money:
        """Multiply by a scalar; the product must fit this scale exactly."""
        if isinstance(factor, (BigDecimal, BigInteger, Decimal)) or (
            isinstance(factor, int) and not isinstance(factor, bool)
        ):
            return self.multiplied_by(factor)
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> Money:
        return self.negated()

    def __abs__(self) -> Money:
        return self.abs()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        return f"{self.amount} {self.currency.code}"

    def __repr__(self) -> str:
        return f"Money({str(self.amount)!r}, {self.currency.code!r})"
