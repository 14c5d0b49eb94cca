"""
Money Kernel

Exact decimal arithmetic for monetary values:
- Arbitrary-precision integers and decimals, never floats
- Ten rounding policies with exact tie-break semantics
- Currency-aware Money that refuses to mix currencies
- Text codec for storage and transport boundaries
"""

from money_kernel.domain import (
    BigDecimal,
    BigInteger,
    Currency,
    CurrencyRegistry,
    Money,
    MoneyContext,
    RoundingPolicy,
)
from money_kernel.domain.money import DEFAULT_CONTEXT
from money_kernel.exceptions import (
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidPartitionError,
    MoneyKernelError,
    NumberFormatError,
    RoundingNecessaryError,
    UnknownCurrencyError,
)

__version__ = "0.1.0"


def parse_decimal(text: str) -> BigDecimal:
    """Parse decimal text, keeping its scale."""
    return BigDecimal.parse(text)


def money_of(
    text: str,
    currency_code: str,
    rounding: RoundingPolicy | None = None,
    context: MoneyContext = DEFAULT_CONTEXT,
) -> Money:
    """Parse an amount and round it to the currency's canonical scale."""
    return Money.of(text, currency_code, rounding, context=context)


def money_of_minor_units(units: int, currency_code: str) -> Money:
    """Exact Money from a count of the currency's smallest unit."""
    return Money.of_minor_units(units, currency_code)


__all__ = [
    "BigDecimal",
    "BigInteger",
    "Currency",
    "CurrencyRegistry",
    "Money",
    "MoneyContext",
    "RoundingPolicy",
    "parse_decimal",
    "money_of",
    "money_of_minor_units",
    "MoneyKernelError",
    "NumberFormatError",
    "DivisionByZeroError",
    "RoundingNecessaryError",
    "UnknownCurrencyError",
    "CurrencyMismatchError",
    "InvalidPartitionError",
]
