"""
Pure domain layer.

Immutable value objects and the arithmetic they need, with NO
dependencies on:
- Persistence
- Time/clock
- I/O

Every operation is deterministic: identical inputs give identical outputs.
"""

from money_kernel.domain.big_decimal import BigDecimal
from money_kernel.domain.big_integer import BigInteger
from money_kernel.domain.codec import (
    decode_decimal,
    decode_money,
    encode_decimal,
    encode_money,
)
from money_kernel.domain.currency import Currency, CurrencyRegistry
from money_kernel.domain.money import DEFAULT_CONTEXT, Money, MoneyContext
from money_kernel.domain.rounding import RoundingPolicy, round_quotient

__all__ = [
    # Numbers
    "BigInteger",
    "BigDecimal",
    "RoundingPolicy",
    "round_quotient",
    # Currency
    "Currency",
    "CurrencyRegistry",
    # Money
    "Money",
    "MoneyContext",
    "DEFAULT_CONTEXT",
    # Codec
    "encode_decimal",
    "decode_decimal",
    "encode_money",
    "decode_money",
]
