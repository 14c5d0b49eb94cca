"""
Codec -- Text mapping functions for the storage / transport boundary.

Persistence and API layers never do arithmetic and never hold floats: they
store the canonical text produced here and decode it back on the way in.
The encoded form is exactly ``str()`` of the value, so it keeps the scale
(``"10.50 USD"``, ``"3.000"``), and decoding never rounds.
"""

from __future__ import annotations

from money_kernel.domain.big_decimal import BigDecimal
from money_kernel.domain.money import Money


def encode_decimal(value: BigDecimal) -> str:
    if not isinstance(value, BigDecimal):
        raise TypeError(f"Expected BigDecimal, got {type(value).__name__}")
    return str(value)


def decode_decimal(text: str) -> BigDecimal:
    """Raises NumberFormatError on malformed text."""
    return BigDecimal.parse(text)


def encode_money(value: Money) -> str:
    if not isinstance(value, Money):
        raise TypeError(f"Expected Money, got {type(value).__name__}")
    return str(value)


def decode_money(text: str) -> Money:
    """
    Decode ``"<amount> <CODE>"`` keeping the stored scale.

    Raises:
        NumberFormatError: If the text is malformed.
        UnknownCurrencyError: If the code is not registered.
    """
    return Money.parse(text)
