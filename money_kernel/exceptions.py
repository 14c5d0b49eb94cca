"""
Typed Exception Hierarchy for the Money Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of an arithmetic core must be able to tell "the input text was
garbage" apart from "the division is not exact" apart from "you tried to add
dollars to euros" without parsing messages. Every error therefore:

  1. Has its own exception class (catch by type, not message)
  2. Carries a ``code`` class attribute (machine-readable, API-safe)
  3. Stores its context as attributes (not just a message string)

Example:
    try:
        total = invoice.plus(refund)
    except CurrencyMismatchError as e:
        api_response(code=e.code, expected=e.expected, received=e.received)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    MoneyKernelError (base)
    |
    +-- NumberError
    |   +-- NumberFormatError
    |   +-- DivisionByZeroError
    |   +-- RoundingNecessaryError
    |
    +-- CurrencyError
    |   +-- UnknownCurrencyError
    |   +-- CurrencyMismatchError
    |
    +-- AllocationError
        +-- InvalidPartitionError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                 | When Raised
----------------|----------------------|------------------------------------------
Number          | NUMBER_FORMAT        | Malformed decimal / integer text
                | DIVISION_BY_ZERO     | Divisor is zero
                | ROUNDING_NECESSARY   | Inexact result under UNNECESSARY policy
----------------|----------------------|------------------------------------------
Currency        | UNKNOWN_CURRENCY     | Code not in the currency table
                | CURRENCY_MISMATCH    | Binary Money operation across currencies
----------------|----------------------|------------------------------------------
Allocation      | INVALID_PARTITION    | Empty ratio list or non-positive ratio

There is no overflow error: integers are unbounded.

Programming errors (a float handed to a constructor, a negative scale) are
raised as the built-in TypeError / ValueError. Domain errors inherit from
Exception only, so they can be caught as a group without also catching
programming mistakes.
"""


class MoneyKernelError(Exception):
    """
    Base exception for all money kernel errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "MONEY_KERNEL_ERROR"


# Number-related exceptions


class NumberError(MoneyKernelError):
    """Base exception for numeric errors."""

    code: str = "NUMBER_ERROR"


class NumberFormatError(NumberError):
    """Text could not be parsed as a number."""

    code: str = "NUMBER_FORMAT"

    def __init__(self, text: str, reason: str = "not a valid number"):
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot parse {text!r}: {reason}")


class DivisionByZeroError(NumberError):
    """Divisor is zero."""

    code: str = "DIVISION_BY_ZERO"

    def __init__(self, dividend: str):
        self.dividend = dividend
        super().__init__(f"Division by zero (dividend {dividend})")


class RoundingNecessaryError(NumberError):
    """
    Result cannot be represented exactly at the requested scale.

    Raised only when the UNNECESSARY rounding policy is in effect: the caller
    asserted the operation was exact and it was not.
    """

    code: str = "ROUNDING_NECESSARY"

    def __init__(self, value: str, scale: int | None = None):
        self.value = value
        self.scale = scale
        if scale is None:
            message = f"Rounding necessary to represent {value}"
        else:
            message = f"Rounding necessary to represent {value} at scale {scale}"
        super().__init__(message)


# Currency-related exceptions


class CurrencyError(MoneyKernelError):
    """Base exception for currency-related errors."""

    code: str = "CURRENCY_ERROR"


class UnknownCurrencyError(CurrencyError):
    """Currency code is not in the currency table."""

    code: str = "UNKNOWN_CURRENCY"

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Unknown currency code: {currency!r}")


class CurrencyMismatchError(CurrencyError):
    """Binary Money operation attempted across different currencies."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, expected: str, received: str, operation: str = ""):
        self.expected = expected
        self.received = received
        self.operation = operation
        prefix = f"Cannot {operation} Money with different currencies" if operation else "Currency mismatch"
        super().__init__(f"{prefix}: {expected} vs {received}")


# Allocation-related exceptions


class AllocationError(MoneyKernelError):
    """Base exception for allocation errors."""

    code: str = "ALLOCATION_ERROR"


class InvalidPartitionError(AllocationError):
    """Ratio set cannot be used to partition an amount."""

    code: str = "INVALID_PARTITION"

    def __init__(self, ratios: list, reason: str):
        self.ratios = ratios
        self.reason = reason
        super().__init__(f"Invalid partition {ratios!r}: {reason}")
