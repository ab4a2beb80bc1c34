"""Error taxonomy for monetary arithmetic.

Every error raised by this package derives from `MonetaryError` and also from the
closest builtin exception, so callers can catch either the precise class or the
familiar builtin (`ValueError`, `ArithmeticError`, ...).

`ErrorKind.is_programmer_error` separates misuse (missing argument, malformed
configuration) from expected numeric conditions (overflow, precision loss, ...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from monetary.domain.currency.currency_unit import CurrencyUnit


class ErrorKind(Enum):
    """Kinds of failures reported by monetary operations."""

    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    ARITHMETIC_OVERFLOW = "ARITHMETIC_OVERFLOW"
    INVALID_NUMBER = "INVALID_NUMBER"
    PRECISION_LOSS = "PRECISION_LOSS"
    UNKNOWN_CURRENCY = "UNKNOWN_CURRENCY"
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"

    @property
    def is_programmer_error(self) -> bool:
        """True for kinds that indicate a bug in calling code rather than a numeric limit."""
        return self in (ErrorKind.MISSING_ARGUMENT, ErrorKind.INVALID_CONFIGURATION)


class MonetaryError(Exception):
    """Base class of all errors raised by this package."""

    kind: ErrorKind


class CurrencyMismatchError(MonetaryError, ValueError):
    """Raised when two amounts with different currencies are combined or compared."""

    kind = ErrorKind.CURRENCY_MISMATCH

    def __init__(self, expected: CurrencyUnit, actual: CurrencyUnit, operation: str | None = None):
        self.expected = expected
        self.actual = actual
        self.operation = operation

        message = f"Currency mismatch: {expected}/{actual}"
        if operation:
            message = f"Cannot call `{operation}` because of currency mismatch: {expected}/{actual}"
        super().__init__(message)


class ArithmeticOverflowError(MonetaryError, ArithmeticError):
    """Raised when a result cannot be held by the representation or its context."""

    kind = ErrorKind.ARITHMETIC_OVERFLOW

    def __init__(self, message: str, value: Any = None):
        self.value = value
        super().__init__(message)


class DivisionByZeroError(ArithmeticOverflowError, ZeroDivisionError):
    """Raised when an amount is divided by zero."""

    def __init__(self, dividend: Any = None):
        super().__init__(f"Cannot divide {dividend} by zero", dividend)


class InvalidNumberError(MonetaryError, ValueError):
    """Raised for NaN, (non-absorbing) infinite or unparsable numeric operands."""

    kind = ErrorKind.INVALID_NUMBER

    def __init__(self, value: Any, reason: str | None = None):
        self.value = value
        message = f"Not a valid number for monetary operations: {value!r}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


class PrecisionLossError(MonetaryError, ArithmeticError):
    """Raised when a value has more fractional digits than a representation may hold."""

    kind = ErrorKind.PRECISION_LOSS

    def __init__(self, value: Any, max_scale: int | None = None, reason: str | None = None):
        self.value = value
        self.max_scale = max_scale
        if reason is None:
            reason = f"scale > {max_scale}"
        super().__init__(f"{value} can not be represented without rounding, {reason}")


class UnknownCurrencyError(MonetaryError, LookupError):
    """Raised when a currency code cannot be resolved."""

    kind = ErrorKind.UNKNOWN_CURRENCY

    def __init__(self, code: Any, available: list[str] | None = None):
        self.code = code
        message = f"Currency with code '{code}' not found in registry"
        if available is not None:
            message += f". Available currencies: {available}"
        super().__init__(message)


class MissingArgumentError(MonetaryError, TypeError):
    """Raised when a required argument is None."""

    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, argument: str, operation: str | None = None):
        self.argument = argument
        if operation:
            message = f"Cannot call `{operation}` because ${argument} is required, but None was provided"
        else:
            message = f"${argument} is required, but None was provided"
        super().__init__(message)


class InvalidConfigurationError(MonetaryError, ValueError):
    """Raised for malformed contexts, rounding operators or builder state."""

    kind = ErrorKind.INVALID_CONFIGURATION
