"""Argument checks and error translation shared by all amount representations."""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow
from typing import Any, Iterator

from monetary.domain.amount.protocol import MonetaryAmount
from monetary.domain.context.monetary_context import MonetaryContext
from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.errors import (
    ArithmeticOverflowError,
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidConfigurationError,
    MissingArgumentError,
    PrecisionLossError,
)
from monetary.utils.decimal_tools import decimal_precision, decimal_scale, exact_context, set_scale, strip_trailing_zeros


def require_amount_of_type(amount: Any, amount_type: type, operation: str) -> None:
    """Checks that $amount is an instance of $amount_type.

    Raises:
        MissingArgumentError: If $amount is None.
        TypeError: If $amount is another representation; convert it first.
    """
    if amount is None:
        raise MissingArgumentError("amount", operation)
    if not isinstance(amount, amount_type):
        raise TypeError(f"Cannot call `{operation}` because $amount must be `{amount_type.__name__}`, but provided value is `{type(amount).__name__}`: {amount}; convert it first")


def require_amount(amount: Any, operation: str) -> None:
    """Checks that $amount is any monetary amount."""
    if amount is None:
        raise MissingArgumentError("amount", operation)
    if not isinstance(amount, MonetaryAmount):
        raise TypeError(f"Cannot call `{operation}` because $amount must be a monetary amount, but provided value is: {amount!r}")


def require_same_currency(currency: CurrencyUnit, amount: MonetaryAmount, operation: str) -> None:
    """Raises CurrencyMismatchError if $amount is not in $currency."""
    if amount.currency != currency:
        raise CurrencyMismatchError(currency, amount.currency, operation)


@contextmanager
def decimal_errors(operation: str, value: Any = None) -> Iterator[None]:
    """Translates `decimal` signals raised inside the block into monetary errors.

    Raises:
        DivisionByZeroError: For `decimal.DivisionByZero`.
        PrecisionLossError: For `decimal.Inexact` (contexts with RoundingMode.UNNECESSARY).
        ArithmeticOverflowError: For `decimal.Overflow` and `decimal.InvalidOperation`
            (e.g. an integral quotient needing more digits than the precision).
    """
    try:
        yield
    except DivisionByZero as e:
        raise DivisionByZeroError(value) from e
    except (Overflow, InvalidOperation) as e:
        raise ArithmeticOverflowError(f"Cannot call `{operation}` because the result exceeds the capabilities of the context", value) from e
    except Inexact as e:
        raise PrecisionLossError(value, reason=f"`{operation}` requires rounding, but the rounding mode is UNNECESSARY") from e


# region Context fitting


def check_number_fits(number: Decimal, context: MonetaryContext, operation: str = "of") -> Decimal:
    """Validates a factory input against $context and pads it to a fixed scale.

    Args:
        number: Finite input value.
        context: Context of the amount to be created.
        operation: Name of the calling operation, used in error messages.

    Returns:
        $number, padded to `context.max_scale` when the context has a fixed scale.

    Raises:
        ArithmeticOverflowError: If $number has more significant digits than the precision.
        PrecisionLossError: If $number has more fractional digits than a bounded max scale.
    """
    stripped = strip_trailing_zeros(number)

    # Raise: value must fit into the precision of the context
    if not context.is_unlimited_precision and decimal_precision(stripped) > context.precision:
        raise ArithmeticOverflowError(f"Cannot call `{operation}` because $number ({number}) has more than {context.precision} significant digits", number)

    # Raise: value must not need rounding to fit into a bounded scale
    if not context.is_unlimited_scale and decimal_scale(stripped) > context.max_scale:
        raise PrecisionLossError(number, context.max_scale)

    if context.fixed_scale and decimal_scale(number) != context.max_scale:
        with decimal_errors(operation, number):
            return set_scale(stripped, context.max_scale, context.rounding_mode.decimal_rounding)
    return number


def fit_to_context(number: Decimal, context: MonetaryContext, operation: str) -> Decimal:
    """Rounds an arithmetic result to the precision and scale limits of $context.

    Raises:
        ArithmeticOverflowError: If the result cannot be represented at all.
        PrecisionLossError: If rounding is needed, but the rounding mode is UNNECESSARY.
    """
    decimal_context = context.to_decimal_context()
    with decimal_errors(operation, number):
        result = decimal_context.plus(number)
        if context.is_unlimited_scale:
            return result
        scale = decimal_scale(result)
        if scale > context.max_scale or (context.fixed_scale and scale < context.max_scale):
            result = result.quantize(Decimal(1).scaleb(-context.max_scale), context=decimal_context)
        return result


def number_from_minor(currency: CurrencyUnit, minor_units: int, fraction_digits: int | None, operation: str = "of_minor") -> Decimal:
    """Converts an amount in minor units (e.g. cents) into its decimal value.

    Args:
        currency: Currency of the amount; supplies the default $fraction_digits.
        minor_units: Integral amount in minor units.
        fraction_digits: Digits of the minor unit; None uses the currency default.

    Raises:
        MissingArgumentError: If $minor_units is None.
        InvalidConfigurationError: If the fraction digits are negative.
    """
    if minor_units is None:
        raise MissingArgumentError("minor_units", operation)
    if isinstance(minor_units, bool) or not isinstance(minor_units, int):
        raise TypeError(f"Cannot call `{operation}` because $minor_units must be an int, but provided value is: {minor_units!r}")

    digits = currency.default_fraction_digits if fraction_digits is None else fraction_digits
    # Raise: pseudo currencies have no minor unit unless digits are given explicitly
    if digits < 0:
        raise InvalidConfigurationError(f"Cannot call `{operation}` because fraction digits must be >= 0, but resolved value for {currency} is: {digits}")
    return Decimal(minor_units).scaleb(-digits, exact_context())


# endregion

# region Comparison


def compare_numbers(amount: MonetaryAmount, other: Any, operation: str) -> int:
    """Compares two same-currency amounts of any representation; returns -1, 0 or 1."""
    require_amount(other, operation)
    require_same_currency(amount.currency, other, operation)
    return _sign(amount.number, other.number)


def compare_total(amount: MonetaryAmount, other: Any) -> int:
    """Total order by currency code, then numeric value; returns -1, 0 or 1."""
    require_amount(other, "compare_to")
    if amount.currency != other.currency:
        return -1 if amount.currency.code < other.currency.code else 1
    return _sign(amount.number, other.number)


def _sign(left: Decimal, right: Decimal) -> int:
    if left < right:
        return -1
    return 1 if left > right else 0


# endregion
