from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import TypeAlias

from monetary.errors import InvalidNumberError, MissingArgumentError

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise, so `0.1` becomes
    `Decimal("0.1")` and not the binary expansion of the float. NaN and infinities are
    passed through; use `check_finite` to reject them.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        MissingArgumentError: If $value is None.
        InvalidNumberError: If $value cannot be interpreted as a number.
    """
    if value is None:
        raise MissingArgumentError("number")

    if isinstance(value, Decimal):
        return value

    # Raise: bool is an int subclass, but never a meaningful monetary number
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise InvalidNumberError(value, f"unsupported type '{type(value).__name__}'")

    try:
        return Decimal(str(value).strip())
    except InvalidOperation as e:
        raise InvalidNumberError(value, "cannot be converted to Decimal") from e


def check_finite(value: DecimalLike) -> Decimal:
    """Converts $value to `Decimal` and rejects NaN and infinities.

    Returns:
        The finite `Decimal` value.

    Raises:
        InvalidNumberError: If $value is NaN or infinite.
    """
    decimal_value = as_decimal(value)
    if decimal_value.is_nan():
        raise InvalidNumberError(value, "NaN")
    if decimal_value.is_infinite():
        raise InvalidNumberError(value, "infinity")
    return decimal_value


def is_infinite_and_not_nan(value: DecimalLike) -> bool:
    """Returns True if $value is +/- infinity.

    Used by division-like operations where an infinite divisor is an absorbing case that
    yields zero.

    Raises:
        InvalidNumberError: If $value is NaN.
    """
    decimal_value = as_decimal(value)
    if decimal_value.is_nan():
        raise InvalidNumberError(value, "NaN")
    return decimal_value.is_infinite()


# Note: No 'as_float' or 'as_int' functions are provided.
# Use the Python builtin functions like `float()`, `int()` directly for efficient conversion
