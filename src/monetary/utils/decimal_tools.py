"""Helpers for exact `Decimal` arithmetic.

The `decimal` module always works inside a context that bounds precision. The functions
here build explicit contexts instead of relying on the thread-local one, so results never
depend on whatever `getcontext()` happens to hold in the calling thread.
"""

from __future__ import annotations

from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Inexact,
    InvalidOperation,
    Overflow,
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_05UP,
    ROUND_HALF_EVEN,
)

from monetary.errors import ArithmeticOverflowError

ZERO = Decimal(0)
ONE = Decimal(1)

_TRAPS = [InvalidOperation, DivisionByZero, Overflow]


def decimal_context(precision: int, rounding: str = ROUND_HALF_EVEN) -> Context:
    """Creates a fresh context with $precision significant digits (0 = exact)."""
    if precision <= 0:
        return exact_context(rounding)
    return Context(prec=precision, rounding=rounding, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=list(_TRAPS))


def exact_context(rounding: str = ROUND_HALF_EVEN) -> Context:
    """Creates a context for exact addition, subtraction, multiplication and integer division.

    Never use it for `divide`: a non-terminating quotient would try to allocate MAX_PREC
    digits. Use `exact_quotient` instead.
    """
    return Context(prec=MAX_PREC, rounding=rounding, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=list(_TRAPS))


def decimal_precision(value: Decimal) -> int:
    """Returns the number of significant digits of $value (1 for any zero)."""
    return len(value.as_tuple().digits)


def decimal_scale(value: Decimal) -> int:
    """Returns the number of digits right of the decimal point (negative for e.g. `1E+3`)."""
    return -value.as_tuple().exponent


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """Removes trailing zeros; any zero becomes canonical `Decimal(0)` with scale 0."""
    if value.is_zero():
        return ZERO
    return value.normalize(Context(prec=decimal_precision(value), Emax=MAX_EMAX, Emin=MIN_EMIN))


def unsigned_zero(value: Decimal) -> Decimal:
    """Replaces a negative zero by the unsigned zero of the same scale (-0.00 -> 0.00)."""
    if value.is_zero() and value.is_signed():
        return value.copy_abs()
    return value


def to_plain_string(value: Decimal) -> str:
    """Formats $value without exponent and without thousands separators."""
    return f"{value:f}"


def exact_quotient(dividend: Decimal, divisor: Decimal) -> Decimal:
    """Divides exactly or raises when the quotient has no finite decimal expansion.

    For a terminating quotient the number of significant digits is bounded by the digits of
    the dividend plus roughly 2.33 digits per digit of the divisor, so the working precision
    below is always sufficient.

    Raises:
        ArithmeticOverflowError: If the quotient does not terminate.
    """
    precision = decimal_precision(dividend) + 3 * decimal_precision(divisor) + 2
    context = Context(prec=precision, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=list(_TRAPS) + [Inexact])
    try:
        return context.divide(dividend, divisor)
    except Inexact as e:
        raise ArithmeticOverflowError(f"Non-terminating decimal expansion of {dividend} / {divisor}; no exact representable decimal result", dividend) from e


def divide_to_scale(dividend: Decimal, divisor: Decimal, scale: int, rounding: str) -> Decimal:
    """Divides and rounds the quotient once, directly to $scale fractional digits.

    The quotient is first computed with guard digits using ROUND_05UP, which keeps the
    information needed for a correct second rounding to the target scale.
    """
    integer_digits = dividend.adjusted() - divisor.adjusted() + 1
    precision = max(1, integer_digits + scale + 1) + 2
    guarded = Context(prec=precision, rounding=ROUND_05UP, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=list(_TRAPS)).divide(dividend, divisor)
    return guarded.quantize(Decimal(1).scaleb(-scale), rounding=rounding, context=exact_context(rounding))


def set_scale(value: Decimal, scale: int, rounding: str) -> Decimal:
    """Rounds (or pads) $value to exactly $scale fractional digits."""
    return value.quantize(Decimal(1).scaleb(-scale), rounding=rounding, context=exact_context(rounding))


def round_to_precision(value: Decimal, precision: int, rounding: str) -> Decimal:
    """Rounds $value to $precision significant digits; 0 means no rounding."""
    if precision <= 0:
        return value
    return Context(prec=precision, rounding=rounding, Emax=MAX_EMAX, Emin=MIN_EMIN, traps=list(_TRAPS)).plus(value)
