"""Ready-made operators for `amount.with_operator(...)`.

Every function returns a callable that maps an amount to an amount of the same
representation and currency:

    Money.of(200, "EUR").with_operator(percent(15))  # EUR 30
"""

from __future__ import annotations

from decimal import Decimal, ROUND_DOWN, ROUND_HALF_EVEN

from monetary.domain.amount.checks import require_amount
from monetary.domain.amount.protocol import MonetaryAmount, MonetaryOperator
from monetary.errors import DivisionByZeroError
from monetary.utils.decimal_tools import divide_to_scale, exact_context, ONE, set_scale
from monetary.utils.numeric_tools import check_finite, DecimalLike

# Reciprocal values get at least this many fraction digits
_RECIPROCAL_MIN_SCALE = 5


def percent(number: DecimalLike) -> MonetaryOperator:
    """Returns an operator taking $number percent of an amount (e.g. 3 -> 3 %)."""
    factor = check_finite(number).scaleb(-2, exact_context())

    def apply(amount: MonetaryAmount) -> MonetaryAmount:
        require_amount(amount, "percent")
        return amount.multiply(factor)

    return apply


def permil(number: DecimalLike) -> MonetaryOperator:
    """Returns an operator taking $number per mille of an amount (e.g. 3 -> 3 permil)."""
    factor = check_finite(number).scaleb(-3, exact_context())

    def apply(amount: MonetaryAmount) -> MonetaryAmount:
        require_amount(amount, "permil")
        return amount.multiply(factor)

    return apply


def reciprocal() -> MonetaryOperator:
    """Returns an operator computing 1 / amount.

    The result keeps the scale of the amount, but at least 5 fraction digits, rounded
    half-even.

    Raises:
        DivisionByZeroError: When applied to a zero amount.
    """

    def apply(amount: MonetaryAmount) -> MonetaryAmount:
        require_amount(amount, "reciprocal")
        number = amount.number
        if number.is_zero():
            raise DivisionByZeroError(ONE)
        scale = max(_RECIPROCAL_MIN_SCALE, -number.as_tuple().exponent)
        return amount.with_number(divide_to_scale(ONE, number, scale, ROUND_HALF_EVEN))

    return apply


def major_part() -> MonetaryOperator:
    """Returns an operator keeping only the whole units, e.g. EUR 2.35 -> EUR 2."""

    def apply(amount: MonetaryAmount) -> MonetaryAmount:
        require_amount(amount, "major_part")
        return amount.with_number(_wholes(amount.number))

    return apply


def minor_part() -> MonetaryOperator:
    """Returns an operator keeping only the fraction, e.g. EUR 2.35 -> EUR 0.35."""

    def apply(amount: MonetaryAmount) -> MonetaryAmount:
        require_amount(amount, "minor_part")
        return amount.subtract(amount.with_number(_wholes(amount.number)))

    return apply


def _wholes(number: Decimal) -> Decimal:
    return set_scale(number, 0, ROUND_DOWN)
