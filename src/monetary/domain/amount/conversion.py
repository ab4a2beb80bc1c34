"""Explicit conversions between the amount representations.

A conversion reads the source's `number` and `currency` and re-validates them against
the destination, so converting to `FastMoney` can fail with `PrecisionLossError` (more
than 5 fraction digits) or `ArithmeticOverflowError` (outside the 64-bit range).
"""

from __future__ import annotations

from monetary.domain.amount.fast_money import FastMoney
from monetary.domain.amount.money import Money
from monetary.domain.amount.protocol import MonetaryAmount
from monetary.domain.amount.rounded_money import RoundedMoney
from monetary.domain.context.monetary_context import AmountKind, MonetaryContext
from monetary.domain.rounding.rounding_operator import RoundingOperator
from monetary.errors import MissingArgumentError


def to_money(amount: MonetaryAmount, context: MonetaryContext | None = None) -> Money:
    return Money.from_amount(amount, context)


def to_fast_money(amount: MonetaryAmount) -> FastMoney:
    return FastMoney.from_amount(amount)


def to_rounded_money(amount: MonetaryAmount, context: MonetaryContext | None = None, rounding: RoundingOperator | None = None) -> RoundedMoney:
    return RoundedMoney.from_amount(amount, context, rounding)


def convert(amount: MonetaryAmount, kind: AmountKind) -> MonetaryAmount:
    """Converts $amount to the representation named by $kind.

    Returns $amount itself when it already is of that representation.
    """
    if kind is None:
        raise MissingArgumentError("kind", "convert")

    match kind:
        case AmountKind.MONEY:
            return to_money(amount)
        case AmountKind.FAST_MONEY:
            return to_fast_money(amount)
        case AmountKind.ROUNDED_MONEY:
            return to_rounded_money(amount)
        case _:
            raise ValueError(f"Unsupported $kind: {kind}")
