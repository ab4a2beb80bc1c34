from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from monetary.domain.amount.fast_money import FastMoney
from monetary.domain.amount.money import Money
from monetary.domain.amount.protocol import MonetaryAmount
from monetary.domain.amount.rounded_money import RoundedMoney
from monetary.domain.context.monetary_context import AmountKind, MonetaryContext
from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.errors import MissingArgumentError
from monetary.platform.context_resolution import get_default_context
from monetary.utils.numeric_tools import DecimalLike

_AMOUNT_TYPES: dict[AmountKind, type] = {
    AmountKind.MONEY: Money,
    AmountKind.FAST_MONEY: FastMoney,
    AmountKind.ROUNDED_MONEY: RoundedMoney,
}


@dataclass(frozen=True)
class AmountFactory:
    """Creates amounts of one representation, optionally with a preset context.

    Lets code choose the representation at runtime:

    Example:
        ```python
        factory = get_amount_factory(AmountKind.FAST_MONEY)
        fee = factory.of("0.25", "USD")
        ```
    """

    kind: AmountKind
    context: MonetaryContext | None = None

    @property
    def amount_type(self) -> type:
        return _AMOUNT_TYPES[self.kind]

    @property
    def default_context(self) -> MonetaryContext:
        return get_default_context(self.kind)

    @property
    def max_number(self) -> Decimal | None:
        """Largest representable number, or None if unbounded."""
        if self.kind == AmountKind.FAST_MONEY:
            return FastMoney.MAX_VALUE.number
        return None

    @property
    def min_number(self) -> Decimal | None:
        if self.kind == AmountKind.FAST_MONEY:
            return FastMoney.MIN_VALUE.number
        return None

    def with_context(self, context: MonetaryContext) -> AmountFactory:
        """Returns a factory creating amounts with $context."""
        if context is None:
            raise MissingArgumentError("context", "with_context")
        return AmountFactory(self.kind, context)

    def of(self, number: DecimalLike, currency: CurrencyUnit | str) -> MonetaryAmount:
        return self.amount_type.of(number, currency, self.context)

    def zero(self, currency: CurrencyUnit | str) -> MonetaryAmount:
        return self.amount_type.zero(currency, self.context)

    def of_minor(self, currency: CurrencyUnit | str, minor_units: int, fraction_digits: int | None = None) -> MonetaryAmount:
        return self.amount_type.of_minor(currency, minor_units, fraction_digits)

    def from_amount(self, amount: MonetaryAmount) -> MonetaryAmount:
        return self.amount_type.from_amount(amount, self.context)


def get_amount_factory(kind: AmountKind = AmountKind.MONEY) -> AmountFactory:
    """Returns the factory of the representation named by $kind."""
    if kind is None:
        raise MissingArgumentError("kind", "get_amount_factory")
    if not isinstance(kind, AmountKind):
        raise TypeError(f"$kind must be an AmountKind, but provided value is: {kind!r}")
    return AmountFactory(kind)
