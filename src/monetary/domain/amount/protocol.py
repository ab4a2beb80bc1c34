from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable, Protocol, TypeVar, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from monetary.domain.context.monetary_context import MonetaryContext
    from monetary.domain.currency.currency_unit import CurrencyUnit
    from monetary.utils.numeric_tools import DecimalLike

R = TypeVar("R")

# Transforms an amount into another amount of the same representation (rounding, percent, ...)
MonetaryOperator = Callable[["MonetaryAmount"], "MonetaryAmount"]

# Extracts arbitrary information from an amount
MonetaryQuery = Callable[["MonetaryAmount"], R]


@runtime_checkable
class MonetaryAmount(Protocol):
    """Structural interface shared by `Money`, `FastMoney` and `RoundedMoney`.

    Purpose:
        Lets conversions, comparisons, rounding operators and queries work with any amount
        representation without a common base class.

    Notes:
        - Amounts are immutable; every operation returns a new amount (or $self when the
          result is unchanged).
        - Arithmetic between two amounts requires the same representation and currency.
        - Comparisons accept any representation as long as the currency matches.
    """

    @property
    def number(self) -> Decimal:
        """Numeric value as `Decimal`."""
        ...

    @property
    def currency(self) -> CurrencyUnit:
        ...

    @property
    def context(self) -> MonetaryContext:
        ...

    def with_number(self, number: DecimalLike) -> MonetaryAmount:
        """Same representation, currency and context, with another numeric value."""
        ...

    def with_operator(self, operator: Callable[[Any], Any]) -> MonetaryAmount:
        ...

    def query(self, query: Callable[[Any], R]) -> R:
        ...

    def signum(self) -> int:
        ...

    def is_zero(self) -> bool:
        ...
