"""Lookup of the default rounding operators per currency."""

from __future__ import annotations

from monetary.domain.context.rounding_mode import RoundingMode
from monetary.domain.currency.currency_registry import resolve_currency
from monetary.domain.currency.currency_unit import CurrencyUnit
from monetary.domain.rounding.rounding_operator import RoundingOperator

# Smallest coin in minor units, for currencies whose cash differs from their accounting unit
CASH_MINIMAL_MINORS: dict[str, int] = {
    "CHF": 5,
}

_CURRENCY_DEFAULT_ROUNDINGS = {mode: RoundingOperator.of_currency_default(mode) for mode in RoundingMode}


def get_rounding(currency: CurrencyUnit | str, rounding_mode: RoundingMode = RoundingMode.HALF_UP) -> RoundingOperator:
    """Returns the operator rounding amounts of $currency to its default fraction digits.

    The returned operator is shared; it adapts to the currency of each amount it is
    applied to. Pseudo currencies without fraction digits are left unrounded.
    """
    resolve_currency(currency)
    return _CURRENCY_DEFAULT_ROUNDINGS[rounding_mode]


def get_cash_rounding(currency: CurrencyUnit | str, rounding_mode: RoundingMode = RoundingMode.HALF_UP) -> RoundingOperator:
    """Returns the operator rounding amounts of $currency to the smallest coin in circulation.

    Example:
        ```python
        get_cash_rounding("CHF")(Money.of("1.02", "CHF"))  # CHF 1.00
        ```
    """
    unit = resolve_currency(currency)
    return RoundingOperator.of_cash(CASH_MINIMAL_MINORS.get(unit.code, 1), rounding_mode)


def get_scale_rounding(scale: int, rounding_mode: RoundingMode = RoundingMode.HALF_EVEN) -> RoundingOperator:
    return RoundingOperator.of_scale(scale, rounding_mode)
