"""Ready-made queries for `amount.query(...)`.

    Money.of("2.35", "EUR").query(extract_minor_part())  # 35
"""

from __future__ import annotations

from decimal import ROUND_DOWN

from monetary.domain.amount.checks import require_amount
from monetary.domain.amount.protocol import MonetaryAmount, MonetaryQuery
from monetary.utils.decimal_tools import exact_context, set_scale


def extract_major_part() -> MonetaryQuery[int]:
    """Returns a query for the whole units, truncated toward zero (EUR -2.35 -> -2)."""

    def query(amount: MonetaryAmount) -> int:
        require_amount(amount, "extract_major_part")
        return int(set_scale(amount.number, 0, ROUND_DOWN))

    return query


def extract_minor_part() -> MonetaryQuery[int]:
    """Returns a query for the minor units below one whole unit (EUR 2.35 -> 35).

    Digits beyond the currency's default fraction digits are truncated.
    """

    def query(amount: MonetaryAmount) -> int:
        require_amount(amount, "extract_minor_part")
        digits = _fraction_digits(amount)
        context = exact_context()
        truncated = set_scale(amount.number, digits, ROUND_DOWN)
        fraction = context.remainder(truncated, 1)
        return int(fraction.scaleb(digits, context))

    return query


def convert_minor_part() -> MonetaryQuery[int]:
    """Returns a query for the whole amount in minor units (EUR 2.35 -> 235)."""

    def query(amount: MonetaryAmount) -> int:
        require_amount(amount, "convert_minor_part")
        digits = _fraction_digits(amount)
        truncated = set_scale(amount.number, digits, ROUND_DOWN)
        return int(truncated.scaleb(digits, exact_context()))

    return query


def _fraction_digits(amount: MonetaryAmount) -> int:
    # Pseudo currencies (-1 digits) have no minor unit
    return max(amount.currency.default_fraction_digits, 0)
