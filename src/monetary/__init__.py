__version__ = "0.0.1"

from monetary.domain.amount.conversion import convert, to_fast_money, to_money, to_rounded_money
from monetary.domain.amount.factory import AmountFactory, get_amount_factory
from monetary.domain.amount.fast_money import FastMoney
from monetary.domain.amount.money import Money
from monetary.domain.amount.protocol import MonetaryAmount
from monetary.domain.amount.rounded_money import RoundedMoney
from monetary.domain.context.math_context import MathContext
from monetary.domain.context.monetary_context import AmountKind, MonetaryContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.domain.currency.currency_registry import get_currency, get_currency_by_numeric_code
from monetary.domain.currency.currency_unit import CurrencyUnit, CurrencyUnitBuilder
from monetary.domain.rounding.rounded_money_factory import RoundedMoneyFactory, RoundedMoneyFactoryBuilder
from monetary.domain.rounding.rounding_operator import RoundingKind, RoundingOperator
from monetary.domain.rounding.rounding_registry import get_cash_rounding, get_rounding, get_scale_rounding
from monetary.platform.context_resolution import configure_settings, get_default_context

__all__ = [
    "AmountFactory",
    "AmountKind",
    "CurrencyUnit",
    "CurrencyUnitBuilder",
    "FastMoney",
    "MathContext",
    "MonetaryAmount",
    "MonetaryContext",
    "Money",
    "RoundedMoney",
    "RoundedMoneyFactory",
    "RoundedMoneyFactoryBuilder",
    "RoundingKind",
    "RoundingMode",
    "RoundingOperator",
    "configure_settings",
    "convert",
    "get_amount_factory",
    "get_cash_rounding",
    "get_currency",
    "get_currency_by_numeric_code",
    "get_default_context",
    "get_rounding",
    "get_scale_rounding",
    "to_fast_money",
    "to_money",
    "to_rounded_money",
]
