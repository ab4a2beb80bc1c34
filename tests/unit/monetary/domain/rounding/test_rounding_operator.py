from decimal import Decimal

import pytest

from monetary.domain.amount.fast_money import FastMoney
from monetary.domain.amount.money import Money
from monetary.domain.amount.rounded_money import RoundedMoney
from monetary.domain.context.math_context import MathContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.domain.rounding.rounding_operator import RoundingKind, RoundingOperator
from monetary.errors import InvalidConfigurationError, MissingArgumentError, PrecisionLossError

CURRENCY_DEFAULT = RoundingOperator.of_currency_default()


@pytest.mark.parametrize(
    "number, currency, expected",
    [
        ("10.125", "EUR", "10.13"),
        ("-10.125", "EUR", "-10.13"),
        ("1234.5", "JPY", "1235"),
        ("1.23456", "BHD", "1.235"),
        ("7", "USD", "7.00"),
    ],
)
def test_currency_default_rounding(number, currency, expected):
    rounded = CURRENCY_DEFAULT(Money.of(number, currency))
    assert rounded.number == Decimal(expected)
    assert rounded.scale == Decimal(expected).as_tuple().exponent * -1


def test_currency_default_rounding_leaves_pseudo_currency_untouched():
    amount = Money.of("1.23456789", "XXX")
    assert CURRENCY_DEFAULT(amount) is amount


def test_math_context_rounding_keeps_significant_digits():
    amount = RoundedMoney.of("130002.56895", "BRL")
    rounded = amount.with_operator(RoundingOperator.of_math_context(MathContext(2)))
    assert rounded.precision == 2
    assert rounded.number == Decimal("1.3E+5")
    assert isinstance(rounded, RoundedMoney)


@pytest.mark.parametrize(
    "mode, expected",
    [
        (RoundingMode.HALF_EVEN, "2.34"),
        (RoundingMode.HALF_UP, "2.35"),
        (RoundingMode.HALF_DOWN, "2.34"),
        (RoundingMode.UP, "2.35"),
        (RoundingMode.DOWN, "2.34"),
        (RoundingMode.CEILING, "2.35"),
        (RoundingMode.FLOOR, "2.34"),
    ],
)
def test_scale_rounding_modes(mode, expected):
    rounded = RoundingOperator.of_scale(2, mode).apply(Money.of("2.345", "USD"))
    assert rounded.number == Decimal(expected)


def test_precision_scale_rounding():
    operator = RoundingOperator.of_precision_scale(4, 2, RoundingMode.HALF_UP)
    rounded = operator(Money.of("1234.5678", "USD"))
    assert str(rounded) == "USD 1235.00"


@pytest.mark.parametrize(
    "number, expected",
    [
        ("1.02", "1.00"),
        ("1.03", "1.05"),
        ("1.025", "1.05"),
        ("1.075", "1.10"),
        ("-1.03", "-1.05"),
        ("0.024", "0.00"),
    ],
)
def test_cash_rounding_chf(number, expected):
    operator = RoundingOperator.of_cash(5)
    rounded = operator(Money.of(number, "CHF"))
    assert str(rounded.number) == expected


def test_cash_rounding_with_downward_mode():
    operator = RoundingOperator.of_cash(5, RoundingMode.DOWN)
    assert operator(Money.of("1.09", "CHF")).number == Decimal("1.05")


def test_rounding_keeps_representation():
    operator = RoundingOperator.of_scale(2, RoundingMode.HALF_EVEN)
    assert isinstance(operator(FastMoney.of("1.23456", "USD")), FastMoney)
    assert operator(FastMoney.of("1.23456", "USD")) == FastMoney.of("1.23", "USD")
    assert isinstance(operator(Money.of("1.23456", "USD")), Money)


@pytest.mark.parametrize(
    "operator",
    [
        RoundingOperator.of_currency_default(),
        RoundingOperator.of_math_context(MathContext(3, RoundingMode.HALF_EVEN)),
        RoundingOperator.of_scale(1, RoundingMode.CEILING),
        RoundingOperator.of_precision_scale(5, 2, RoundingMode.FLOOR),
        RoundingOperator.of_cash(5),
    ],
)
def test_rounding_is_idempotent(operator):
    once = operator(Money.of("-98.7654321", "CHF"))
    assert operator(once) == once


def test_unnecessary_rounding():
    operator = RoundingOperator.of_currency_default(RoundingMode.UNNECESSARY)
    assert operator(Money.of("1.5", "USD")).number == Decimal("1.50")
    with pytest.raises(PrecisionLossError):
        operator(Money.of("1.555", "USD"))

    cash = RoundingOperator.of_cash(5, RoundingMode.UNNECESSARY)
    assert cash(Money.of("1.05", "CHF")).number == Decimal("1.05")
    with pytest.raises(PrecisionLossError):
        cash(Money.of("1.02", "CHF"))


def test_invalid_operators():
    with pytest.raises(InvalidConfigurationError):
        RoundingOperator.of_scale(2, RoundingMode.UNNECESSARY)
    with pytest.raises(InvalidConfigurationError):
        RoundingOperator.of_math_context(MathContext(0))
    with pytest.raises(InvalidConfigurationError):
        RoundingOperator.of_math_context(MathContext(4, RoundingMode.UNNECESSARY))
    with pytest.raises(InvalidConfigurationError):
        RoundingOperator.of_precision_scale(0, 2, RoundingMode.HALF_UP)
    with pytest.raises(InvalidConfigurationError):
        RoundingOperator.of_cash(0)
    with pytest.raises(InvalidConfigurationError):
        RoundingOperator.of_scale(2.5, RoundingMode.HALF_UP)
    with pytest.raises(MissingArgumentError):
        RoundingOperator.of_math_context(None)
    with pytest.raises(MissingArgumentError):
        RoundingOperator.of_scale(2, None)
    with pytest.raises(MissingArgumentError):
        CURRENCY_DEFAULT.apply(None)


def test_operators_are_values():
    assert RoundingOperator.of_scale(2, RoundingMode.HALF_UP) == RoundingOperator.of_scale(2, RoundingMode.HALF_UP)
    assert RoundingOperator.of_scale(2, RoundingMode.HALF_UP) != RoundingOperator.of_scale(3, RoundingMode.HALF_UP)
    assert RoundingOperator.of_cash(5).kind == RoundingKind.CASH
    assert str(RoundingOperator.of_scale(2, RoundingMode.HALF_UP)) == "RoundingOperator(SCALE, scale=2, rounding_mode=HALF_UP)"
