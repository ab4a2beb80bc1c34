from decimal import Decimal, Inexact

import pytest

from monetary.domain.context.math_context import DECIMAL128, DECIMAL64, MathContext, NAMED_MATH_CONTEXTS
from monetary.domain.context.monetary_context import AmountKind, FAST_MONEY_CONTEXT, MonetaryContext
from monetary.domain.context.rounding_mode import RoundingMode
from monetary.errors import InvalidConfigurationError


def test_math_context_defaults_and_names():
    assert MathContext(10).rounding_mode == RoundingMode.HALF_UP
    assert MathContext(0).is_unlimited
    assert DECIMAL64.precision == 16
    assert DECIMAL128.precision == 34
    assert NAMED_MATH_CONTEXTS["DECIMAL128"] is DECIMAL128


@pytest.mark.parametrize("precision", [-1, 1.5, True, "10"])
def test_math_context_rejects_invalid_precision(precision):
    with pytest.raises(InvalidConfigurationError):
        MathContext(precision)


def test_math_context_rejects_invalid_rounding_mode():
    with pytest.raises(InvalidConfigurationError):
        MathContext(5, "HALF_UP")


def test_math_context_to_decimal_context():
    context = MathContext(3, RoundingMode.DOWN).to_decimal_context()
    assert context.plus(Decimal("1.239")) == Decimal("1.23")


def test_monetary_context_defaults():
    context = MonetaryContext(precision=64)
    assert context.max_scale == -1
    assert not context.fixed_scale
    assert context.rounding_mode == RoundingMode.HALF_EVEN
    assert context.amount_kind == AmountKind.MONEY
    assert context.is_unlimited_scale
    assert not context.is_unlimited_precision
    assert MonetaryContext(precision=0).is_unlimited_precision


@pytest.mark.parametrize(
    "kwargs",
    [
        {"precision": -1},
        {"precision": 10, "max_scale": -2},
        {"precision": 10, "fixed_scale": True},
        {"precision": 10, "rounding_mode": "HALF_EVEN"},
        {"precision": 10, "amount_kind": "MONEY"},
    ],
)
def test_monetary_context_validation(kwargs):
    with pytest.raises(InvalidConfigurationError):
        MonetaryContext(**kwargs)


def test_monetary_context_from_math_context():
    context = MonetaryContext.of(DECIMAL64, AmountKind.ROUNDED_MONEY)
    assert context.precision == 16
    assert context.rounding_mode == RoundingMode.HALF_EVEN
    assert context.amount_kind == AmountKind.ROUNDED_MONEY
    assert context.math_context == DECIMAL64


def test_with_kind_returns_copy_only_when_kind_differs():
    context = MonetaryContext(precision=20)
    assert context.with_kind(AmountKind.MONEY) is context

    rounded_context = context.with_kind(AmountKind.ROUNDED_MONEY)
    assert rounded_context.amount_kind == AmountKind.ROUNDED_MONEY
    assert rounded_context.precision == 20
    assert context.amount_kind == AmountKind.MONEY


def test_unnecessary_rounding_traps_inexact_results():
    context = MonetaryContext(precision=3, rounding_mode=RoundingMode.UNNECESSARY).to_decimal_context()
    assert context.add(Decimal("1.2"), Decimal("3.4")) == Decimal("4.6")
    with pytest.raises(Inexact):
        context.add(Decimal("1.23"), Decimal("10"))


def test_fast_money_context():
    assert FAST_MONEY_CONTEXT.precision == 19
    assert FAST_MONEY_CONTEXT.max_scale == 5
    assert FAST_MONEY_CONTEXT.fixed_scale
    assert FAST_MONEY_CONTEXT.amount_kind == AmountKind.FAST_MONEY
