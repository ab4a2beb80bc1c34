import pytest

from monetary.domain.currency.currency_registry import CHF, EUR
from monetary.errors import (
    ArithmeticOverflowError,
    CurrencyMismatchError,
    DivisionByZeroError,
    ErrorKind,
    InvalidConfigurationError,
    InvalidNumberError,
    MissingArgumentError,
    MonetaryError,
    PrecisionLossError,
    UnknownCurrencyError,
)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (ErrorKind.MISSING_ARGUMENT, True),
        (ErrorKind.INVALID_CONFIGURATION, True),
        (ErrorKind.CURRENCY_MISMATCH, False),
        (ErrorKind.ARITHMETIC_OVERFLOW, False),
        (ErrorKind.INVALID_NUMBER, False),
        (ErrorKind.PRECISION_LOSS, False),
        (ErrorKind.UNKNOWN_CURRENCY, False),
    ],
)
def test_programmer_errors_are_separated_from_numeric_conditions(kind, expected):
    assert kind.is_programmer_error is expected


def test_errors_inherit_closest_builtin():
    assert isinstance(CurrencyMismatchError(EUR, CHF), ValueError)
    assert isinstance(ArithmeticOverflowError("overflow"), ArithmeticError)
    assert isinstance(InvalidNumberError("x"), ValueError)
    assert isinstance(PrecisionLossError("1.123456", 5), ArithmeticError)
    assert isinstance(UnknownCurrencyError("ABC"), LookupError)
    assert isinstance(MissingArgumentError("amount"), TypeError)
    assert isinstance(InvalidConfigurationError("bad"), ValueError)


def test_division_by_zero_is_an_overflow_and_a_zero_division():
    error = DivisionByZeroError(10)
    assert isinstance(error, ArithmeticOverflowError)
    assert isinstance(error, ZeroDivisionError)
    assert isinstance(error, MonetaryError)
    assert error.kind == ErrorKind.ARITHMETIC_OVERFLOW
    assert error.value == 10


def test_errors_carry_offending_operands():
    mismatch = CurrencyMismatchError(EUR, CHF, "add")
    assert mismatch.expected == EUR
    assert mismatch.actual == CHF
    assert mismatch.kind == ErrorKind.CURRENCY_MISMATCH
    assert "add" in str(mismatch)
    assert "EUR/CHF" in str(mismatch)

    precision_loss = PrecisionLossError("1.123456", 5)
    assert precision_loss.value == "1.123456"
    assert precision_loss.max_scale == 5
    assert "scale > 5" in str(precision_loss)

    unknown = UnknownCurrencyError("ABC")
    assert unknown.code == "ABC"
    assert unknown.kind == ErrorKind.UNKNOWN_CURRENCY

    missing = MissingArgumentError("amount", "add")
    assert missing.argument == "amount"
    assert "$amount" in str(missing)
