from decimal import Decimal

import pytest

from monetary.errors import InvalidNumberError, MissingArgumentError
from monetary.utils.numeric_tools import as_decimal, check_finite, is_infinite_and_not_nan


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.1, Decimal("0.1")),
        (0.5, Decimal("0.5")),
        (100, Decimal("100")),
        (" 12.50 ", Decimal("12.50")),
        (Decimal("3.14"), Decimal("3.14")),
    ],
)
def test_as_decimal(value, expected):
    assert as_decimal(value) == expected


def test_as_decimal_keeps_string_scale():
    assert str(as_decimal("12.50")) == "12.50"


def test_as_decimal_rejects_invalid_input():
    with pytest.raises(MissingArgumentError):
        as_decimal(None)
    with pytest.raises(InvalidNumberError):
        as_decimal(True)
    with pytest.raises(InvalidNumberError):
        as_decimal("abc")
    with pytest.raises(InvalidNumberError):
        as_decimal([1])


def test_check_finite_rejects_nan_and_infinity():
    assert check_finite("1.5") == Decimal("1.5")
    with pytest.raises(InvalidNumberError):
        check_finite(float("nan"))
    with pytest.raises(InvalidNumberError):
        check_finite(float("inf"))
    with pytest.raises(InvalidNumberError):
        check_finite(Decimal("-Infinity"))


def test_is_infinite_and_not_nan():
    assert is_infinite_and_not_nan(float("inf"))
    assert is_infinite_and_not_nan(float("-inf"))
    assert not is_infinite_and_not_nan(10)
    with pytest.raises(InvalidNumberError):
        is_infinite_and_not_nan(float("nan"))
