from decimal import Decimal, ROUND_HALF_EVEN, ROUND_HALF_UP

import pytest

from monetary.errors import ArithmeticOverflowError
from monetary.utils.decimal_tools import (
    decimal_precision,
    decimal_scale,
    divide_to_scale,
    exact_quotient,
    round_to_precision,
    set_scale,
    strip_trailing_zeros,
    to_plain_string,
    unsigned_zero,
)


@pytest.mark.parametrize(
    "value, expected_precision, expected_scale",
    [
        (Decimal("123.45"), 5, 2),
        (Decimal("0.001"), 1, 3),
        (Decimal("1E+3"), 1, -3),
        (Decimal("0"), 1, 0),
        (Decimal("10.500"), 5, 3),
    ],
)
def test_precision_and_scale(value, expected_precision, expected_scale):
    assert decimal_precision(value) == expected_precision
    assert decimal_scale(value) == expected_scale


def test_strip_trailing_zeros():
    assert strip_trailing_zeros(Decimal("5.000")) == Decimal("5")
    assert decimal_scale(strip_trailing_zeros(Decimal("5.000"))) == 0
    assert decimal_scale(strip_trailing_zeros(Decimal("10.500"))) == 1
    assert decimal_scale(strip_trailing_zeros(Decimal("100"))) == -2

    # Any zero becomes canonical zero with scale 0
    stripped_zero = strip_trailing_zeros(Decimal("0.000"))
    assert str(stripped_zero) == "0"
    assert decimal_scale(stripped_zero) == 0


def test_strip_trailing_zeros_keeps_many_digits():
    value = Decimal("1234567890123456789012345678901234567890.12345678900")
    assert strip_trailing_zeros(value) == value
    assert decimal_precision(strip_trailing_zeros(value)) == 49


@pytest.mark.parametrize(
    "value, expected",
    [
        (Decimal("-0"), "0"),
        (Decimal("-0.00"), "0.00"),
        (Decimal("0.0"), "0.0"),
        (Decimal("-1.50"), "-1.50"),
    ],
)
def test_unsigned_zero_keeps_scale(value, expected):
    assert str(unsigned_zero(value)) == expected


def test_to_plain_string_never_uses_exponent():
    assert to_plain_string(Decimal("1E+2")) == "100"
    assert to_plain_string(Decimal("0E-5")) == "0.00000"
    assert to_plain_string(Decimal("-1.50")) == "-1.50"
    assert to_plain_string(Decimal("1E-7")) == "0.0000001"


def test_exact_quotient():
    assert exact_quotient(Decimal(1), Decimal(8)) == Decimal("0.125")
    assert exact_quotient(Decimal(100), Decimal("0.1")) == Decimal(1000)
    assert exact_quotient(Decimal("-7.5"), Decimal("2.5")) == Decimal(-3)


def test_exact_quotient_of_non_terminating_expansion_raises():
    with pytest.raises(ArithmeticOverflowError):
        exact_quotient(Decimal(1), Decimal(3))


@pytest.mark.parametrize(
    "dividend, divisor, scale, rounding, expected",
    [
        ("1", "3", 2, ROUND_HALF_UP, "0.33"),
        ("2", "3", 2, ROUND_HALF_UP, "0.67"),
        ("1", "8", 2, ROUND_HALF_EVEN, "0.12"),
        ("1", "8", 2, ROUND_HALF_UP, "0.13"),
        ("-1", "8", 2, ROUND_HALF_UP, "-0.13"),
        ("10000000", "0.1", 0, ROUND_HALF_EVEN, "100000000"),
        ("1", "9", 0, ROUND_HALF_EVEN, "0"),
    ],
)
def test_divide_to_scale(dividend, divisor, scale, rounding, expected):
    result = divide_to_scale(Decimal(dividend), Decimal(divisor), scale, rounding)
    assert result == Decimal(expected)
    assert decimal_scale(result) == scale


def test_set_scale_pads_and_rounds():
    assert str(set_scale(Decimal("1.5"), 3, ROUND_HALF_EVEN)) == "1.500"
    assert set_scale(Decimal("2.345"), 2, ROUND_HALF_EVEN) == Decimal("2.34")
    assert set_scale(Decimal("2.345"), 2, ROUND_HALF_UP) == Decimal("2.35")


def test_round_to_precision():
    result = round_to_precision(Decimal("130002.56895"), 2, ROUND_HALF_UP)
    assert result == Decimal("1.3E+5")
    assert decimal_precision(result) == 2

    # 0 means no rounding
    assert round_to_precision(Decimal("1.23456"), 0, ROUND_HALF_UP) == Decimal("1.23456")
