import pytest

from monetary.domain.currency.currency_registry import get_currency, get_default_registry
from monetary.domain.currency.currency_unit import CurrencyUnit, CurrencyUnitBuilder


def test_currency_unit_attributes():
    chf = CurrencyUnit("chf", 2, 756, "Swiss Franc")
    assert chf.code == "CHF"
    assert chf.default_fraction_digits == 2
    assert chf.numeric_code == 756
    assert chf.name == "Swiss Franc"
    assert not chf.is_pseudo_currency
    assert str(chf) == "CHF"


def test_pseudo_currency_has_no_minor_unit():
    xxx = CurrencyUnit("XXX", -1, 999)
    assert xxx.is_pseudo_currency


def test_equality_hashing_and_ordering_by_code_only():
    first = CurrencyUnit("EUR", 2, 978, "Euro")
    second = CurrencyUnit("EUR", 3, None, "Another name")
    assert first == second
    assert hash(first) == hash(second)
    assert first != CurrencyUnit("USD", 2, 840)
    assert first != "EUR"

    currencies = [CurrencyUnit("USD", 2), CurrencyUnit("CHF", 2), CurrencyUnit("EUR", 2)]
    assert [c.code for c in sorted(currencies)] == ["CHF", "EUR", "USD"]
    assert CurrencyUnit("CHF", 2) < CurrencyUnit("EUR", 2)


@pytest.mark.parametrize(
    "code, fraction_digits, numeric_code",
    [
        ("", 2, None),
        ("   ", 2, None),
        (None, 2, None),
        ("USD", -2, None),
        ("USD", 2.5, None),
        ("USD", 2, -1),
    ],
)
def test_invalid_currency_unit(code, fraction_digits, numeric_code):
    with pytest.raises(ValueError):
        CurrencyUnit(code, fraction_digits, numeric_code)


def test_builder_creates_custom_unit():
    unit = CurrencyUnitBuilder("gems").set_default_fraction_digits(3).set_numeric_code(-1).set_name("Game Gems").build()
    assert unit.code == "GEMS"
    assert unit.default_fraction_digits == 3
    assert unit.numeric_code is None
    assert unit.name == "Game Gems"


def test_builder_validation():
    with pytest.raises(ValueError):
        CurrencyUnitBuilder("ABC").set_numeric_code(-2)
    with pytest.raises(ValueError):
        CurrencyUnitBuilder("ABC").set_default_fraction_digits(-1)


def test_builder_registers_unit_in_default_registry():
    unit = CurrencyUnitBuilder("TESTCOIN").set_default_fraction_digits(4).build(register=True)
    assert get_default_registry().is_available("TESTCOIN")
    assert get_currency("testcoin") is unit
