from decimal import Decimal

import monetary
from monetary import AmountKind, FastMoney, get_amount_factory, get_cash_rounding, Money, RoundedMoney, RoundingMode, RoundingOperator


def test_public_names_are_importable():
    for name in monetary.__all__:
        assert hasattr(monetary, name)


def test_invoice_flow_across_representations():
    unit_price = FastMoney.of("19.95", "CHF")
    net = unit_price.multiply(3)
    assert net == FastMoney.of("59.85", "CHF")

    vat = Money.from_amount(net).multiply("0.081").with_operator(RoundingOperator.of_scale(2, RoundingMode.HALF_UP))
    assert vat == Money.of("4.85", "CHF")

    total = Money.from_amount(net).add(vat)
    assert str(total.with_operator(get_cash_rounding("CHF"))) == "CHF 64.70"


def test_representation_chosen_at_runtime():
    amounts = [get_amount_factory(kind).of("2.50", "EUR") for kind in AmountKind]
    assert [type(amount) for amount in amounts] == [Money, FastMoney, RoundedMoney]
    assert all(amount.number == Decimal("2.5") for amount in amounts)
