from decimal import Decimal

import pytest

from reconciler.domain.value_objects.money import Money


def test_from_minor_converts_cents():
    money = Money.from_minor(10050, "usd")

    assert money.amount == Decimal("100.50")
    assert money.currency_code == "USD"
    assert money.to_minor() == 10050


def test_display_uses_currency_symbol():
    assert Money.from_minor(10000, "usd").display() == "$100.00"
    assert Money.from_minor(999, "eur").display() == "€9.99"


def test_display_falls_back_to_code():
    assert Money.from_minor(5000, "mxn").display() == "50.00 MXN"


@pytest.mark.parametrize("amount, currency", [(Decimal("-1"), "USD"), (Decimal("1"), "US")])
def test_invalid_money_is_rejected(amount, currency):
    with pytest.raises(ValueError):
        Money(amount=amount, currency_code=currency)
