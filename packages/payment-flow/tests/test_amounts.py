from decimal import Decimal

import pytest

from payment_flow.amounts import to_minor_units


def test_to_minor_units_converts_major_units() -> None:
    assert to_minor_units(Decimal("10.00")) == 1000
    assert to_minor_units(10) == 1000
    assert to_minor_units("2500") == 250000


def test_to_minor_units_does_not_truncate_binary_floats() -> None:
    assert to_minor_units(10.1) == 1010
    assert to_minor_units(19.99) == 1999


@pytest.mark.parametrize("amount", [0, Decimal("0.00"), -5, "-1.50"])
def test_to_minor_units_rejects_non_positive_amounts(amount) -> None:
    with pytest.raises(ValueError):
        to_minor_units(amount)


def test_to_minor_units_rejects_sub_minor_precision() -> None:
    with pytest.raises(ValueError):
        to_minor_units(Decimal("10.005"))


@pytest.mark.parametrize("amount", ["ten", True, "NaN", "Infinity"])
def test_to_minor_units_rejects_non_numbers(amount) -> None:
    with pytest.raises(ValueError):
        to_minor_units(amount)
