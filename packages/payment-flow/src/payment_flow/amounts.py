from __future__ import annotations

from decimal import Decimal, InvalidOperation

MINOR_UNITS_PER_MAJOR = 100


def to_minor_units(amount: Decimal | int | float | str) -> int:
    """Convert a major-unit amount (e.g. naira) to provider minor units (kobo).

    The conversion goes through ``Decimal`` so ``10.1`` becomes ``1010`` rather
    than ``1009``. Zero, negative and sub-kobo amounts are rejected instead of
    being truncated.
    """
    if isinstance(amount, bool):
        raise ValueError("amount must be a number")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as exc:
        raise ValueError("amount must be a number") from exc
    if not value.is_finite():
        raise ValueError("amount must be a finite number")
    if value <= 0:
        raise ValueError("amount must be greater than zero")

    minor = value * MINOR_UNITS_PER_MAJOR
    if minor != minor.to_integral_value():
        raise ValueError("amount has more precision than the currency minor unit")
    return int(minor)
