"""Snack counter menu."""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from floor.domain.errors import UnknownSnackError, ValidationError
from floor.domain.models import SnackLine
from floor.domain.value_objects import Money


@dataclass(frozen=True)
class Snack:
    id: str
    name: str
    price: Decimal


SNACK_MENU: Mapping[str, Snack] = MappingProxyType(
    {
        snack.id: snack
        for snack in (
            Snack("1", "Cola (300ml)", Decimal("40")),
            Snack("2", "Spicy Nachos", Decimal("150")),
            Snack("3", "Chicken Burger", Decimal("120")),
            Snack("4", "French Fries", Decimal("80")),
            Snack("5", "Cold Coffee", Decimal("60")),
            Snack("6", "Energy Drink", Decimal("100")),
        )
    }
)


def snack_lines(quantities: Mapping[str, int], menu: Mapping[str, Snack] = SNACK_MENU) -> list[SnackLine]:
    """Turn a cart of snack id -> quantity into priced lines, skipping zeros."""
    lines = []
    for snack_id, quantity in quantities.items():
        if quantity < 0:
            raise ValidationError("Snack quantity cannot be negative")
        snack = menu.get(snack_id)
        if snack is None:
            raise UnknownSnackError(snack_id)
        if quantity == 0:
            continue
        lines.append(
            SnackLine(
                snack_id=snack.id,
                name=snack.name,
                quantity=quantity,
                amount=Money(snack.price * quantity),
            )
        )
    return lines
