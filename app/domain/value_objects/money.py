"""Helpers monetarios - montos en Decimal redondeados a centavos."""

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """
    Normaliza un valor a Decimal con dos decimales.

    Los float se convierten vía str para no arrastrar error binario.
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def sum_amounts(values: Iterable[Decimal]) -> Decimal:
    """Suma una colección de montos; una colección vacía suma cero."""
    total = ZERO
    for value in values:
        total += value
    return to_amount(total)
