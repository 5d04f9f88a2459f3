"""
Reconciliación - funciones puras sobre los registros fuente.

Los totales derivados nunca se incrementan: siempre se recalculan desde los
ítems asociados y los pagos aprobados.
"""

from collections.abc import Iterable
from decimal import Decimal

from app.domain.entities.line_item import LineItem
from app.domain.entities.payment import Payment, PaymentStatus
from app.domain.value_objects.money import sum_amounts, to_amount


def reservation_total(items: Iterable[LineItem]) -> Decimal:
    return sum_amounts(item.subtotal for item in items)


def approved_total(payments: Iterable[Payment], exclude_id: int | None = None) -> Decimal:
    return sum_amounts(
        payment.amount
        for payment in payments
        if payment.status == PaymentStatus.APPROVED and payment.id != exclude_id
    )


def pending_balance(total: Decimal, approved: Decimal) -> Decimal:
    return to_amount(total - approved)
