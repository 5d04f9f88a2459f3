"""Entidad Invoice - factura generada a partir de una reserva confirmada."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from enum import Enum

from app.domain.errors import InvalidInvoiceStatusError
from app.domain.value_objects.money import ZERO, to_amount


class InvoiceStatus(str, Enum):
    """Estados posibles de una factura."""

    PENDING = "PENDING"
    PAID = "PAID"
    CANCELLED = "CANCELLED"
    OVERDUE = "OVERDUE"


def invoice_status_for(current: InvoiceStatus, total: Decimal, approved_total: Decimal) -> InvoiceStatus:
    """
    Estado de la factura según la suma de pagos aprobados.

    Una factura anulada no vuelve a abrirse; una vencida sigue vencida
    mientras no se cubra el total.
    """
    if current == InvoiceStatus.CANCELLED:
        return current
    if approved_total >= total:
        return InvoiceStatus.PAID
    if current == InvoiceStatus.OVERDUE:
        return current
    return InvoiceStatus.PENDING


@dataclass
class Invoice:
    """Factura de una reserva. El total es una foto del total de la reserva."""

    id: int | None = None
    reservation_id: int = 0
    invoice_number: str = ""

    total: Decimal = ZERO
    amount_paid: Decimal = ZERO
    status: InvoiceStatus = InvoiceStatus.PENDING

    issue_date: date | None = None
    due_date: date | None = None
    observations: str | None = None

    lock_version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades ===

    @property
    def pending_balance(self) -> Decimal:
        return to_amount(self.total - self.amount_paid)

    @property
    def is_open(self) -> bool:
        return self.status in (InvoiceStatus.PENDING, InvoiceStatus.OVERDUE)

    def is_past_due(self, today: date) -> bool:
        return self.is_open and self.due_date is not None and self.due_date < today

    def is_due_within(self, today: date, days: int) -> bool:
        if not self.is_open or self.due_date is None:
            return False
        return today <= self.due_date <= today + timedelta(days=days)

    # === Métodos de negocio ===

    def reconcile(self, approved_total: Decimal, now: datetime) -> None:
        """Recalcula pagado y estado desde el total aprobado (idempotente)."""
        self.amount_paid = to_amount(approved_total)
        self.status = invoice_status_for(self.status, self.total, self.amount_paid)
        self.updated_at = now

    def ensure_accepts_payments(self) -> None:
        if self.status == InvoiceStatus.CANCELLED:
            raise InvalidInvoiceStatusError(self.invoice_number, self.status.value, "registrar pagos en")

    def cancel(self, has_approved_payments: bool, now: datetime) -> None:
        if self.status == InvoiceStatus.PAID or has_approved_payments:
            raise InvalidInvoiceStatusError(self.invoice_number, self.status.value, "anular")
        self.status = InvoiceStatus.CANCELLED
        self.updated_at = now

    def override_status(self, new_status: InvoiceStatus, now: datetime) -> InvoiceStatus:
        """Cambio manual de estado (corrección operativa). Retorna el estado anterior."""
        previous = self.status
        self.status = new_status
        self.updated_at = now
        return previous

    def mark_overdue(self, today: date, now: datetime) -> bool:
        if self.status != InvoiceStatus.PENDING or not self.is_past_due(today):
            return False
        self.status = InvoiceStatus.OVERDUE
        self.updated_at = now
        return True

    @classmethod
    def issue(
        cls,
        reservation_id: int,
        invoice_number: str,
        total: Decimal,
        issue_date: date,
        due_days: int,
        now: datetime,
        observations: str | None = None,
    ) -> "Invoice":
        """Factory method: factura pendiente con el total de la reserva."""
        return cls(
            reservation_id=reservation_id,
            invoice_number=invoice_number,
            total=to_amount(total),
            amount_paid=ZERO,
            status=InvoiceStatus.PENDING,
            issue_date=issue_date,
            due_date=issue_date + timedelta(days=due_days),
            observations=observations,
            created_at=now,
            updated_at=now,
        )
