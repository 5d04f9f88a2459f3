"""Entidad Payment - pago registrado contra una factura."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from app.domain.errors import InvalidPaymentStatusError, QuantityOutOfBoundsError
from app.domain.value_objects.money import ZERO, to_amount


class PaymentStatus(str, Enum):
    """Estados posibles de un pago."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


@dataclass
class Payment:
    """
    Entidad que representa un pago asociado a una factura.

    Solo los pagos APPROVED cuentan para el total pagado de la factura.
    """

    # Identificadores
    id: int | None = None
    invoice_id: int = 0
    payment_method_id: int = 0

    # Monto y referencia
    amount: Decimal = ZERO
    transaction_reference: str | None = None
    receipt_url: str | None = None
    observations: str | None = None

    # Estado
    status: PaymentStatus = PaymentStatus.PENDING

    # Control de concurrencia
    lock_version: int = 0

    # Timestamps
    payment_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades ===

    @property
    def is_approved(self) -> bool:
        return self.status == PaymentStatus.APPROVED

    @property
    def is_deletable(self) -> bool:
        """Los pagos aprobados o rechazados son historial auditable."""
        return self.status == PaymentStatus.PENDING

    # === Métodos de negocio ===

    def ensure_deletable(self) -> None:
        if not self.is_deletable:
            raise InvalidPaymentStatusError(self.id, self.status.value, "eliminar")

    def change_status(self, new_status: PaymentStatus, now: datetime) -> bool:
        """Cambia el estado; retorna False si no hubo cambio."""
        if new_status == self.status:
            return False
        self.status = new_status
        self.updated_at = now
        return True

    def ensure_amount_editable(self) -> None:
        """Solo los pagos PENDING o APPROVED admiten cambio de monto."""
        if self.status == PaymentStatus.REJECTED:
            raise InvalidPaymentStatusError(self.id, self.status.value, "modificar el monto de")

    def change_amount(self, amount: Decimal, now: datetime) -> None:
        self.ensure_amount_editable()
        amount = to_amount(amount)
        if amount <= ZERO:
            raise QuantityOutOfBoundsError(f"El monto del pago debe ser mayor a cero: {amount}")
        self.amount = amount
        self.updated_at = now

    @classmethod
    def record(
        cls,
        invoice_id: int,
        payment_method_id: int,
        amount: Decimal,
        now: datetime,
        status: PaymentStatus = PaymentStatus.PENDING,
        transaction_reference: str | None = None,
        receipt_url: str | None = None,
        observations: str | None = None,
    ) -> "Payment":
        """Factory para registrar un pago nuevo."""
        amount = to_amount(amount)
        if amount <= ZERO:
            raise QuantityOutOfBoundsError(f"El monto del pago debe ser mayor a cero: {amount}")
        return cls(
            invoice_id=invoice_id,
            payment_method_id=payment_method_id,
            amount=amount,
            status=status,
            transaction_reference=transaction_reference,
            receipt_url=receipt_url,
            observations=observations,
            payment_date=now,
            created_at=now,
            updated_at=now,
        )
