"""Entidad Reservation - Agregado raíz del motor financiero."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from app.domain.errors import InvalidRangeError, InvalidReservationStatusError
from app.domain.value_objects.date_range import DateRange
from app.domain.value_objects.money import ZERO, to_amount


class ReservationStatus(str, Enum):
    """Estados posibles de una reserva."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


TERMINAL_STATUSES = (ReservationStatus.CANCELLED, ReservationStatus.COMPLETED)


@dataclass
class Reservation:
    """
    Entidad principal del dominio - Agregado Raíz.

    Los montos (total_amount, amount_paid, balance_due) son derivados: solo
    se escriben a través de apply_totals, que recibe valores recalculados
    desde los ítems y pagos aprobados.
    """

    # Identificadores y referencias
    id: int | None = None
    client_id: int = 0
    employee_id: int = 0

    # Viaje
    description: str | None = None
    trip_start: date | None = None
    trip_end: date | None = None
    passenger_count: int = 1

    # Financieros (derivados)
    total_amount: Decimal = ZERO
    amount_paid: Decimal = ZERO
    balance_due: Decimal = ZERO

    # Estado
    status: ReservationStatus = ReservationStatus.PENDING
    observations: str | None = None
    cancellation_reason: str | None = None
    cancelled_at: datetime | None = None

    # Control de concurrencia
    lock_version: int = 0

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades calculadas ===

    @property
    def trip_window(self) -> DateRange:
        """Retorna la ventana del viaje como Value Object."""
        return DateRange(start=self.trip_start, end=self.trip_end)

    @property
    def is_mutable(self) -> bool:
        """Cancelada y Completada son estados terminales."""
        return self.status not in TERMINAL_STATUSES

    @property
    def is_fully_paid(self) -> bool:
        return self.total_amount > ZERO and self.balance_due <= ZERO

    # === Métodos de negocio ===

    def ensure_mutable(self, operation: str) -> None:
        """Lanza InvalidReservationStatusError si la reserva está cerrada."""
        if not self.is_mutable:
            raise InvalidReservationStatusError(
                current_status=self.status.value,
                expected_status=[ReservationStatus.PENDING.value, ReservationStatus.CONFIRMED.value],
                operation=operation,
            )

    def confirm(self, now: datetime) -> None:
        if self.status != ReservationStatus.PENDING:
            raise InvalidReservationStatusError(
                current_status=self.status.value,
                expected_status=ReservationStatus.PENDING.value,
                operation="confirmar la reserva",
            )
        self.status = ReservationStatus.CONFIRMED
        self.updated_at = now

    def cancel(self, reason: str, now: datetime) -> None:
        self.ensure_mutable("cancelar la reserva")
        reason = (reason or "").strip()
        if not reason:
            raise InvalidRangeError("El motivo de cancelación es obligatorio", code="CANCELLATION_REASON_REQUIRED")
        self.status = ReservationStatus.CANCELLED
        self.cancellation_reason = reason
        self.cancelled_at = now
        prefix = f"CANCELADA - {reason}"
        self.observations = f"{prefix}\n{self.observations}" if self.observations else prefix
        self.updated_at = now

    def complete(self, now: datetime) -> None:
        if self.status != ReservationStatus.CONFIRMED:
            raise InvalidReservationStatusError(
                current_status=self.status.value,
                expected_status=ReservationStatus.CONFIRMED.value,
                operation="completar la reserva",
            )
        self.status = ReservationStatus.COMPLETED
        self.updated_at = now

    def apply_totals(self, total_amount: Decimal, amount_paid: Decimal, now: datetime) -> None:
        """Escribe los totales recalculados; el saldo siempre es total - pagado."""
        self.total_amount = to_amount(total_amount)
        self.amount_paid = to_amount(amount_paid)
        self.balance_due = to_amount(self.total_amount - self.amount_paid)
        self.updated_at = now

    @classmethod
    def open(
        cls,
        client_id: int,
        employee_id: int,
        trip_start: date,
        trip_end: date,
        passenger_count: int,
        now: datetime,
        status: ReservationStatus = ReservationStatus.PENDING,
        description: str | None = None,
        observations: str | None = None,
    ) -> "Reservation":
        """Factory method: crea una reserva vacía con totales en cero."""
        DateRange(start=trip_start, end=trip_end)
        if trip_start < now.date():
            raise InvalidRangeError(
                f"La fecha de inicio del viaje ({trip_start}) no puede estar en el pasado",
                code="TRIP_START_IN_PAST",
            )
        if passenger_count < 1:
            raise InvalidRangeError(
                "La reserva debe tener al menos un pasajero", code="INVALID_PASSENGER_COUNT"
            )
        if status not in (ReservationStatus.PENDING, ReservationStatus.CONFIRMED):
            raise InvalidReservationStatusError(
                current_status=status.value,
                expected_status=[ReservationStatus.PENDING.value, ReservationStatus.CONFIRMED.value],
                operation="crear la reserva",
            )
        return cls(
            client_id=client_id,
            employee_id=employee_id,
            description=description,
            trip_start=trip_start,
            trip_end=trip_end,
            passenger_count=passenger_count,
            status=status,
            observations=observations,
            created_at=now,
            updated_at=now,
        )
