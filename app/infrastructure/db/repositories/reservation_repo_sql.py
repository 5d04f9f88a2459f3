from typing import Any, Mapping

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.reservation_repo import ReservationRepo
from app.domain.entities.reservation import Reservation, ReservationStatus
from app.domain.errors import OptimisticLockError
from app.domain.value_objects.money import to_amount
from app.infrastructure.db.tables import reservations


def _values(reservation: Reservation) -> dict[str, Any]:
    return {
        "client_id": reservation.client_id,
        "employee_id": reservation.employee_id,
        "description": reservation.description,
        "trip_start": reservation.trip_start,
        "trip_end": reservation.trip_end,
        "passenger_count": reservation.passenger_count,
        "total_amount": reservation.total_amount,
        "amount_paid": reservation.amount_paid,
        "balance_due": reservation.balance_due,
        "status": reservation.status.value,
        "observations": reservation.observations,
        "cancellation_reason": reservation.cancellation_reason,
        "cancelled_at": reservation.cancelled_at,
        "created_at": reservation.created_at,
        "updated_at": reservation.updated_at,
    }


def _to_entity(row: Mapping[str, Any]) -> Reservation:
    return Reservation(
        id=row["id"],
        client_id=row["client_id"],
        employee_id=row["employee_id"],
        description=row["description"],
        trip_start=row["trip_start"],
        trip_end=row["trip_end"],
        passenger_count=row["passenger_count"],
        total_amount=to_amount(row["total_amount"]),
        amount_paid=to_amount(row["amount_paid"]),
        balance_due=to_amount(row["balance_due"]),
        status=ReservationStatus(row["status"]),
        observations=row["observations"],
        cancellation_reason=row["cancellation_reason"],
        cancelled_at=row["cancelled_at"],
        lock_version=row["lock_version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ReservationRepoSQL(ReservationRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, reservation_id: int) -> Reservation | None:
        stmt = select(reservations).where(reservations.c.id == reservation_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return _to_entity(row)

    async def add(self, reservation: Reservation) -> Reservation:
        stmt = insert(reservations).values(**_values(reservation), lock_version=0)
        result = await self._session.execute(stmt)
        reservation.id = result.inserted_primary_key[0]
        reservation.lock_version = 0
        return reservation

    async def update(self, reservation: Reservation) -> Reservation:
        stmt = (
            update(reservations)
            .where(reservations.c.id == reservation.id)
            .where(reservations.c.lock_version == reservation.lock_version)
            .values(**_values(reservation), lock_version=reservation.lock_version + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError("reserva", reservation.id, reservation.lock_version)
        reservation.lock_version += 1
        return reservation

    async def delete(self, reservation_id: int) -> None:
        await self._session.execute(delete(reservations).where(reservations.c.id == reservation_id))
