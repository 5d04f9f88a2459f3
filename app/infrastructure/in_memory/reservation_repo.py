import copy

from app.application.interfaces.reservation_repo import ReservationRepo
from app.domain.entities.reservation import Reservation
from app.domain.errors import OptimisticLockError
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryReservationRepo(ReservationRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, reservation_id: int) -> Reservation | None:
        reservation = self._store.reservations.get(reservation_id)
        return copy.deepcopy(reservation) if reservation else None

    async def add(self, reservation: Reservation) -> Reservation:
        reservation.id = self._store.next_id("reservations")
        reservation.lock_version = 0
        self._store.reservations[reservation.id] = copy.deepcopy(reservation)
        return reservation

    async def update(self, reservation: Reservation) -> Reservation:
        stored = self._store.reservations.get(reservation.id)
        if stored is None or stored.lock_version != reservation.lock_version:
            raise OptimisticLockError("reserva", reservation.id, reservation.lock_version)
        reservation.lock_version += 1
        self._store.reservations[reservation.id] = copy.deepcopy(reservation)
        return reservation

    async def delete(self, reservation_id: int) -> None:
        self._store.reservations.pop(reservation_id, None)
