from app.domain.entities.reservation import Reservation


class ReservationRepo:
    async def get(self, reservation_id: int) -> Reservation | None:
        raise NotImplementedError

    async def add(self, reservation: Reservation) -> Reservation:
        raise NotImplementedError

    async def update(self, reservation: Reservation) -> Reservation:
        """
        Persiste la reserva si su lock_version coincide con la almacenada.

        Incrementa lock_version; lanza OptimisticLockError si no coincide.
        """
        raise NotImplementedError

    async def delete(self, reservation_id: int) -> None:
        raise NotImplementedError
