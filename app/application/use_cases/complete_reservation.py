import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.reservation import Reservation
from app.domain.errors import ReservationNotFoundError


class CompleteReservationUseCase:
    """Cierra una reserva confirmada (estado terminal de éxito)."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: int) -> Reservation:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            reservation.complete(self._clock.now())
            reservation = await self._reservation_repo.update(reservation)

        self._logger.info("Reservation completed", extra={"reservation_id": reservation_id})
        return reservation
