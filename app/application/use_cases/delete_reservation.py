import logging

from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.reservation import ReservationStatus
from app.domain.errors import (
    InvalidReservationStatusError,
    ReservationNotEmptyError,
    ReservationNotFoundError,
)


class DeleteReservationUseCase:
    """Solo una reserva pendiente y sin ítems puede eliminarse físicamente."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        line_item_repo: LineItemRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._line_item_repo = line_item_repo
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: int) -> None:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            if reservation.status != ReservationStatus.PENDING:
                raise InvalidReservationStatusError(
                    current_status=reservation.status.value,
                    expected_status=ReservationStatus.PENDING.value,
                    operation="eliminar la reserva",
                )
            if await self._line_item_repo.list_by_reservation(reservation_id):
                raise ReservationNotEmptyError(reservation_id)
            await self._reservation_repo.delete(reservation_id)

        self._logger.info("Reservation deleted", extra={"reservation_id": reservation_id})
