import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.line_items.base import LineItemHandler
from app.application.use_cases.recalculate_totals import RecalculateReservationTotalsUseCase
from app.domain.entities.line_item import LineItemKind
from app.domain.entities.reservation import Reservation
from app.domain.errors import (
    LineItemAlreadyStartedError,
    LineItemNotFoundError,
    ReservationNotFoundError,
)


class DetachLineItemUseCase:
    def __init__(
        self,
        reservation_repo: ReservationRepo,
        line_item_repo: LineItemRepo,
        handlers: dict[LineItemKind, LineItemHandler],
        recalculate_totals: RecalculateReservationTotalsUseCase,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._line_item_repo = line_item_repo
        self._handlers = handlers
        self._recalculate_totals = recalculate_totals
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: int, item_id: int) -> Reservation:
        async with self._transaction_manager.start():
            item = await self._line_item_repo.get(item_id)
            if item is None or item.reservation_id != reservation_id:
                raise LineItemNotFoundError(item_id)

            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            reservation.ensure_mutable("eliminar ítems de la reserva")

            if item.has_started(self._clock.today()):
                raise LineItemAlreadyStartedError(item_id)

            if item.holds_capacity:
                await self._handlers[item.kind].release(item)
            await self._line_item_repo.delete(item_id)
            reservation = await self._recalculate_totals.apply(reservation)

            self._logger.info(
                "Line item detached",
                extra={
                    "reservation_id": reservation_id,
                    "item_id": item_id,
                    "kind": item.kind.value,
                    "released_capacity": item.capacity_delta(),
                },
            )
            return reservation
