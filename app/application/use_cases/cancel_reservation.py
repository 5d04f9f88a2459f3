import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.line_items.base import LineItemHandler
from app.domain.entities.line_item import LineItemKind
from app.domain.entities.reservation import Reservation
from app.domain.errors import ReservationNotFoundError


class CancelReservationUseCase:
    """
    Cancela la reserva y devuelve los cupos de vuelos y paquetes asociados.

    Los ítems quedan como historial marcados con capacity_released; el cambio
    de estado y la devolución de cupos ocurren en la misma transacción.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        line_item_repo: LineItemRepo,
        handlers: dict[LineItemKind, LineItemHandler],
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._line_item_repo = line_item_repo
        self._handlers = handlers
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: int, reason: str) -> Reservation:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            reservation.cancel(reason, self._clock.now())

            items = await self._line_item_repo.list_by_reservation(reservation_id)
            # Las habitaciones de hotel no tienen contador propio: dejan de
            # ocupar inventario al quedar marcadas como liberadas.
            released = []
            for item in items:
                if item.capacity_released:
                    continue
                if item.holds_capacity:
                    await self._handlers[item.kind].release(item)
                released.append(item.id)
            if released:
                await self._line_item_repo.mark_capacity_released(released)

            reservation = await self._reservation_repo.update(reservation)

        self._logger.info(
            "Reservation cancelled",
            extra={
                "reservation_id": reservation_id,
                "reason": reservation.cancellation_reason,
                "released_items": released,
            },
        )
        return reservation
