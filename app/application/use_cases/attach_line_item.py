import logging

from app.api.schemas.line_items import AttachLineItemRequest
from app.application.interfaces.clock import Clock
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.line_items.base import LineItemHandler
from app.application.use_cases.recalculate_totals import RecalculateReservationTotalsUseCase
from app.domain.entities.line_item import LineItem, LineItemKind
from app.domain.entities.reservation import Reservation
from app.domain.errors import ReservationNotFoundError


class AttachLineItemUseCase:
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

    async def execute(self, reservation_id: int, request: AttachLineItemRequest) -> LineItem:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            return await self.attach_to(reservation, request)

    async def attach_to(self, reservation: Reservation, request: AttachLineItemRequest) -> LineItem:
        """
        Asocia un ítem a una reserva ya cargada.

        Debe ejecutarse dentro de una transacción: descuenta cupos, guarda el
        ítem y recalcula los totales de la reserva como una sola unidad.
        """
        reservation.ensure_mutable("agregar ítems a la reserva")
        handler = self._handlers[LineItemKind(request.kind)]

        item = await handler.build(reservation, request, self._clock.today())
        item.created_at = self._clock.now()

        await handler.reserve(item)
        item = await self._line_item_repo.add(item)
        await self._recalculate_totals.apply(reservation)

        self._logger.info(
            "Line item attached",
            extra={
                "reservation_id": reservation.id,
                "item_id": item.id,
                "kind": item.kind.value,
                "resource_id": item.resource_id,
                "quantity": item.quantity,
                "subtotal": str(item.subtotal),
            },
        )
        return item
