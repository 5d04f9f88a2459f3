from dataclasses import dataclass, field

from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.invoice import Invoice
from app.domain.entities.line_item import LineItem
from app.domain.entities.reservation import Reservation
from app.domain.errors import ReservationNotFoundError


@dataclass
class ReservationView:
    """Proyección de la reserva con sus ítems y facturas."""

    reservation: Reservation
    items: list[LineItem] = field(default_factory=list)
    invoices: list[Invoice] = field(default_factory=list)


class GetReservationUseCase:
    def __init__(
        self,
        reservation_repo: ReservationRepo,
        line_item_repo: LineItemRepo,
        invoice_repo: InvoiceRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._line_item_repo = line_item_repo
        self._invoice_repo = invoice_repo
        self._transaction_manager = transaction_manager

    async def execute(self, reservation_id: int) -> ReservationView:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            items = await self._line_item_repo.list_by_reservation(reservation_id)
            invoices = await self._invoice_repo.list_by_reservation(reservation_id)
        return ReservationView(reservation=reservation, items=list(items), invoices=list(invoices))
