from typing import Sequence

from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.invoice import Invoice, InvoiceStatus
from app.domain.errors import InvoiceNotFoundError, ReservationNotFoundError

OPEN_STATUSES = (InvoiceStatus.PENDING, InvoiceStatus.OVERDUE)


class InvoiceQueries:
    """Consultas de facturas (solo lectura)."""

    def __init__(
        self,
        invoice_repo: InvoiceRepo,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager
        self._clock = clock

    async def get(self, invoice_id: int) -> Invoice:
        async with self._transaction_manager.start():
            invoice = await self._invoice_repo.get(invoice_id)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice

    async def get_by_number(self, invoice_number: str) -> Invoice:
        async with self._transaction_manager.start():
            invoice = await self._invoice_repo.get_by_number(invoice_number.strip().upper())
        if invoice is None:
            raise InvoiceNotFoundError(invoice_number)
        return invoice

    async def by_reservation(self, reservation_id: int) -> Sequence[Invoice]:
        async with self._transaction_manager.start():
            if await self._reservation_repo.get(reservation_id) is None:
                raise ReservationNotFoundError(reservation_id)
            return await self._invoice_repo.list_by_reservation(reservation_id)

    async def by_status(self, status: InvoiceStatus) -> Sequence[Invoice]:
        async with self._transaction_manager.start():
            return await self._invoice_repo.list_by_status([status])

    async def overdue(self) -> list[Invoice]:
        """Facturas sin pagar cuya fecha de vencimiento ya pasó (marcadas o no)."""
        today = self._clock.today()
        async with self._transaction_manager.start():
            invoices = await self._invoice_repo.list_by_status(OPEN_STATUSES)
        return [invoice for invoice in invoices if invoice.is_past_due(today)]

    async def due_soon(self, days: int) -> list[Invoice]:
        today = self._clock.today()
        async with self._transaction_manager.start():
            invoices = await self._invoice_repo.list_by_status(OPEN_STATUSES)
        return [invoice for invoice in invoices if invoice.is_due_within(today, days)]
