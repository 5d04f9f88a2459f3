import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.invoice import Invoice, InvoiceStatus


class MarkOverdueInvoicesUseCase:
    """Pasa a OVERDUE las facturas pendientes cuya fecha de vencimiento ya pasó."""

    def __init__(
        self,
        invoice_repo: InvoiceRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self) -> list[Invoice]:
        today = self._clock.today()
        marked: list[Invoice] = []
        async with self._transaction_manager.start():
            for invoice in await self._invoice_repo.list_by_status([InvoiceStatus.PENDING]):
                if invoice.mark_overdue(today, self._clock.now()):
                    marked.append(await self._invoice_repo.update(invoice))

        if marked:
            self._logger.info(
                "Invoices marked as overdue",
                extra={"invoice_numbers": [invoice.invoice_number for invoice in marked]},
            )
        return marked
