import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.invoice import Invoice
from app.domain.errors import InvoiceNotFoundError


class CancelInvoiceUseCase:
    def __init__(
        self,
        invoice_repo: InvoiceRepo,
        payment_repo: PaymentRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._payment_repo = payment_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, invoice_id: int) -> Invoice:
        async with self._transaction_manager.start():
            invoice = await self._invoice_repo.get(invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)
            payments = await self._payment_repo.list_by_invoice(invoice_id)
            invoice.cancel(
                has_approved_payments=any(payment.is_approved for payment in payments),
                now=self._clock.now(),
            )
            invoice = await self._invoice_repo.update(invoice)

        self._logger.info(
            "Invoice cancelled",
            extra={"invoice_id": invoice_id, "invoice_number": invoice.invoice_number},
        )
        return invoice
