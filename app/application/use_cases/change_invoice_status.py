import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.invoice import Invoice, InvoiceStatus
from app.domain.errors import InvalidStateError, InvoiceNotFoundError


class ChangeInvoiceStatusUseCase:
    """
    Corrección manual del estado de una factura.

    No consulta pagos; la conciliación vuelve a derivar el estado en el
    siguiente cambio de pagos. Cada override queda registrado en el log.
    """

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

    async def execute(
        self,
        invoice_id: int,
        new_status: InvoiceStatus | str,
        reason: str | None = None,
    ) -> Invoice:
        try:
            new_status = InvoiceStatus(new_status)
        except ValueError as exc:
            raise InvalidStateError(
                f"Estado de factura inválido: {new_status}", code="INVALID_INVOICE_STATUS_VALUE"
            ) from exc

        async with self._transaction_manager.start():
            invoice = await self._invoice_repo.get(invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)
            previous = invoice.override_status(new_status, self._clock.now())
            invoice = await self._invoice_repo.update(invoice)

        self._logger.warning(
            "Invoice status overridden manually",
            extra={
                "invoice_id": invoice_id,
                "invoice_number": invoice.invoice_number,
                "previous_status": previous.value,
                "new_status": new_status.value,
                "reason": reason,
            },
        )
        return invoice
