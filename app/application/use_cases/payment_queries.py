from typing import Sequence

from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.payment import Payment
from app.domain.errors import InvoiceNotFoundError, PaymentNotFoundError


class PaymentQueries:
    def __init__(
        self,
        payment_repo: PaymentRepo,
        invoice_repo: InvoiceRepo,
        transaction_manager: TransactionManager,
    ) -> None:
        self._payment_repo = payment_repo
        self._invoice_repo = invoice_repo
        self._transaction_manager = transaction_manager

    async def get(self, payment_id: int) -> Payment:
        async with self._transaction_manager.start():
            payment = await self._payment_repo.get(payment_id)
        if payment is None:
            raise PaymentNotFoundError(payment_id)
        return payment

    async def by_invoice(self, invoice_id: int) -> Sequence[Payment]:
        async with self._transaction_manager.start():
            if await self._invoice_repo.get(invoice_id) is None:
                raise InvoiceNotFoundError(invoice_id)
            return await self._payment_repo.list_by_invoice(invoice_id)
