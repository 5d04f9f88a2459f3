import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.use_cases.reconcile_invoice import PaymentOutcome, ReconcileInvoiceUseCase
from app.domain.entities.payment import PaymentStatus
from app.domain.errors import (
    InvalidStateError,
    InvoiceNotFoundError,
    PaymentExceedsBalanceError,
    PaymentNotFoundError,
)
from app.domain.totals import approved_total, pending_balance


class ChangePaymentStatusUseCase:
    def __init__(
        self,
        payment_repo: PaymentRepo,
        invoice_repo: InvoiceRepo,
        reconcile_invoice: ReconcileInvoiceUseCase,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._payment_repo = payment_repo
        self._invoice_repo = invoice_repo
        self._reconcile_invoice = reconcile_invoice
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, payment_id: int, new_status: PaymentStatus | str) -> PaymentOutcome:
        try:
            new_status = PaymentStatus(new_status)
        except ValueError as exc:
            raise InvalidStateError(
                f"Estado de pago inválido: {new_status}", code="INVALID_PAYMENT_STATUS_VALUE"
            ) from exc

        async with self._transaction_manager.start():
            payment = await self._payment_repo.get(payment_id)
            if payment is None:
                raise PaymentNotFoundError(payment_id)
            invoice = await self._invoice_repo.get(payment.invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(payment.invoice_id)

            previous = payment.status
            if new_status == PaymentStatus.APPROVED and previous != PaymentStatus.APPROVED:
                invoice.ensure_accepts_payments()
                payments = await self._payment_repo.list_by_invoice(invoice.id)
                balance = pending_balance(invoice.total, approved_total(payments, exclude_id=payment.id))
                if payment.amount > balance:
                    raise PaymentExceedsBalanceError(payment.amount, balance)

            if payment.change_status(new_status, self._clock.now()):
                payment = await self._payment_repo.update(payment)
            result = await self._reconcile_invoice.execute(invoice.id)

        self._logger.info(
            "Payment status changed",
            extra={
                "payment_id": payment_id,
                "previous_status": previous.value,
                "new_status": new_status.value,
                "invoice_status": result.invoice.status.value,
            },
        )
        return PaymentOutcome(payment=payment, invoice=result.invoice, reservation=result.reservation)
