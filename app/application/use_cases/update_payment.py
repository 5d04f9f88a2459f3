import logging

from app.api.schemas.payments import UpdatePaymentRequest
from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.use_cases.reconcile_invoice import PaymentOutcome, ReconcileInvoiceUseCase
from app.domain.errors import (
    DuplicatePaymentReferenceError,
    InvoiceNotFoundError,
    PaymentExceedsBalanceError,
    PaymentNotFoundError,
)
from app.domain.totals import approved_total, pending_balance
from app.domain.value_objects.money import to_amount


class UpdatePaymentUseCase:
    """
    Modifica monto, referencia, comprobante u observaciones de un pago.

    Un nuevo monto se valida contra el saldo pendiente sin contar el propio
    pago; después se concilia la factura completa.
    """

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

    async def execute(self, payment_id: int, request: UpdatePaymentRequest) -> PaymentOutcome:
        changes = request.model_dump(exclude_unset=True)
        now = self._clock.now()
        async with self._transaction_manager.start():
            payment = await self._payment_repo.get(payment_id)
            if payment is None:
                raise PaymentNotFoundError(payment_id)
            invoice = await self._invoice_repo.get(payment.invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(payment.invoice_id)

            if changes.get("amount") is not None:
                payment.ensure_amount_editable()
                amount = to_amount(changes["amount"])
                payments = await self._payment_repo.list_by_invoice(invoice.id)
                balance = pending_balance(invoice.total, approved_total(payments, exclude_id=payment.id))
                if amount > balance:
                    raise PaymentExceedsBalanceError(amount, balance)
                payment.change_amount(amount, now)

            reference = changes.get("transaction_reference")
            if reference and reference != payment.transaction_reference:
                if await self._payment_repo.reference_exists(reference, exclude_payment_id=payment.id):
                    raise DuplicatePaymentReferenceError(reference)
                payment.transaction_reference = reference

            if "receipt_url" in changes:
                payment.receipt_url = str(request.receipt_url) if request.receipt_url else None
            if "observations" in changes:
                payment.observations = changes["observations"]

            payment.updated_at = now
            payment = await self._payment_repo.update(payment)
            result = await self._reconcile_invoice.execute(invoice.id)

        self._logger.info(
            "Payment updated",
            extra={"payment_id": payment_id, "fields": sorted(changes), "amount": str(payment.amount)},
        )
        return PaymentOutcome(payment=payment, invoice=result.invoice, reservation=result.reservation)
