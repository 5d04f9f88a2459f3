import logging

from app.api.schemas.payments import RecordPaymentRequest
from app.application.interfaces.catalog import CatalogLookup
from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.use_cases.reconcile_invoice import PaymentOutcome, ReconcileInvoiceUseCase
from app.domain.entities.payment import Payment
from app.domain.errors import (
    DuplicatePaymentReferenceError,
    InvoiceNotFoundError,
    PaymentExceedsBalanceError,
    PaymentMethodInactiveError,
    PaymentMethodNotFoundError,
)
from app.domain.totals import approved_total, pending_balance
from app.domain.value_objects.money import to_amount


class RecordPaymentUseCase:
    def __init__(
        self,
        invoice_repo: InvoiceRepo,
        payment_repo: PaymentRepo,
        catalog: CatalogLookup,
        reconcile_invoice: ReconcileInvoiceUseCase,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._payment_repo = payment_repo
        self._catalog = catalog
        self._reconcile_invoice = reconcile_invoice
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: RecordPaymentRequest) -> PaymentOutcome:
        amount = to_amount(request.amount)
        async with self._transaction_manager.start():
            invoice = await self._invoice_repo.get(request.invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(request.invoice_id)
            method = await self._catalog.get_payment_method(request.payment_method_id)
            if method is None:
                raise PaymentMethodNotFoundError(request.payment_method_id)
            if not method.is_active:
                raise PaymentMethodInactiveError(method.id)
            invoice.ensure_accepts_payments()

            reference = request.transaction_reference
            if reference and await self._payment_repo.reference_exists(reference):
                raise DuplicatePaymentReferenceError(reference)

            payments = await self._payment_repo.list_by_invoice(invoice.id)
            balance = pending_balance(invoice.total, approved_total(payments))
            if amount > balance:
                raise PaymentExceedsBalanceError(amount, balance)

            payment = Payment.record(
                invoice_id=invoice.id,
                payment_method_id=method.id,
                amount=amount,
                now=self._clock.now(),
                status=request.status,
                transaction_reference=reference,
                receipt_url=str(request.receipt_url) if request.receipt_url else None,
                observations=request.observations,
            )
            payment = await self._payment_repo.add(payment)
            result = await self._reconcile_invoice.execute(invoice.id)

        self._logger.info(
            "Payment recorded",
            extra={
                "payment_id": payment.id,
                "invoice_number": result.invoice.invoice_number,
                "amount": str(payment.amount),
                "status": payment.status.value,
                "invoice_status": result.invoice.status.value,
            },
        )
        return PaymentOutcome(payment=payment, invoice=result.invoice, reservation=result.reservation)
