import logging
from dataclasses import dataclass

from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.use_cases.recalculate_totals import RecalculateReservationTotalsUseCase
from app.domain.entities.invoice import Invoice
from app.domain.entities.payment import Payment
from app.domain.entities.reservation import Reservation
from app.domain.errors import InvoiceNotFoundError, ReservationNotFoundError
from app.domain.totals import approved_total


@dataclass
class ReconciliationResult:
    invoice: Invoice
    reservation: Reservation


@dataclass
class PaymentOutcome:
    payment: Payment | None
    invoice: Invoice
    reservation: Reservation


class ReconcileInvoiceUseCase:
    """
    Conciliación completa de una factura y su reserva.

    Recalcula lo pagado desde todos los pagos aprobados (nunca por deltas),
    deriva el estado de la factura y empuja el resultado a la reserva.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepo,
        payment_repo: PaymentRepo,
        reservation_repo: ReservationRepo,
        recalculate_totals: RecalculateReservationTotalsUseCase,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._payment_repo = payment_repo
        self._reservation_repo = reservation_repo
        self._recalculate_totals = recalculate_totals
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, invoice_id: int) -> ReconciliationResult:
        async with self._transaction_manager.start():
            invoice = await self._invoice_repo.get(invoice_id)
            if invoice is None:
                raise InvoiceNotFoundError(invoice_id)

            payments = await self._payment_repo.list_by_invoice(invoice_id)
            previous_status = invoice.status
            invoice.reconcile(approved_total(payments), self._clock.now())
            invoice = await self._invoice_repo.update(invoice)

            reservation = await self._reservation_repo.get(invoice.reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(invoice.reservation_id)
            reservation = await self._recalculate_totals.apply(reservation)

        if invoice.status != previous_status:
            self._logger.info(
                "Invoice status reconciled",
                extra={
                    "invoice_number": invoice.invoice_number,
                    "previous_status": previous_status.value,
                    "new_status": invoice.status.value,
                    "amount_paid": str(invoice.amount_paid),
                },
            )
        return ReconciliationResult(invoice=invoice, reservation=reservation)
