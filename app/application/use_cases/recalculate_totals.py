import logging

from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.reservation import Reservation
from app.domain.errors import ReservationNotFoundError
from app.domain.totals import approved_total, reservation_total


class RecalculateReservationTotalsUseCase:
    """
    Recalcula total, pagado y saldo de una reserva desde sus registros fuente.

    El total es la suma de subtotales de los ítems asociados y lo pagado es la
    suma de pagos aprobados de todas sus facturas. Ejecutarlo dos veces seguidas
    produce el mismo resultado.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        line_item_repo: LineItemRepo,
        invoice_repo: InvoiceRepo,
        payment_repo: PaymentRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._line_item_repo = line_item_repo
        self._invoice_repo = invoice_repo
        self._payment_repo = payment_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: int) -> Reservation:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            return await self.apply(reservation)

    async def apply(self, reservation: Reservation) -> Reservation:
        """Recalcula sobre una reserva ya cargada dentro de la transacción en curso."""
        items = await self._line_item_repo.list_by_reservation(reservation.id)
        invoices = await self._invoice_repo.list_by_reservation(reservation.id)
        payments = []
        if invoices:
            payments = await self._payment_repo.list_by_invoices([invoice.id for invoice in invoices])

        reservation.apply_totals(
            total_amount=reservation_total(items),
            amount_paid=approved_total(payments),
            now=self._clock.now(),
        )
        reservation = await self._reservation_repo.update(reservation)
        self._logger.debug(
            "Reservation totals recalculated",
            extra={
                "reservation_id": reservation.id,
                "total_amount": str(reservation.total_amount),
                "amount_paid": str(reservation.amount_paid),
                "balance_due": str(reservation.balance_due),
            },
        )
        return reservation
