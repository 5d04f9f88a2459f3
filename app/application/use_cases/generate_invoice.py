import logging

from app.api.schemas.invoices import GenerateInvoiceRequest
from app.application.interfaces.clock import Clock
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.invoice import Invoice, InvoiceStatus
from app.domain.entities.reservation import ReservationStatus
from app.domain.errors import (
    InvalidReservationStatusError,
    InvoiceAlreadyExistsError,
    NothingToInvoiceError,
    ReservationNotFoundError,
)
from app.domain.value_objects.invoice_number import InvoiceNumber
from app.domain.value_objects.money import ZERO


class GenerateInvoiceUseCase:
    """
    Emite la factura de una reserva confirmada.

    Una reserva tiene como máximo una factura vigente: un segundo intento se
    rechaza con InvoiceAlreadyExistsError. Solo si todas sus facturas fueron
    anuladas puede emitirse una nueva.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        invoice_repo: InvoiceRepo,
        transaction_manager: TransactionManager,
        clock: Clock,
        number_prefix: str = "FAC",
        due_days: int = 30,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._invoice_repo = invoice_repo
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._number_prefix = number_prefix
        self._due_days = due_days
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: GenerateInvoiceRequest) -> Invoice:
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(request.reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(request.reservation_id)
            if reservation.status != ReservationStatus.CONFIRMED:
                raise InvalidReservationStatusError(
                    current_status=reservation.status.value,
                    expected_status=ReservationStatus.CONFIRMED.value,
                    operation="facturar la reserva",
                )

            for existing in await self._invoice_repo.list_by_reservation(reservation.id):
                if existing.status != InvoiceStatus.CANCELLED:
                    raise InvoiceAlreadyExistsError(reservation.id, existing.invoice_number)

            if reservation.total_amount <= ZERO:
                raise NothingToInvoiceError(reservation.id)

            today = self._clock.today()
            invoice = Invoice.issue(
                reservation_id=reservation.id,
                invoice_number=await self._next_number(today.year),
                total=reservation.total_amount,
                issue_date=today,
                due_days=self._due_days,
                now=self._clock.now(),
                observations=request.observations,
            )
            invoice = await self._invoice_repo.add(invoice)

        self._logger.info(
            "Invoice generated",
            extra={
                "reservation_id": reservation.id,
                "invoice_id": invoice.id,
                "invoice_number": invoice.invoice_number,
                "total": str(invoice.total),
            },
        )
        return invoice

    async def _next_number(self, year: int) -> str:
        last = await self._invoice_repo.last_number(self._number_prefix, year)
        if last is None:
            return InvoiceNumber.first(self._number_prefix, year).value
        return InvoiceNumber.parse(last).next().value
