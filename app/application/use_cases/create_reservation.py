import logging
from dataclasses import dataclass, field

from app.api.schemas.reservations import CreateFullReservationRequest, CreateReservationRequest
from app.application.interfaces.clock import Clock
from app.application.interfaces.directory import PartyDirectory
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.use_cases.attach_line_item import AttachLineItemUseCase
from app.domain.entities.line_item import LineItem
from app.domain.entities.reservation import Reservation
from app.domain.errors import ClientNotFoundError, EmployeeNotFoundError, QuantityOutOfBoundsError


class CreateReservationUseCase:
    def __init__(
        self,
        reservation_repo: ReservationRepo,
        directory: PartyDirectory,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._directory = directory
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateReservationRequest) -> Reservation:
        async with self._transaction_manager.start():
            if not await self._directory.client_exists(request.client_id):
                raise ClientNotFoundError(request.client_id)
            if not await self._directory.employee_exists(request.employee_id):
                raise EmployeeNotFoundError(request.employee_id)

            reservation = Reservation.open(
                client_id=request.client_id,
                employee_id=request.employee_id,
                trip_start=request.trip_start,
                trip_end=request.trip_end,
                passenger_count=request.passenger_count,
                now=self._clock.now(),
                status=request.status,
                description=request.description,
                observations=request.observations,
            )
            reservation = await self._reservation_repo.add(reservation)

        self._logger.info(
            "Reservation created",
            extra={
                "reservation_id": reservation.id,
                "client_id": reservation.client_id,
                "status": reservation.status.value,
            },
        )
        return reservation


@dataclass
class FullReservation:
    reservation: Reservation
    items: list[LineItem] = field(default_factory=list)


class CreateFullReservationUseCase:
    """
    Crea la reserva y asocia todos sus ítems en una sola transacción.

    Si cualquier ítem falla no queda ni la reserva ni cupos descontados.
    """

    def __init__(
        self,
        create_reservation: CreateReservationUseCase,
        attach_line_item: AttachLineItemUseCase,
        transaction_manager: TransactionManager,
    ) -> None:
        self._create_reservation = create_reservation
        self._attach_line_item = attach_line_item
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: CreateFullReservationRequest) -> FullReservation:
        if not request.items:
            raise QuantityOutOfBoundsError("La reserva completa debe incluir al menos un ítem")

        header = CreateReservationRequest.model_validate(request.model_dump(exclude={"items"}))
        async with self._transaction_manager.start():
            reservation = await self._create_reservation.execute(header)
            items = []
            for item_request in request.items:
                items.append(await self._attach_line_item.attach_to(reservation, item_request))

        self._logger.info(
            "Full reservation created",
            extra={
                "reservation_id": reservation.id,
                "items": len(items),
                "total_amount": str(reservation.total_amount),
            },
        )
        return FullReservation(reservation=reservation, items=items)
