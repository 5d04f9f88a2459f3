import logging

from app.api.schemas.reservations import UpdateReservationRequest
from app.application.interfaces.clock import Clock
from app.application.interfaces.directory import PartyDirectory
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.entities.line_item import LineItemKind
from app.domain.entities.reservation import Reservation
from app.domain.errors import (
    DateOutsideTripError,
    EmployeeNotFoundError,
    InvalidDateRangeError,
    QuantityOutOfBoundsError,
    ReservationNotFoundError,
)
from app.domain.value_objects.date_range import DateRange


class UpdateReservationUseCase:
    """Actualiza datos generales de una reserva abierta sin dejar ítems fuera del viaje."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        line_item_repo: LineItemRepo,
        directory: PartyDirectory,
        transaction_manager: TransactionManager,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._line_item_repo = line_item_repo
        self._directory = directory
        self._transaction_manager = transaction_manager
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: int, request: UpdateReservationRequest) -> Reservation:
        changes = request.model_dump(exclude_unset=True)
        async with self._transaction_manager.start():
            reservation = await self._reservation_repo.get(reservation_id)
            if reservation is None:
                raise ReservationNotFoundError(reservation_id)
            reservation.ensure_mutable("actualizar la reserva")

            if "employee_id" in changes and changes["employee_id"] is not None:
                if not await self._directory.employee_exists(changes["employee_id"]):
                    raise EmployeeNotFoundError(changes["employee_id"])
                reservation.employee_id = changes["employee_id"]

            items = await self._line_item_repo.list_by_reservation(reservation_id)

            trip_start = changes.get("trip_start") or reservation.trip_start
            trip_end = changes.get("trip_end") or reservation.trip_end
            if (trip_start, trip_end) != (reservation.trip_start, reservation.trip_end):
                trip = DateRange(start=trip_start, end=trip_end)
                if trip_start != reservation.trip_start and trip_start < self._clock.today():
                    raise InvalidDateRangeError(
                        f"La fecha de inicio del viaje ({trip_start}) no puede estar en el pasado"
                    )
                for item in items:
                    window = item.window
                    if window is not None and not window.within(trip):
                        raise DateOutsideTripError(window.start, window.end, trip.start, trip.end)
                reservation.trip_start = trip_start
                reservation.trip_end = trip_end

            if changes.get("passenger_count") is not None:
                passenger_count = changes["passenger_count"]
                flight_passengers = max(
                    (item.quantity for item in items if item.kind == LineItemKind.FLIGHT),
                    default=0,
                )
                if passenger_count < flight_passengers:
                    raise QuantityOutOfBoundsError(
                        f"La reserva tiene vuelos para {flight_passengers} pasajeros"
                    )
                reservation.passenger_count = passenger_count

            if "description" in changes:
                reservation.description = changes["description"]
            if "observations" in changes:
                reservation.observations = changes["observations"]

            reservation.updated_at = self._clock.now()
            reservation = await self._reservation_repo.update(reservation)

        self._logger.info(
            "Reservation updated",
            extra={"reservation_id": reservation_id, "fields": sorted(changes)},
        )
        return reservation
