from datetime import date

from app.api.schemas.line_items import AttachFlightRequest
from app.application.line_items.base import LineItemHandler
from app.domain.entities.line_item import FlightItem, LineItem, LineItemKind
from app.domain.entities.reservation import Reservation
from app.domain.errors import (
    InsufficientCapacityError,
    QuantityOutOfBoundsError,
    ResourceNotFoundError,
    ResourceUnavailableError,
)
from app.domain.value_objects.date_range import DateRange
from app.domain.value_objects.money import to_amount


class FlightItemHandler(LineItemHandler):
    """Vuelos: pasajeros x precio de la clase + equipaje extra. Consume asientos."""

    kind = LineItemKind.FLIGHT
    resource_label = "Vuelo"

    async def build(self, reservation: Reservation, request: AttachFlightRequest, today: date) -> FlightItem:
        flight = await self._catalog.get_flight(request.flight_id)
        if flight is None:
            raise ResourceNotFoundError(self.resource_label, request.flight_id)
        if not flight.is_active:
            raise ResourceUnavailableError(self.resource_label, flight.id, "está inactivo")

        class_price = flight.price_for(request.cabin_class)
        segment = DateRange(
            start=flight.departure_at.date(),
            end=flight.arrival_at.date(),
            allow_same_day=True,
        )
        if segment.start < today:
            raise ResourceUnavailableError(self.resource_label, flight.id, "ya partió")
        self._ensure_within_trip(reservation, segment)

        if request.passengers > reservation.passenger_count:
            raise QuantityOutOfBoundsError(
                f"Se solicitaron {request.passengers} pasajeros pero la reserva tiene "
                f"{reservation.passenger_count}"
            )
        if request.assigned_seats and len(request.assigned_seats) != request.passengers:
            raise QuantityOutOfBoundsError(
                f"Se asignaron {len(request.assigned_seats)} asientos para {request.passengers} pasajeros"
            )

        await self._ensure_not_attached(reservation, flight.id)

        if request.passengers > flight.available_seats:
            raise InsufficientCapacityError(
                self.resource_label, flight.id, request.passengers, flight.available_seats
            )

        item = FlightItem(
            reservation_id=reservation.id,
            resource_id=flight.id,
            quantity=request.passengers,
            unit_price=class_price,
            start_date=segment.start,
            end_date=segment.end,
            cabin_class=request.cabin_class,
            assigned_seats=list(request.assigned_seats),
            baggage_included=request.baggage_included,
            extra_baggage_kg=request.extra_baggage_kg,
            extra_baggage_cost=to_amount(request.extra_baggage_cost),
            observations=request.observations,
        )
        item.price()
        return item

    async def reserve(self, item: LineItem) -> None:
        flight = await self._catalog.get_flight(item.resource_id)
        if flight is None:
            raise ResourceNotFoundError(self.resource_label, item.resource_id)
        flight.reserve_seats(item.capacity_delta())
        await self._catalog.save_flight_seats(flight)

    async def release(self, item: LineItem) -> None:
        flight = await self._catalog.get_flight(item.resource_id)
        if flight is None:
            raise ResourceNotFoundError(self.resource_label, item.resource_id)
        flight.release_seats(item.capacity_delta())
        await self._catalog.save_flight_seats(flight)
