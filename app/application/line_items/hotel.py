from datetime import date

from app.api.schemas.line_items import AttachHotelRequest
from app.application.line_items.base import LineItemHandler
from app.domain.entities.line_item import HotelItem, LineItemKind
from app.domain.entities.reservation import Reservation
from app.domain.errors import (
    InsufficientCapacityError,
    InvalidDateRangeError,
    QuantityOutOfBoundsError,
    ResourceNotFoundError,
    ResourceUnavailableError,
)
from app.domain.value_objects.date_range import DateRange


class HotelItemHandler(LineItemHandler):
    """Estadías: noches x precio por noche x habitaciones. Un hotel por reserva."""

    kind = LineItemKind.HOTEL
    resource_label = "Hotel"

    async def build(self, reservation: Reservation, request: AttachHotelRequest, today: date) -> HotelItem:
        hotel = await self._catalog.get_hotel(request.hotel_id)
        if hotel is None:
            raise ResourceNotFoundError(self.resource_label, request.hotel_id)
        if not hotel.is_active:
            raise ResourceUnavailableError(self.resource_label, hotel.id, "está inactivo")

        stay = DateRange(start=request.check_in, end=request.check_out)
        if stay.start < today:
            raise InvalidDateRangeError(f"La fecha de check-in ({stay.start}) no puede estar en el pasado")
        self._ensure_within_trip(reservation, stay)
        if request.guests > reservation.passenger_count:
            raise QuantityOutOfBoundsError(
                f"Se indicaron {request.guests} huéspedes pero la reserva tiene "
                f"{reservation.passenger_count} pasajeros"
            )

        await self._ensure_not_attached(reservation, hotel.id)

        if hotel.room_count is not None:
            booked = await self._line_item_repo.rooms_booked(hotel.id, stay)
            available = max(hotel.room_count - booked, 0)
            if request.rooms > available:
                raise InsufficientCapacityError(self.resource_label, hotel.id, request.rooms, available)

        item = HotelItem(
            reservation_id=reservation.id,
            resource_id=hotel.id,
            quantity=request.rooms,
            unit_price=hotel.price_per_night,
            start_date=stay.start,
            end_date=stay.end,
            room_type=request.room_type,
            guests=request.guests,
            observations=request.observations,
        )
        item.price()
        return item
