from datetime import date

from app.api.schemas.line_items import AttachServiceRequest
from app.application.line_items.base import LineItemHandler
from app.domain.entities.line_item import LineItemKind, ServiceItem
from app.domain.entities.reservation import Reservation
from app.domain.errors import (
    InsufficientCapacityError,
    InvalidDateRangeError,
    ResourceNotFoundError,
    ResourceUnavailableError,
)
from app.domain.value_objects.date_range import DateRange


class ServiceItemHandler(LineItemHandler):
    # Un mismo servicio puede agregarse varias veces a la reserva.
    kind = LineItemKind.SERVICE
    resource_label = "Servicio"

    async def build(self, reservation: Reservation, request: AttachServiceRequest, today: date) -> ServiceItem:
        service = await self._catalog.get_service(request.service_id)
        if service is None:
            raise ResourceNotFoundError(self.resource_label, request.service_id)
        if not service.is_active or not service.is_available:
            raise ResourceUnavailableError(self.resource_label, service.id)
        if service.max_capacity is not None and request.quantity > service.max_capacity:
            raise InsufficientCapacityError(
                self.resource_label, service.id, request.quantity, service.max_capacity
            )

        if request.service_date is not None:
            if request.service_date < today:
                raise InvalidDateRangeError(
                    f"La fecha del servicio ({request.service_date}) no puede estar en el pasado"
                )
            self._ensure_within_trip(
                reservation,
                DateRange(start=request.service_date, end=request.service_date, allow_same_day=True),
            )

        item = ServiceItem(
            reservation_id=reservation.id,
            resource_id=service.id,
            quantity=request.quantity,
            unit_price=service.unit_price,
            start_date=request.service_date,
            end_date=request.service_date,
            service_time=request.service_time,
            observations=request.observations,
        )
        item.price()
        return item
