from datetime import date, timedelta

from app.api.schemas.line_items import AttachPackageRequest
from app.application.line_items.base import LineItemHandler
from app.domain.entities.line_item import LineItem, LineItemKind, PackageItem
from app.domain.entities.reservation import Reservation
from app.domain.errors import (
    InsufficientCapacityError,
    InvalidDateRangeError,
    QuantityOutOfBoundsError,
    ResourceNotFoundError,
    ResourceUnavailableError,
)
from app.domain.value_objects.date_range import DateRange


class PackageItemHandler(LineItemHandler):
    """Paquetes turísticos: personas x precio del paquete. Consume cupos."""

    kind = LineItemKind.PACKAGE
    resource_label = "Paquete"

    async def build(self, reservation: Reservation, request: AttachPackageRequest, today: date) -> PackageItem:
        package = await self._catalog.get_package(request.package_id)
        if package is None:
            raise ResourceNotFoundError(self.resource_label, request.package_id)
        if not package.is_active:
            raise ResourceUnavailableError(self.resource_label, package.id, "está inactivo")
        if package.is_expired(today):
            raise ResourceUnavailableError(self.resource_label, package.id, "está vencido")

        if request.persons > package.available_slots:
            raise InsufficientCapacityError(
                self.resource_label, package.id, request.persons, package.available_slots
            )
        if request.persons < package.min_persons:
            raise QuantityOutOfBoundsError(
                f"El paquete {package.id} requiere al menos {package.min_persons} personas"
            )
        if package.max_persons is not None and request.persons > package.max_persons:
            raise QuantityOutOfBoundsError(
                f"El paquete {package.id} admite como máximo {package.max_persons} personas"
            )

        end_date = request.end_date or request.start_date + timedelta(days=package.duration_days)
        window = DateRange(start=request.start_date, end=end_date)
        if window.start < today:
            raise InvalidDateRangeError(f"La fecha de inicio del paquete ({window.start}) ya pasó")
        self._ensure_within_trip(reservation, window)

        await self._ensure_not_attached(reservation, package.id)

        item = PackageItem(
            reservation_id=reservation.id,
            resource_id=package.id,
            quantity=request.persons,
            unit_price=package.price,
            start_date=window.start,
            end_date=window.end,
            customizations=request.customizations,
            observations=request.observations,
        )
        item.price()
        return item

    async def reserve(self, item: LineItem) -> None:
        package = await self._catalog.get_package(item.resource_id)
        if package is None:
            raise ResourceNotFoundError(self.resource_label, item.resource_id)
        package.reserve_slots(item.capacity_delta())
        await self._catalog.save_package_slots(package)

    async def release(self, item: LineItem) -> None:
        package = await self._catalog.get_package(item.resource_id)
        if package is None:
            raise ResourceNotFoundError(self.resource_label, item.resource_id)
        package.release_slots(item.capacity_delta())
        await self._catalog.save_package_slots(package)
