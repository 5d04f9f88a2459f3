"""Puerto de catálogo - lectura de recursos y escritura de cupos compartidos."""

from app.domain.entities.catalog import (
    AdditionalService,
    Flight,
    Hotel,
    PaymentMethod,
    TourPackage,
)


class CatalogLookup:
    async def get_hotel(self, hotel_id: int) -> Hotel | None:
        raise NotImplementedError

    async def get_flight(self, flight_id: int) -> Flight | None:
        raise NotImplementedError

    async def get_package(self, package_id: int) -> TourPackage | None:
        raise NotImplementedError

    async def get_service(self, service_id: int) -> AdditionalService | None:
        raise NotImplementedError

    async def get_payment_method(self, payment_method_id: int) -> PaymentMethod | None:
        raise NotImplementedError

    async def save_flight_seats(self, flight: Flight) -> Flight:
        """Guarda available_seats con control optimista sobre lock_version."""
        raise NotImplementedError

    async def save_package_slots(self, package: TourPackage) -> TourPackage:
        """Guarda available_slots con control optimista sobre lock_version."""
        raise NotImplementedError
