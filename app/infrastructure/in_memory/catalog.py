import copy

from app.application.interfaces.catalog import CatalogLookup
from app.domain.entities.catalog import (
    AdditionalService,
    Flight,
    Hotel,
    PaymentMethod,
    TourPackage,
)
from app.domain.errors import OptimisticLockError
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryCatalog(CatalogLookup):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get_hotel(self, hotel_id: int) -> Hotel | None:
        return copy.deepcopy(self._store.hotels.get(hotel_id))

    async def get_flight(self, flight_id: int) -> Flight | None:
        return copy.deepcopy(self._store.flights.get(flight_id))

    async def get_package(self, package_id: int) -> TourPackage | None:
        return copy.deepcopy(self._store.packages.get(package_id))

    async def get_service(self, service_id: int) -> AdditionalService | None:
        return copy.deepcopy(self._store.services.get(service_id))

    async def get_payment_method(self, payment_method_id: int) -> PaymentMethod | None:
        return copy.deepcopy(self._store.payment_methods.get(payment_method_id))

    async def save_flight_seats(self, flight: Flight) -> Flight:
        stored = self._store.flights.get(flight.id)
        if stored is None or stored.lock_version != flight.lock_version:
            raise OptimisticLockError("vuelo", flight.id, flight.lock_version)
        stored.available_seats = flight.available_seats
        stored.lock_version += 1
        flight.lock_version = stored.lock_version
        return flight

    async def save_package_slots(self, package: TourPackage) -> TourPackage:
        stored = self._store.packages.get(package.id)
        if stored is None or stored.lock_version != package.lock_version:
            raise OptimisticLockError("paquete", package.id, package.lock_version)
        stored.available_slots = package.available_slots
        stored.lock_version += 1
        package.lock_version = stored.lock_version
        return package
