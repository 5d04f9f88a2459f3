from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.catalog import CatalogLookup
from app.domain.entities.catalog import (
    AdditionalService,
    Flight,
    Hotel,
    PaymentMethod,
    TourPackage,
)
from app.domain.errors import OptimisticLockError
from app.infrastructure.db.tables import (
    additional_services,
    flights,
    hotels,
    payment_methods,
    tour_packages,
)


class CatalogSQL(CatalogLookup):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _row(self, table, entity_id: int):
        stmt = select(table).where(table.c.id == entity_id).limit(1)
        result = await self._session.execute(stmt)
        return result.mappings().first()

    async def get_hotel(self, hotel_id: int) -> Hotel | None:
        row = await self._row(hotels, hotel_id)
        if not row:
            return None
        return Hotel(
            id=row["id"],
            name=row["name"],
            price_per_night=row["price_per_night"],
            is_active=bool(row["is_active"]),
            room_count=row["room_count"],
        )

    async def get_flight(self, flight_id: int) -> Flight | None:
        row = await self._row(flights, flight_id)
        if not row:
            return None
        return Flight(
            id=row["id"],
            flight_number=row["flight_number"],
            departure_at=row["departure_at"],
            arrival_at=row["arrival_at"],
            economy_price=row["economy_price"],
            business_price=row["business_price"],
            total_seats=row["total_seats"],
            available_seats=row["available_seats"],
            is_active=bool(row["is_active"]),
            lock_version=row["lock_version"],
        )

    async def get_package(self, package_id: int) -> TourPackage | None:
        row = await self._row(tour_packages, package_id)
        if not row:
            return None
        return TourPackage(
            id=row["id"],
            name=row["name"],
            price=row["price"],
            duration_days=row["duration_days"],
            total_slots=row["total_slots"],
            available_slots=row["available_slots"],
            min_persons=row["min_persons"],
            max_persons=row["max_persons"],
            valid_until=row["valid_until"],
            is_active=bool(row["is_active"]),
            lock_version=row["lock_version"],
        )

    async def get_service(self, service_id: int) -> AdditionalService | None:
        row = await self._row(additional_services, service_id)
        if not row:
            return None
        return AdditionalService(
            id=row["id"],
            name=row["name"],
            unit_price=row["unit_price"],
            is_active=bool(row["is_active"]),
            is_available=bool(row["is_available"]),
            max_capacity=row["max_capacity"],
        )

    async def get_payment_method(self, payment_method_id: int) -> PaymentMethod | None:
        row = await self._row(payment_methods, payment_method_id)
        if not row:
            return None
        return PaymentMethod(id=row["id"], name=row["name"], is_active=bool(row["is_active"]))

    async def save_flight_seats(self, flight: Flight) -> Flight:
        stmt = (
            update(flights)
            .where(flights.c.id == flight.id)
            .where(flights.c.lock_version == flight.lock_version)
            .values(available_seats=flight.available_seats, lock_version=flight.lock_version + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError("vuelo", flight.id, flight.lock_version)
        flight.lock_version += 1
        return flight

    async def save_package_slots(self, package: TourPackage) -> TourPackage:
        stmt = (
            update(tour_packages)
            .where(tour_packages.c.id == package.id)
            .where(tour_packages.c.lock_version == package.lock_version)
            .values(available_slots=package.available_slots, lock_version=package.lock_version + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError("paquete", package.id, package.lock_version)
        package.lock_version += 1
        return package
