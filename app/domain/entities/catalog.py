"""
Registros de catálogo consumidos por el motor (solo lectura, salvo cupos).

Vuelos y paquetes llevan contadores de capacidad compartida protegidos por
lock_version; hoteles y servicios no tienen contador.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from app.domain.entities.line_item import CabinClass
from app.domain.errors import InsufficientCapacityError, ResourceUnavailableError
from app.domain.value_objects.money import ZERO


@dataclass
class Hotel:
    id: int
    name: str
    price_per_night: Decimal
    is_active: bool = True
    room_count: int | None = None

    @property
    def unit_price(self) -> Decimal:
        return self.price_per_night


@dataclass
class Flight:
    """Vuelo con precio por clase y asientos disponibles."""

    id: int
    flight_number: str
    departure_at: datetime
    arrival_at: datetime
    economy_price: Decimal
    total_seats: int
    available_seats: int
    business_price: Decimal | None = None
    is_active: bool = True
    lock_version: int = 0

    def price_for(self, cabin_class: CabinClass) -> Decimal:
        price = self.economy_price if cabin_class == CabinClass.ECONOMY else self.business_price
        if price is None or price <= ZERO:
            raise ResourceUnavailableError(
                "Vuelo", self.id, f"no ofrece la clase {cabin_class.value}"
            )
        return price

    def reserve_seats(self, seats: int) -> None:
        if seats > self.available_seats:
            raise InsufficientCapacityError("Vuelo", self.id, seats, self.available_seats)
        self.available_seats -= seats

    def release_seats(self, seats: int) -> None:
        self.available_seats = min(self.total_seats, self.available_seats + seats)


@dataclass
class TourPackage:
    """Paquete turístico con cupos y tamaño de grupo."""

    id: int
    name: str
    price: Decimal
    duration_days: int
    total_slots: int
    available_slots: int
    min_persons: int = 1
    max_persons: int | None = None
    valid_until: date | None = None
    is_active: bool = True
    lock_version: int = 0

    @property
    def unit_price(self) -> Decimal:
        return self.price

    def is_expired(self, today: date) -> bool:
        return self.valid_until is not None and self.valid_until < today

    def reserve_slots(self, persons: int) -> None:
        if persons > self.available_slots:
            raise InsufficientCapacityError("Paquete", self.id, persons, self.available_slots)
        self.available_slots -= persons

    def release_slots(self, persons: int) -> None:
        self.available_slots = min(self.total_slots, self.available_slots + persons)


@dataclass
class AdditionalService:
    id: int
    name: str
    unit_price: Decimal
    is_active: bool = True
    is_available: bool = True
    max_capacity: int | None = None


@dataclass
class PaymentMethod:
    id: int
    name: str
    is_active: bool = True
