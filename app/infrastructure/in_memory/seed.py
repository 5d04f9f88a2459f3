"""Catálogo de demostración para levantar la API en modo in-memory."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from app.domain.entities.catalog import (
    AdditionalService,
    Flight,
    Hotel,
    PaymentMethod,
    TourPackage,
)
from app.infrastructure.in_memory.store import InMemoryStore

logger = logging.getLogger(__name__)


def seed_demo_catalog(store: InMemoryStore, today: date) -> InMemoryStore:
    departure = datetime.combine(today + timedelta(days=30), time(8, 0), tzinfo=timezone.utc)

    store.clients.update({1, 2})
    store.employees.add(1)

    store.add_hotel(Hotel(id=1, name="Hotel Caribe Cartagena", price_per_night=Decimal("100.00"), room_count=20))
    store.add_hotel(Hotel(id=2, name="Hostal Centro", price_per_night=Decimal("45.00")))
    store.add_flight(
        Flight(
            id=1,
            flight_number="AV-9301",
            departure_at=departure,
            arrival_at=departure + timedelta(hours=2),
            economy_price=Decimal("150.00"),
            business_price=Decimal("420.00"),
            total_seats=10,
            available_seats=10,
        )
    )
    store.add_package(
        TourPackage(
            id=1,
            name="Islas del Rosario",
            price=Decimal("250.00"),
            duration_days=3,
            total_slots=12,
            available_slots=12,
            max_persons=8,
        )
    )
    store.add_service(AdditionalService(id=1, name="Traslado aeropuerto", unit_price=Decimal("25.00")))
    store.add_service(
        AdditionalService(id=2, name="Tour en chiva", unit_price=Decimal("40.00"), max_capacity=30)
    )
    store.add_payment_method(PaymentMethod(id=1, name="Tarjeta de crédito"))
    store.add_payment_method(PaymentMethod(id=2, name="Transferencia"))
    store.add_payment_method(PaymentMethod(id=3, name="Cheque", is_active=False))

    logger.info(
        "Demo catalog loaded",
        extra={"hotels": len(store.hotels), "flights": len(store.flights), "packages": len(store.packages)},
    )
    return store
