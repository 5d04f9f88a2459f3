"""
Integration tests for the SQLAlchemy repositories.

Corre los mismos casos de uso que la API sobre SQLite in-memory (aiosqlite)
para verificar el mapeo de tablas, el control optimista por lock_version y
la reversión de la unidad de trabajo.
"""

from datetime import datetime, time, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import func, insert, select

from app.api.dependencies import build_use_cases
from app.api.schemas.invoices import GenerateInvoiceRequest
from app.api.schemas.line_items import AttachFlightRequest, AttachHotelRequest
from app.api.schemas.payments import RecordPaymentRequest
from app.api.schemas.reservations import CreateFullReservationRequest, CreateReservationRequest
from app.domain.entities.invoice import InvoiceStatus
from app.domain.entities.line_item import FlightItem
from app.domain.errors import InsufficientCapacityError, OptimisticLockError
from app.domain.value_objects.date_range import DateRange
from app.infrastructure.db.repositories.catalog_sql import CatalogSQL
from app.infrastructure.db.repositories.directory_sql import PartyDirectorySQL
from app.infrastructure.db.repositories.invoice_repo_sql import InvoiceRepoSQL
from app.infrastructure.db.repositories.line_item_repo_sql import LineItemRepoSQL
from app.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from app.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from app.infrastructure.db.tables import (
    clients,
    employees,
    flights,
    hotels,
    invoices,
    payment_methods,
    reservations,
    tour_packages,
)
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager


async def _seed_catalog(session, today) -> None:
    departure = datetime.combine(today + timedelta(days=30), time(8, 0))
    async with session.begin():
        await session.execute(insert(clients).values(id=1, full_name="Ana Gómez"))
        await session.execute(insert(employees).values(id=1, full_name="Luis Pérez"))
        await session.execute(
            insert(hotels).values(id=1, name="Hotel Caribe", price_per_night=Decimal("100.00"), room_count=5)
        )
        await session.execute(
            insert(flights).values(
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
        await session.execute(
            insert(tour_packages).values(
                id=1,
                name="Islas del Rosario",
                price=Decimal("250.00"),
                duration_days=3,
                total_slots=2,
                available_slots=2,
            )
        )
        await session.execute(insert(payment_methods).values(id=1, name="Tarjeta"))


@pytest_asyncio.fixture
async def sql_use_cases(db_session, clock, settings):
    await _seed_catalog(db_session, clock.today())
    return build_use_cases(
        reservation_repo=ReservationRepoSQL(db_session),
        line_item_repo=LineItemRepoSQL(db_session),
        invoice_repo=InvoiceRepoSQL(db_session),
        payment_repo=PaymentRepoSQL(db_session),
        catalog=CatalogSQL(db_session),
        directory=PartyDirectorySQL(db_session),
        tx_manager=SQLAlchemyTransactionManager(db_session),
        clock=clock,
        settings=settings,
    )


def _reservation_request(clock, **overrides) -> CreateReservationRequest:
    fields = {
        "client_id": 1,
        "employee_id": 1,
        "trip_start": clock.today() + timedelta(days=28),
        "trip_end": clock.today() + timedelta(days=40),
        "passenger_count": 4,
    }
    fields.update(overrides)
    return CreateReservationRequest(**fields)


async def _available_seats(session) -> int:
    async with session.begin():
        flight = await CatalogSQL(session).get_flight(1)
    return flight.available_seats


async def test_reservation_lifecycle_with_payment(sql_use_cases, db_session, clock):
    reservation = await sql_use_cases["create_reservation"].execute(_reservation_request(clock))
    await sql_use_cases["attach_line_item"].execute(
        reservation.id,
        AttachHotelRequest(
            hotel_id=1,
            check_in=clock.today() + timedelta(days=30),
            check_out=clock.today() + timedelta(days=32),
            guests=2,
        ),
    )
    flight_item = await sql_use_cases["attach_line_item"].execute(
        reservation.id, AttachFlightRequest(flight_id=1, passengers=3, assigned_seats=["4A", "4B", "4C"])
    )
    assert await _available_seats(db_session) == 7

    view = await sql_use_cases["get_reservation"].execute(reservation.id)
    assert view.reservation.total_amount == Decimal("650.00")
    stored_flight = next(item for item in view.items if item.id == flight_item.id)
    assert isinstance(stored_flight, FlightItem)
    assert stored_flight.assigned_seats == ["4A", "4B", "4C"]

    await sql_use_cases["confirm_reservation"].execute(reservation.id)
    invoice = await sql_use_cases["generate_invoice"].execute(GenerateInvoiceRequest(reservation_id=reservation.id))
    assert invoice.invoice_number == "FAC-2026-00001"

    outcome = await sql_use_cases["record_payment"].execute(
        RecordPaymentRequest(
            invoice_id=invoice.id,
            payment_method_id=1,
            amount=Decimal("650.00"),
            status="APPROVED",
        )
    )
    assert outcome.invoice.status == InvoiceStatus.PAID
    assert outcome.reservation.balance_due == Decimal("0.00")


async def test_cancel_releases_seats_in_database(sql_use_cases, db_session, clock):
    reservation = await sql_use_cases["create_reservation"].execute(_reservation_request(clock))
    await sql_use_cases["attach_line_item"].execute(reservation.id, AttachFlightRequest(flight_id=1, passengers=4))
    await sql_use_cases["attach_line_item"].execute(
        reservation.id,
        AttachHotelRequest(
            hotel_id=1,
            rooms=5,
            check_in=clock.today() + timedelta(days=30),
            check_out=clock.today() + timedelta(days=32),
        ),
    )
    assert await _available_seats(db_session) == 6

    await sql_use_cases["cancel_reservation"].execute(reservation.id, "Cliente desistió")

    assert await _available_seats(db_session) == 10
    view = await sql_use_cases["get_reservation"].execute(reservation.id)
    assert all(item.capacity_released for item in view.items)

    stay = DateRange(start=clock.today() + timedelta(days=30), end=clock.today() + timedelta(days=32))
    async with db_session.begin():
        assert await LineItemRepoSQL(db_session).rooms_booked(1, stay) == 0


async def test_failed_full_reservation_rolls_back(sql_use_cases, db_session, clock):
    request = CreateFullReservationRequest(
        **_reservation_request(clock).model_dump(),
        items=[
            {"kind": "FLIGHT", "flight_id": 1, "passengers": 3},
            {"kind": "PACKAGE", "package_id": 1, "persons": 3, "start_date": clock.today() + timedelta(days=30)},
        ],
    )

    with pytest.raises(InsufficientCapacityError):
        await sql_use_cases["create_full_reservation"].execute(request)

    async with db_session.begin():
        count = (await db_session.execute(select(func.count()).select_from(reservations))).scalar()
    assert count == 0
    assert await _available_seats(db_session) == 10


async def test_stale_lock_version_is_rejected(sql_use_cases, db_session, clock):
    created = await sql_use_cases["create_reservation"].execute(_reservation_request(clock))
    repo = ReservationRepoSQL(db_session)

    with pytest.raises(OptimisticLockError):
        async with db_session.begin():
            first = await repo.get(created.id)
            second = await repo.get(created.id)
            first.description = "primera"
            await repo.update(first)
            second.description = "segunda"
            await repo.update(second)

    async with db_session.begin():
        stored = await repo.get(created.id)
    assert stored.lock_version == created.lock_version


async def test_last_number_and_room_overlap(sql_use_cases, db_session, clock):
    reservation = await sql_use_cases["create_reservation"].execute(_reservation_request(clock))
    await sql_use_cases["attach_line_item"].execute(
        reservation.id,
        AttachHotelRequest(
            hotel_id=1,
            rooms=2,
            check_in=clock.today() + timedelta(days=30),
            check_out=clock.today() + timedelta(days=33),
        ),
    )

    line_items = LineItemRepoSQL(db_session)
    invoice_repo = InvoiceRepoSQL(db_session)
    async with db_session.begin():
        for number in ("FAC-2026-00002", "FAC-2026-00010", "FAC-2025-00099"):
            await db_session.execute(
                insert(invoices).values(
                    reservation_id=reservation.id,
                    invoice_number=number,
                    total=Decimal("1.00"),
                    amount_paid=Decimal("0.00"),
                    status="CANCELLED",
                    issue_date=clock.today(),
                    due_date=clock.today(),
                )
            )
        assert await invoice_repo.last_number("FAC", 2026) == "FAC-2026-00010"
        assert await invoice_repo.last_number("FAC", 2024) is None

        overlapping = DateRange(start=clock.today() + timedelta(days=32), end=clock.today() + timedelta(days=35))
        after = DateRange(start=clock.today() + timedelta(days=33), end=clock.today() + timedelta(days=35))
        assert await line_items.rooms_booked(1, overlapping) == 2
        assert await line_items.rooms_booked(1, after) == 0
