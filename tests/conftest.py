"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Reloj fijo (FakeClock) para que las reglas de fechas sean deterministas
- Almacén in-memory con el catálogo de demostración
- Grafo de casos de uso y cliente HTTP sobre ese almacén
- Motor SQLite in-memory para los tests de repositorios SQL
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.dependencies import build_use_cases, get_use_cases
from app.api.schemas.reservations import CreateReservationRequest
from app.application.interfaces.clock import FakeClock
from app.config import Settings
from app.infrastructure.db.tables import metadata
from app.infrastructure.in_memory import (
    InMemoryCatalog,
    InMemoryInvoiceRepo,
    InMemoryLineItemRepo,
    InMemoryPartyDirectory,
    InMemoryPaymentRepo,
    InMemoryReservationRepo,
    InMemoryStore,
    InMemoryTransactionManager,
)
from app.infrastructure.in_memory.seed import seed_demo_catalog
from app.main import app

# ============================================================================
# FECHAS DE REFERENCIA
# ============================================================================

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)
TODAY = NOW.date()

# Viaje estándar: el vuelo del catálogo sale TODAY + 30
TRIP_START = TODAY + timedelta(days=28)
TRIP_END = TODAY + timedelta(days=40)


# ============================================================================
# FIXTURES DE DOMINIO / CASOS DE USO
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(NOW)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, use_in_memory=True)


@pytest.fixture
def store() -> InMemoryStore:
    return seed_demo_catalog(InMemoryStore(), TODAY)


@pytest.fixture
def use_cases(store: InMemoryStore, clock: FakeClock, settings: Settings) -> dict:
    return build_use_cases(
        reservation_repo=InMemoryReservationRepo(store),
        line_item_repo=InMemoryLineItemRepo(store),
        invoice_repo=InMemoryInvoiceRepo(store),
        payment_repo=InMemoryPaymentRepo(store),
        catalog=InMemoryCatalog(store),
        directory=InMemoryPartyDirectory(store),
        tx_manager=InMemoryTransactionManager(store),
        clock=clock,
        settings=settings,
    )


@pytest.fixture
def make_reservation(use_cases):
    """Factory async de reservas PENDING sobre el viaje estándar."""

    async def _make(**overrides):
        payload = {
            "client_id": 1,
            "employee_id": 1,
            "trip_start": TRIP_START,
            "trip_end": TRIP_END,
            "passenger_count": 4,
            "description": "Cartagena de Indias",
        }
        payload.update(overrides)
        return await use_cases["create_reservation"].execute(CreateReservationRequest(**payload))

    return _make


# ============================================================================
# CLIENTE HTTP
# ============================================================================


@pytest.fixture
def client(use_cases) -> TestClient:
    """TestClient con los casos de uso apuntando al almacén del test."""
    app.dependency_overrides[get_use_cases] = lambda: use_cases
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """SQLite in-memory compartido por una sola conexión (StaticPool)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(test_engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
