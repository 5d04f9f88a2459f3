import logging
from datetime import date, datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.domain.entities.reservation import Reservation
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.in_memory import InMemoryReservationRepo, InMemoryStore, InMemoryTransactionManager

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def _session(in_transaction: bool) -> MagicMock:
    session = MagicMock()
    session.in_transaction.return_value = in_transaction
    begin_ctx = MagicMock()
    begin_ctx.__aenter__ = AsyncMock(return_value=None)
    begin_ctx.__aexit__ = AsyncMock(return_value=False)
    session.begin.return_value = begin_ctx
    return session


def _reservation() -> Reservation:
    return Reservation.open(
        client_id=1,
        employee_id=1,
        trip_start=date(2026, 4, 1),
        trip_end=date(2026, 4, 10),
        passenger_count=2,
        now=NOW,
    )


# === SQLAlchemy ===


async def test_sql_manager_opens_transaction():
    session = _session(in_transaction=False)

    async with SQLAlchemyTransactionManager(session).start():
        pass

    session.begin.assert_called_once()
    session.begin.return_value.__aexit__.assert_awaited_once()


async def test_sql_manager_joins_outer_transaction():
    session = _session(in_transaction=True)

    async with SQLAlchemyTransactionManager(session).start():
        pass

    session.begin.assert_not_called()


async def test_sql_manager_logs_and_reraises(caplog):
    session = _session(in_transaction=False)

    with caplog.at_level(logging.INFO, logger="app.infrastructure.db.transaction_manager"):
        with pytest.raises(ValueError):
            async with SQLAlchemyTransactionManager(session).start():
                raise ValueError("boom")

    exc_type = session.begin.return_value.__aexit__.await_args.args[0]
    assert exc_type is ValueError
    assert "Transacción revertida" in caplog.text


# === In-memory ===


async def test_in_memory_manager_restores_snapshot_on_error():
    store = InMemoryStore()
    repo = InMemoryReservationRepo(store)
    tx = InMemoryTransactionManager(store)

    async with tx.start():
        kept = await repo.add(_reservation())

    with pytest.raises(RuntimeError):
        async with tx.start():
            await repo.add(_reservation())
            raise RuntimeError("falla a mitad de la unidad de trabajo")

    assert list(store.reservations) == [kept.id]


async def test_in_memory_manager_nested_start_joins_outer():
    store = InMemoryStore()
    repo = InMemoryReservationRepo(store)
    tx = InMemoryTransactionManager(store)

    with pytest.raises(RuntimeError):
        async with tx.start():
            async with tx.start():
                await repo.add(_reservation())
            raise RuntimeError("el bloque externo revierte también lo anidado")

    assert store.reservations == {}
