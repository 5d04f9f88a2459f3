from typing import Any, Mapping, Sequence

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.invoice_repo import InvoiceRepo
from app.domain.entities.invoice import Invoice, InvoiceStatus
from app.domain.errors import OptimisticLockError
from app.domain.value_objects.money import to_amount
from app.infrastructure.db.tables import invoices


def _values(invoice: Invoice) -> dict[str, Any]:
    return {
        "reservation_id": invoice.reservation_id,
        "invoice_number": invoice.invoice_number,
        "total": invoice.total,
        "amount_paid": invoice.amount_paid,
        "status": invoice.status.value,
        "issue_date": invoice.issue_date,
        "due_date": invoice.due_date,
        "observations": invoice.observations,
        "created_at": invoice.created_at,
        "updated_at": invoice.updated_at,
    }


def _to_entity(row: Mapping[str, Any]) -> Invoice:
    return Invoice(
        id=row["id"],
        reservation_id=row["reservation_id"],
        invoice_number=row["invoice_number"],
        total=to_amount(row["total"]),
        amount_paid=to_amount(row["amount_paid"]),
        status=InvoiceStatus(row["status"]),
        issue_date=row["issue_date"],
        due_date=row["due_date"],
        observations=row["observations"],
        lock_version=row["lock_version"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class InvoiceRepoSQL(InvoiceRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch_one(self, *conditions) -> Invoice | None:
        stmt = select(invoices).where(*conditions).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return _to_entity(row)

    async def _fetch_all(self, *conditions) -> list[Invoice]:
        stmt = select(invoices).where(*conditions).order_by(invoices.c.id)
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()]

    async def get(self, invoice_id: int) -> Invoice | None:
        return await self._fetch_one(invoices.c.id == invoice_id)

    async def get_by_number(self, invoice_number: str) -> Invoice | None:
        return await self._fetch_one(invoices.c.invoice_number == invoice_number)

    async def list_by_reservation(self, reservation_id: int) -> Sequence[Invoice]:
        return await self._fetch_all(invoices.c.reservation_id == reservation_id)

    async def list_by_status(self, statuses: Sequence[InvoiceStatus]) -> Sequence[Invoice]:
        return await self._fetch_all(invoices.c.status.in_([s.value for s in statuses]))

    async def last_number(self, prefix: str, year: int) -> str | None:
        # NNNNN va con ceros a la izquierda: el orden lexicográfico es el numérico
        stmt = (
            select(invoices.c.invoice_number)
            .where(invoices.c.invoice_number.like(f"{prefix}-{year:04d}-%"))
            .order_by(invoices.c.invoice_number.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar()

    async def add(self, invoice: Invoice) -> Invoice:
        stmt = insert(invoices).values(**_values(invoice), lock_version=0)
        result = await self._session.execute(stmt)
        invoice.id = result.inserted_primary_key[0]
        invoice.lock_version = 0
        return invoice

    async def update(self, invoice: Invoice) -> Invoice:
        stmt = (
            update(invoices)
            .where(invoices.c.id == invoice.id)
            .where(invoices.c.lock_version == invoice.lock_version)
            .values(**_values(invoice), lock_version=invoice.lock_version + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError("factura", invoice.id, invoice.lock_version)
        invoice.lock_version += 1
        return invoice
