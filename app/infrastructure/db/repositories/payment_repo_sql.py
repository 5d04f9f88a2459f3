from typing import Any, Mapping, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.payment_repo import PaymentRepo
from app.domain.entities.payment import Payment, PaymentStatus
from app.domain.errors import OptimisticLockError
from app.domain.value_objects.money import to_amount
from app.infrastructure.db.tables import payments


def _values(payment: Payment) -> dict[str, Any]:
    return {
        "invoice_id": payment.invoice_id,
        "payment_method_id": payment.payment_method_id,
        "amount": payment.amount,
        "status": payment.status.value,
        "transaction_reference": payment.transaction_reference,
        "receipt_url": payment.receipt_url,
        "observations": payment.observations,
        "payment_date": payment.payment_date,
        "created_at": payment.created_at,
        "updated_at": payment.updated_at,
    }


def _to_entity(row: Mapping[str, Any]) -> Payment:
    return Payment(
        id=row["id"],
        invoice_id=row["invoice_id"],
        payment_method_id=row["payment_method_id"],
        amount=to_amount(row["amount"]),
        transaction_reference=row["transaction_reference"],
        receipt_url=row["receipt_url"],
        observations=row["observations"],
        status=PaymentStatus(row["status"]),
        lock_version=row["lock_version"],
        payment_date=row["payment_date"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class PaymentRepoSQL(PaymentRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, payment_id: int) -> Payment | None:
        stmt = select(payments).where(payments.c.id == payment_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return _to_entity(row)

    async def add(self, payment: Payment) -> Payment:
        stmt = insert(payments).values(**_values(payment), lock_version=0)
        result = await self._session.execute(stmt)
        payment.id = result.inserted_primary_key[0]
        payment.lock_version = 0
        return payment

    async def update(self, payment: Payment) -> Payment:
        stmt = (
            update(payments)
            .where(payments.c.id == payment.id)
            .where(payments.c.lock_version == payment.lock_version)
            .values(**_values(payment), lock_version=payment.lock_version + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise OptimisticLockError("pago", payment.id, payment.lock_version)
        payment.lock_version += 1
        return payment

    async def delete(self, payment_id: int) -> None:
        await self._session.execute(delete(payments).where(payments.c.id == payment_id))

    async def list_by_invoice(self, invoice_id: int) -> Sequence[Payment]:
        return await self.list_by_invoices([invoice_id])

    async def list_by_invoices(self, invoice_ids: Sequence[int]) -> Sequence[Payment]:
        if not invoice_ids:
            return []
        stmt = (
            select(payments)
            .where(payments.c.invoice_id.in_(list(invoice_ids)))
            .order_by(payments.c.id)
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()]

    async def reference_exists(self, reference: str, exclude_payment_id: int | None = None) -> bool:
        stmt = select(payments.c.id).where(payments.c.transaction_reference == reference)
        if exclude_payment_id is not None:
            stmt = stmt.where(payments.c.id != exclude_payment_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalar() is not None
