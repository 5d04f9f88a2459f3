import copy
from typing import Sequence

from app.application.interfaces.payment_repo import PaymentRepo
from app.domain.entities.payment import Payment
from app.domain.errors import OptimisticLockError
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryPaymentRepo(PaymentRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, payment_id: int) -> Payment | None:
        payment = self._store.payments.get(payment_id)
        return copy.deepcopy(payment) if payment else None

    async def add(self, payment: Payment) -> Payment:
        payment.id = self._store.next_id("payments")
        payment.lock_version = 0
        self._store.payments[payment.id] = copy.deepcopy(payment)
        return payment

    async def update(self, payment: Payment) -> Payment:
        stored = self._store.payments.get(payment.id)
        if stored is None or stored.lock_version != payment.lock_version:
            raise OptimisticLockError("pago", payment.id, payment.lock_version)
        payment.lock_version += 1
        self._store.payments[payment.id] = copy.deepcopy(payment)
        return payment

    async def delete(self, payment_id: int) -> None:
        self._store.payments.pop(payment_id, None)

    async def list_by_invoice(self, invoice_id: int) -> Sequence[Payment]:
        return await self.list_by_invoices([invoice_id])

    async def list_by_invoices(self, invoice_ids: Sequence[int]) -> Sequence[Payment]:
        wanted = set(invoice_ids)
        return [
            copy.deepcopy(payment)
            for payment in sorted(self._store.payments.values(), key=lambda p: p.id)
            if payment.invoice_id in wanted
        ]

    async def reference_exists(self, reference: str, exclude_payment_id: int | None = None) -> bool:
        return any(
            payment.transaction_reference == reference and payment.id != exclude_payment_id
            for payment in self._store.payments.values()
        )
