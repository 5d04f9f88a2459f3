from typing import Sequence

from app.domain.entities.payment import Payment


class PaymentRepo:
    async def get(self, payment_id: int) -> Payment | None:
        raise NotImplementedError

    async def add(self, payment: Payment) -> Payment:
        raise NotImplementedError

    async def update(self, payment: Payment) -> Payment:
        raise NotImplementedError

    async def delete(self, payment_id: int) -> None:
        raise NotImplementedError

    async def list_by_invoice(self, invoice_id: int) -> Sequence[Payment]:
        raise NotImplementedError

    async def list_by_invoices(self, invoice_ids: Sequence[int]) -> Sequence[Payment]:
        raise NotImplementedError

    async def reference_exists(self, reference: str, exclude_payment_id: int | None = None) -> bool:
        raise NotImplementedError
