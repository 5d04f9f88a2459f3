from typing import Sequence

from app.domain.entities.invoice import Invoice, InvoiceStatus


class InvoiceRepo:
    async def get(self, invoice_id: int) -> Invoice | None:
        raise NotImplementedError

    async def get_by_number(self, invoice_number: str) -> Invoice | None:
        raise NotImplementedError

    async def list_by_reservation(self, reservation_id: int) -> Sequence[Invoice]:
        raise NotImplementedError

    async def list_by_status(self, statuses: Sequence[InvoiceStatus]) -> Sequence[Invoice]:
        raise NotImplementedError

    async def last_number(self, prefix: str, year: int) -> str | None:
        """Último número emitido para el prefijo y año, o None."""
        raise NotImplementedError

    async def add(self, invoice: Invoice) -> Invoice:
        raise NotImplementedError

    async def update(self, invoice: Invoice) -> Invoice:
        raise NotImplementedError
