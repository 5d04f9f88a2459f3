import copy
from typing import Sequence

from app.application.interfaces.invoice_repo import InvoiceRepo
from app.domain.entities.invoice import Invoice, InvoiceStatus
from app.domain.errors import OptimisticLockError
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryInvoiceRepo(InvoiceRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, invoice_id: int) -> Invoice | None:
        invoice = self._store.invoices.get(invoice_id)
        return copy.deepcopy(invoice) if invoice else None

    async def get_by_number(self, invoice_number: str) -> Invoice | None:
        for invoice in self._store.invoices.values():
            if invoice.invoice_number == invoice_number:
                return copy.deepcopy(invoice)
        return None

    async def list_by_reservation(self, reservation_id: int) -> Sequence[Invoice]:
        return [
            copy.deepcopy(invoice)
            for invoice in self._sorted()
            if invoice.reservation_id == reservation_id
        ]

    async def list_by_status(self, statuses: Sequence[InvoiceStatus]) -> Sequence[Invoice]:
        return [copy.deepcopy(invoice) for invoice in self._sorted() if invoice.status in statuses]

    async def last_number(self, prefix: str, year: int) -> str | None:
        head = f"{prefix}-{year:04d}-"
        numbers = [
            invoice.invoice_number
            for invoice in self._store.invoices.values()
            if invoice.invoice_number.startswith(head)
        ]
        return max(numbers) if numbers else None

    async def add(self, invoice: Invoice) -> Invoice:
        invoice.id = self._store.next_id("invoices")
        invoice.lock_version = 0
        self._store.invoices[invoice.id] = copy.deepcopy(invoice)
        return invoice

    async def update(self, invoice: Invoice) -> Invoice:
        stored = self._store.invoices.get(invoice.id)
        if stored is None or stored.lock_version != invoice.lock_version:
            raise OptimisticLockError("factura", invoice.id, invoice.lock_version)
        invoice.lock_version += 1
        self._store.invoices[invoice.id] = copy.deepcopy(invoice)
        return invoice

    def _sorted(self) -> list[Invoice]:
        return sorted(self._store.invoices.values(), key=lambda invoice: invoice.id)
