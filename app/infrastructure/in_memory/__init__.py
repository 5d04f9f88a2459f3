"""Implementaciones in-memory para testing y desarrollo local."""

from app.infrastructure.in_memory.catalog import InMemoryCatalog
from app.infrastructure.in_memory.directory import InMemoryPartyDirectory
from app.infrastructure.in_memory.invoice_repo import InMemoryInvoiceRepo
from app.infrastructure.in_memory.line_item_repo import InMemoryLineItemRepo
from app.infrastructure.in_memory.payment_repo import InMemoryPaymentRepo
from app.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from app.infrastructure.in_memory.store import InMemoryStore
from app.infrastructure.in_memory.transaction_manager import InMemoryTransactionManager

__all__ = [
    "InMemoryStore",
    # Repositories
    "InMemoryReservationRepo",
    "InMemoryLineItemRepo",
    "InMemoryInvoiceRepo",
    "InMemoryPaymentRepo",
    # External collaborators
    "InMemoryCatalog",
    "InMemoryPartyDirectory",
    # Infrastructure
    "InMemoryTransactionManager",
]
