"""
Capa de Infraestructura - Motor financiero de reservas.

Implementaciones concretas de los puertos (interfaces).

Estructura:
- db/: tablas SQLAlchemy Core, repositorios SQL y unidad de trabajo
- in_memory/: almacén en memoria para desarrollo local y tests
"""

# Database
from app.infrastructure.db.repositories.catalog_sql import CatalogSQL
from app.infrastructure.db.repositories.directory_sql import PartyDirectorySQL
from app.infrastructure.db.repositories.invoice_repo_sql import InvoiceRepoSQL
from app.infrastructure.db.repositories.line_item_repo_sql import LineItemRepoSQL
from app.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from app.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

# In-Memory
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

__all__ = [
    # Database - Repositories SQL
    "ReservationRepoSQL",
    "LineItemRepoSQL",
    "InvoiceRepoSQL",
    "PaymentRepoSQL",
    "CatalogSQL",
    "PartyDirectorySQL",
    "SQLAlchemyTransactionManager",
    # In-Memory Implementations
    "InMemoryStore",
    "InMemoryReservationRepo",
    "InMemoryLineItemRepo",
    "InMemoryInvoiceRepo",
    "InMemoryPaymentRepo",
    "InMemoryCatalog",
    "InMemoryPartyDirectory",
    "InMemoryTransactionManager",
]
