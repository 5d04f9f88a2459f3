"""Interfaces (Puertos) de la capa de aplicación."""

from app.application.interfaces.catalog import CatalogLookup
from app.application.interfaces.clock import Clock, FakeClock, SystemClock
from app.application.interfaces.directory import PartyDirectory
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    # Repositories
    "ReservationRepo",
    "LineItemRepo",
    "InvoiceRepo",
    "PaymentRepo",
    # External collaborators
    "CatalogLookup",
    "PartyDirectory",
    # Infrastructure
    "TransactionManager",
    # Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
