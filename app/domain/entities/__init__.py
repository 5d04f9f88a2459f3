"""Entidades del dominio financiero de reservas."""

from app.domain.entities.catalog import (
    AdditionalService,
    Flight,
    Hotel,
    PaymentMethod,
    TourPackage,
)
from app.domain.entities.invoice import Invoice, InvoiceStatus, invoice_status_for
from app.domain.entities.line_item import (
    CabinClass,
    FlightItem,
    HotelItem,
    LineItem,
    LineItemKind,
    PackageItem,
    ServiceItem,
    build_line_item,
)
from app.domain.entities.payment import Payment, PaymentStatus
from app.domain.entities.reservation import Reservation, ReservationStatus

__all__ = [
    # Reservation
    "Reservation",
    "ReservationStatus",
    # Line items
    "LineItem",
    "LineItemKind",
    "HotelItem",
    "FlightItem",
    "PackageItem",
    "ServiceItem",
    "CabinClass",
    "build_line_item",
    # Catalog
    "Hotel",
    "Flight",
    "TourPackage",
    "AdditionalService",
    "PaymentMethod",
    # Invoice
    "Invoice",
    "InvoiceStatus",
    "invoice_status_for",
    # Payment
    "Payment",
    "PaymentStatus",
]
