"""
Capa de Aplicación - Motor financiero de reservas.

Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: un caso de uso por operación, cada uno dentro de su unidad de trabajo
- line_items/: handlers de alta/baja por variante de ítem (hotel, vuelo, paquete, servicio)
- interfaces/: Puertos (contratos para adaptadores)
"""

from app.application.interfaces import (
    CatalogLookup,
    Clock,
    FakeClock,
    InvoiceRepo,
    LineItemRepo,
    PartyDirectory,
    PaymentRepo,
    ReservationRepo,
    SystemClock,
    TransactionManager,
)

__all__ = [
    # Interfaces - Repositories
    "ReservationRepo",
    "LineItemRepo",
    "InvoiceRepo",
    "PaymentRepo",
    # Interfaces - External collaborators
    "CatalogLookup",
    "PartyDirectory",
    # Interfaces - Infrastructure
    "TransactionManager",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
