"""
Contrato común de los manejadores de ítems de reserva.

Cada variante valida la solicitud contra su recurso de catálogo y la ventana
del viaje, congela el precio unitario y calcula el subtotal en build(); los
cupos compartidos solo se tocan en reserve()/release(), ya dentro de la
unidad de trabajo del caso de uso.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any

from app.application.interfaces.catalog import CatalogLookup
from app.application.interfaces.line_item_repo import LineItemRepo
from app.domain.entities.line_item import LineItem, LineItemKind
from app.domain.entities.reservation import Reservation
from app.domain.errors import DateOutsideTripError, DuplicateLineItemError
from app.domain.value_objects.date_range import DateRange


class LineItemHandler(ABC):
    kind: LineItemKind
    resource_label: str

    def __init__(self, catalog: CatalogLookup, line_item_repo: LineItemRepo) -> None:
        self._catalog = catalog
        self._line_item_repo = line_item_repo

    @abstractmethod
    async def build(self, reservation: Reservation, request: Any, today: date) -> LineItem:
        """Valida la solicitud y retorna el ítem con precio congelado, sin escribir nada."""
        raise NotImplementedError

    async def reserve(self, item: LineItem) -> None:
        """Descuenta los cupos que consume el ítem. Sin contador no hace nada."""

    async def release(self, item: LineItem) -> None:
        """Devuelve los cupos que consumía el ítem. Sin contador no hace nada."""

    # === Validaciones compartidas ===

    async def _ensure_not_attached(self, reservation: Reservation, resource_id: int) -> None:
        if await self._line_item_repo.exists_for_resource(reservation.id, self.kind, resource_id):
            raise DuplicateLineItemError(self.resource_label, resource_id, reservation.id)

    @staticmethod
    def _ensure_within_trip(reservation: Reservation, window: DateRange) -> None:
        trip = reservation.trip_window
        if not window.within(trip):
            raise DateOutsideTripError(window.start, window.end, trip.start, trip.end)
