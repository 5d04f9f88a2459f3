"""
Ítems de reserva - unión etiquetada de Hotel, Vuelo, Paquete y Servicio.

Todas las variantes comparten la misma forma (recurso, cantidad, precio
congelado, subtotal, ventana de fechas) y difieren solo en la fórmula de
subtotal y en el consumo de capacidad compartida.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar

from app.domain.value_objects.date_range import DateRange
from app.domain.value_objects.money import ZERO, to_amount


class LineItemKind(str, Enum):
    """Tipo de recurso reservado."""

    HOTEL = "HOTEL"
    FLIGHT = "FLIGHT"
    PACKAGE = "PACKAGE"
    SERVICE = "SERVICE"


class CabinClass(str, Enum):
    """Clase de cabina de un vuelo."""

    ECONOMY = "ECONOMY"
    BUSINESS = "BUSINESS"


@dataclass
class LineItem(ABC):
    """
    Forma común de un ítem de reserva.

    Attributes:
        resource_id: Id del hotel/vuelo/paquete/servicio en el catálogo.
        quantity: Habitaciones, pasajeros, personas o unidades según la variante.
        unit_price: Precio unitario copiado del catálogo al momento de asociar.
        subtotal: Calculado por compute_subtotal, nunca recalculado desde el catálogo.
        capacity_released: True cuando la cancelación de la reserva ya devolvió los cupos.
    """

    kind: ClassVar[LineItemKind]

    id: int | None = None
    reservation_id: int = 0
    resource_id: int = 0
    quantity: int = 1
    unit_price: Decimal = ZERO
    subtotal: Decimal = ZERO
    start_date: date | None = None
    end_date: date | None = None
    observations: str | None = None
    capacity_released: bool = False
    created_at: datetime | None = None

    # === Contrato común ===

    @abstractmethod
    def compute_subtotal(self) -> Decimal:
        """Fórmula de subtotal propia de cada variante, sin redondear."""
        raise NotImplementedError

    def capacity_delta(self) -> int:
        """Cupos compartidos que consume el ítem mientras está activo."""
        return 0

    def resource_ref(self) -> tuple[LineItemKind, int]:
        return self.kind, self.resource_id

    def has_started(self, today: date) -> bool:
        """Un ítem sin fecha nunca inicia."""
        return self.start_date is not None and today >= self.start_date

    @property
    def window(self) -> DateRange | None:
        if self.start_date is None:
            return None
        return DateRange(
            start=self.start_date,
            end=self.end_date or self.start_date,
            allow_same_day=True,
        )

    @property
    def holds_capacity(self) -> bool:
        return self.capacity_delta() > 0 and not self.capacity_released

    def price(self) -> Decimal:
        """Congela el subtotal a partir del precio unitario y la cantidad."""
        self.unit_price = to_amount(self.unit_price)
        self.subtotal = to_amount(self.compute_subtotal())
        return self.subtotal

    # === Serialización de campos propios de la variante ===

    def details(self) -> dict[str, Any]:
        return {}

    @classmethod
    def from_details(cls, details: dict[str, Any]) -> dict[str, Any]:
        return {}


@dataclass
class HotelItem(LineItem):
    kind: ClassVar[LineItemKind] = LineItemKind.HOTEL

    room_type: str | None = None
    guests: int = 1

    @property
    def nights(self) -> int:
        return DateRange(start=self.start_date, end=self.end_date).nights

    def compute_subtotal(self) -> Decimal:
        return self.nights * self.unit_price * self.quantity

    def details(self) -> dict[str, Any]:
        return {"room_type": self.room_type, "guests": self.guests}

    @classmethod
    def from_details(cls, details: dict[str, Any]) -> dict[str, Any]:
        return {"room_type": details.get("room_type"), "guests": details.get("guests", 1)}


@dataclass
class FlightItem(LineItem):
    kind: ClassVar[LineItemKind] = LineItemKind.FLIGHT

    cabin_class: CabinClass = CabinClass.ECONOMY
    assigned_seats: list[str] = field(default_factory=list)
    baggage_included: bool = True
    extra_baggage_kg: int = 0
    extra_baggage_cost: Decimal = ZERO

    def compute_subtotal(self) -> Decimal:
        return self.quantity * self.unit_price + to_amount(self.extra_baggage_cost)

    def capacity_delta(self) -> int:
        return self.quantity

    def details(self) -> dict[str, Any]:
        return {
            "cabin_class": self.cabin_class.value,
            "assigned_seats": list(self.assigned_seats),
            "baggage_included": self.baggage_included,
            "extra_baggage_kg": self.extra_baggage_kg,
            "extra_baggage_cost": str(self.extra_baggage_cost),
        }

    @classmethod
    def from_details(cls, details: dict[str, Any]) -> dict[str, Any]:
        return {
            "cabin_class": CabinClass(details.get("cabin_class", CabinClass.ECONOMY.value)),
            "assigned_seats": list(details.get("assigned_seats") or []),
            "baggage_included": bool(details.get("baggage_included", True)),
            "extra_baggage_kg": int(details.get("extra_baggage_kg", 0)),
            "extra_baggage_cost": to_amount(details.get("extra_baggage_cost", "0")),
        }


@dataclass
class PackageItem(LineItem):
    kind: ClassVar[LineItemKind] = LineItemKind.PACKAGE

    customizations: str | None = None

    def compute_subtotal(self) -> Decimal:
        return self.quantity * self.unit_price

    def capacity_delta(self) -> int:
        return self.quantity

    def details(self) -> dict[str, Any]:
        return {"customizations": self.customizations}

    @classmethod
    def from_details(cls, details: dict[str, Any]) -> dict[str, Any]:
        return {"customizations": details.get("customizations")}


@dataclass
class ServiceItem(LineItem):
    kind: ClassVar[LineItemKind] = LineItemKind.SERVICE

    service_time: str | None = None

    def compute_subtotal(self) -> Decimal:
        return self.quantity * self.unit_price

    def details(self) -> dict[str, Any]:
        return {"service_time": self.service_time}

    @classmethod
    def from_details(cls, details: dict[str, Any]) -> dict[str, Any]:
        return {"service_time": details.get("service_time")}


LINE_ITEM_TYPES: dict[LineItemKind, type[LineItem]] = {
    LineItemKind.HOTEL: HotelItem,
    LineItemKind.FLIGHT: FlightItem,
    LineItemKind.PACKAGE: PackageItem,
    LineItemKind.SERVICE: ServiceItem,
}


def build_line_item(kind: LineItemKind | str, details: dict[str, Any] | None = None, **fields: Any) -> LineItem:
    """Reconstruye la variante correcta a partir de los campos comunes y sus detalles."""
    item_type = LINE_ITEM_TYPES[LineItemKind(kind)]
    return item_type(**fields, **item_type.from_details(details or {}))
