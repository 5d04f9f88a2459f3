"""Value Object DateRange - ventana de fechas de un viaje o de un ítem."""

from dataclasses import dataclass
from datetime import date

from app.domain.errors import InvalidDateRangeError


@dataclass(frozen=True)
class DateRange:
    """
    Value Object inmutable que representa un rango de fechas (sin hora).

    Attributes:
        start: Fecha de inicio.
        end: Fecha de fin (debe ser posterior a start salvo allow_same_day).
    """

    start: date
    end: date
    allow_same_day: bool = False

    def __post_init__(self) -> None:
        if self.end < self.start or (self.end == self.start and not self.allow_same_day):
            raise InvalidDateRangeError(
                f"La fecha de fin ({self.end}) debe ser posterior a la de inicio ({self.start})"
            )

    @property
    def nights(self) -> int:
        """Noches entre inicio y fin (check-in / check-out)."""
        return (self.end - self.start).days

    def contains(self, day: date) -> bool:
        """Verifica si una fecha está dentro del rango (extremos incluidos)."""
        return self.start <= day <= self.end

    def within(self, other: "DateRange") -> bool:
        """Verifica si este rango cabe completo dentro de otro."""
        return other.start <= self.start and self.end <= other.end

    def overlaps_with(self, other: "DateRange") -> bool:
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} -> {self.end.isoformat()}"
