"""Interface Clock - Puerto para abstracción de tiempo."""

from abc import ABC, abstractmethod
from datetime import date, datetime, timedelta, timezone


class Clock(ABC):
    """
    Puerto para abstracción del tiempo del sistema.

    Las reglas de "ítem iniciado", "viaje en el pasado" y "factura vencida"
    dependen de today(); inyectar FakeClock hace los tests deterministas.
    """

    @abstractmethod
    def now(self) -> datetime:
        """
        Retorna la fecha/hora actual.

        Returns:
            datetime con la hora actual (timezone-aware UTC).
        """
        raise NotImplementedError

    def today(self) -> date:
        """Retorna la fecha actual (sin hora)."""
        return self.now().date()


class SystemClock(Clock):
    """Implementación real que usa el reloj del sistema."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FakeClock(Clock):
    """Reloj fijo para tests; advance() simula el paso de los días."""

    def __init__(self, fixed_time: datetime | None = None):
        self._fixed_time = fixed_time or datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self._fixed_time

    def advance(self, days: int = 0, hours: int = 0) -> None:
        self._fixed_time = self._fixed_time + timedelta(days=days, hours=hours)
