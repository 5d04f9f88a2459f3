from typing import Sequence

from app.domain.entities.line_item import LineItem, LineItemKind
from app.domain.value_objects.date_range import DateRange


class LineItemRepo:
    async def get(self, item_id: int) -> LineItem | None:
        raise NotImplementedError

    async def add(self, item: LineItem) -> LineItem:
        raise NotImplementedError

    async def delete(self, item_id: int) -> None:
        raise NotImplementedError

    async def list_by_reservation(self, reservation_id: int) -> Sequence[LineItem]:
        raise NotImplementedError

    async def exists_for_resource(
        self,
        reservation_id: int,
        kind: LineItemKind,
        resource_id: int,
    ) -> bool:
        raise NotImplementedError

    async def rooms_booked(self, hotel_id: int, window: DateRange) -> int:
        """Habitaciones ocupadas en fechas que se cruzan con window (ítems no liberados)."""
        raise NotImplementedError

    async def mark_capacity_released(self, item_ids: Sequence[int]) -> None:
        raise NotImplementedError
