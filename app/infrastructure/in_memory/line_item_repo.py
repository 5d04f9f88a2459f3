import copy
from typing import Sequence

from app.application.interfaces.line_item_repo import LineItemRepo
from app.domain.entities.line_item import LineItem, LineItemKind
from app.domain.value_objects.date_range import DateRange
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryLineItemRepo(LineItemRepo):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def get(self, item_id: int) -> LineItem | None:
        item = self._store.line_items.get(item_id)
        return copy.deepcopy(item) if item else None

    async def add(self, item: LineItem) -> LineItem:
        item.id = self._store.next_id("line_items")
        self._store.line_items[item.id] = copy.deepcopy(item)
        return item

    async def delete(self, item_id: int) -> None:
        self._store.line_items.pop(item_id, None)

    async def list_by_reservation(self, reservation_id: int) -> Sequence[LineItem]:
        return [
            copy.deepcopy(item)
            for item in sorted(self._store.line_items.values(), key=lambda i: i.id)
            if item.reservation_id == reservation_id
        ]

    async def exists_for_resource(
        self,
        reservation_id: int,
        kind: LineItemKind,
        resource_id: int,
    ) -> bool:
        return any(
            item.reservation_id == reservation_id
            and item.kind == kind
            and item.resource_id == resource_id
            for item in self._store.line_items.values()
        )

    async def rooms_booked(self, hotel_id: int, window: DateRange) -> int:
        booked = 0
        for item in self._store.line_items.values():
            if item.kind != LineItemKind.HOTEL or item.resource_id != hotel_id:
                continue
            if item.capacity_released or not item.window.overlaps_with(window):
                continue
            booked += item.quantity
        return booked

    async def mark_capacity_released(self, item_ids: Sequence[int]) -> None:
        for item_id in item_ids:
            self._store.line_items[item_id].capacity_released = True
