from typing import Any, Mapping, Sequence

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.line_item_repo import LineItemRepo
from app.domain.entities.line_item import LineItem, LineItemKind, build_line_item
from app.domain.value_objects.date_range import DateRange
from app.domain.value_objects.money import to_amount
from app.infrastructure.db.tables import reservation_items


def _to_entity(row: Mapping[str, Any]) -> LineItem:
    return build_line_item(
        row["kind"],
        row["details"],
        id=row["id"],
        reservation_id=row["reservation_id"],
        resource_id=row["resource_id"],
        quantity=row["quantity"],
        unit_price=to_amount(row["unit_price"]),
        subtotal=to_amount(row["subtotal"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        observations=row["observations"],
        capacity_released=bool(row["capacity_released"]),
        created_at=row["created_at"],
    )


class LineItemRepoSQL(LineItemRepo):
    """Los campos propios de cada variante viajan en la columna JSON details."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, item_id: int) -> LineItem | None:
        stmt = select(reservation_items).where(reservation_items.c.id == item_id).limit(1)
        result = await self._session.execute(stmt)
        row = result.mappings().first()
        if not row:
            return None
        return _to_entity(row)

    async def add(self, item: LineItem) -> LineItem:
        stmt = insert(reservation_items).values(
            reservation_id=item.reservation_id,
            kind=item.kind.value,
            resource_id=item.resource_id,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
            start_date=item.start_date,
            end_date=item.end_date,
            observations=item.observations,
            capacity_released=item.capacity_released,
            details=item.details(),
            created_at=item.created_at,
        )
        result = await self._session.execute(stmt)
        item.id = result.inserted_primary_key[0]
        return item

    async def delete(self, item_id: int) -> None:
        await self._session.execute(delete(reservation_items).where(reservation_items.c.id == item_id))

    async def list_by_reservation(self, reservation_id: int) -> Sequence[LineItem]:
        stmt = (
            select(reservation_items)
            .where(reservation_items.c.reservation_id == reservation_id)
            .order_by(reservation_items.c.id)
        )
        result = await self._session.execute(stmt)
        return [_to_entity(row) for row in result.mappings().all()]

    async def exists_for_resource(
        self,
        reservation_id: int,
        kind: LineItemKind,
        resource_id: int,
    ) -> bool:
        stmt = (
            select(reservation_items.c.id)
            .where(
                reservation_items.c.reservation_id == reservation_id,
                reservation_items.c.kind == kind.value,
                reservation_items.c.resource_id == resource_id,
            )
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar() is not None

    async def rooms_booked(self, hotel_id: int, window: DateRange) -> int:
        stmt = select(func.coalesce(func.sum(reservation_items.c.quantity), 0)).where(
            and_(
                reservation_items.c.kind == LineItemKind.HOTEL.value,
                reservation_items.c.resource_id == hotel_id,
                reservation_items.c.capacity_released.is_(False),
                reservation_items.c.start_date < window.end,
                reservation_items.c.end_date > window.start,
            )
        )
        result = await self._session.execute(stmt)
        return int(result.scalar() or 0)

    async def mark_capacity_released(self, item_ids: Sequence[int]) -> None:
        if not item_ids:
            return
        stmt = (
            update(reservation_items)
            .where(reservation_items.c.id.in_(list(item_ids)))
            .values(capacity_released=True)
        )
        await self._session.execute(stmt)
