from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.directory import PartyDirectory
from app.infrastructure.db.tables import clients, employees


class PartyDirectorySQL(PartyDirectory):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _exists(self, table, entity_id: int) -> bool:
        stmt = select(table.c.id).where(table.c.id == entity_id).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar() is not None

    async def client_exists(self, client_id: int) -> bool:
        return await self._exists(clients, client_id)

    async def employee_exists(self, employee_id: int) -> bool:
        return await self._exists(employees, employee_id)
