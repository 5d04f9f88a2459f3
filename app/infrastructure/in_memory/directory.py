from app.application.interfaces.directory import PartyDirectory
from app.infrastructure.in_memory.store import InMemoryStore


class InMemoryPartyDirectory(PartyDirectory):
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def client_exists(self, client_id: int) -> bool:
        return client_id in self._store.clients

    async def employee_exists(self, employee_id: int) -> bool:
        return employee_id in self._store.employees
