import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from app.application.interfaces.transaction_manager import TransactionManager
from app.infrastructure.in_memory.store import InMemoryStore

_active_stores: ContextVar[frozenset[int]] = ContextVar("in_memory_active_stores", default=frozenset())


class InMemoryTransactionManager(TransactionManager):
    """
    Unidad de trabajo sobre InMemoryStore.

    Serializa las transacciones con un lock, toma una foto del almacén al
    entrar y la restaura si el bloque lanza una excepción. Las llamadas
    anidadas dentro de la misma tarea se unen a la transacción externa.
    """

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        active = _active_stores.get()
        if id(self._store) in active:
            yield
            return

        async with self._lock:
            token = _active_stores.set(active | {id(self._store)})
            snapshot = self._store.snapshot()
            try:
                yield
            except BaseException:
                self._store.restore(snapshot)
                raise
            finally:
                _active_stores.reset(token)
