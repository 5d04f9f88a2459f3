import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.interfaces.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class SQLAlchemyTransactionManager(TransactionManager):
    """
    Unidad de trabajo sobre una AsyncSession.

    Si la sesión ya tiene una transacción abierta (caso de uso que invoca a
    otro), el bloque se une a ella y el commit/rollback queda en el externo.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._session.in_transaction():
            yield
            return
        try:
            async with self._session.begin():
                yield
        except Exception as exc:
            logger.info(
                "Transacción revertida",
                extra={"error_type": type(exc).__name__},
            )
            raise
