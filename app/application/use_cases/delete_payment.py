import logging

from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.domain.errors import PaymentNotFoundError


class DeletePaymentUseCase:
    """Solo los pagos pendientes se eliminan; aprobados y rechazados son historial."""

    def __init__(self, payment_repo: PaymentRepo, transaction_manager: TransactionManager) -> None:
        self._payment_repo = payment_repo
        self._transaction_manager = transaction_manager
        self._logger = logging.getLogger(__name__)

    async def execute(self, payment_id: int) -> None:
        async with self._transaction_manager.start():
            payment = await self._payment_repo.get(payment_id)
            if payment is None:
                raise PaymentNotFoundError(payment_id)
            payment.ensure_deletable()
            await self._payment_repo.delete(payment_id)

        self._logger.info(
            "Payment deleted",
            extra={"payment_id": payment_id, "invoice_id": payment.invoice_id},
        )
