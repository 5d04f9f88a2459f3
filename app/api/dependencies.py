from functools import lru_cache
from typing import Any

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import AsyncSessionLocal
from app.application.interfaces.catalog import CatalogLookup
from app.application.interfaces.clock import Clock, SystemClock
from app.application.interfaces.directory import PartyDirectory
from app.application.interfaces.invoice_repo import InvoiceRepo
from app.application.interfaces.line_item_repo import LineItemRepo
from app.application.interfaces.payment_repo import PaymentRepo
from app.application.interfaces.reservation_repo import ReservationRepo
from app.application.interfaces.transaction_manager import TransactionManager
from app.application.line_items.registry import build_line_item_handlers
from app.application.use_cases.attach_line_item import AttachLineItemUseCase
from app.application.use_cases.cancel_invoice import CancelInvoiceUseCase
from app.application.use_cases.cancel_reservation import CancelReservationUseCase
from app.application.use_cases.change_invoice_status import ChangeInvoiceStatusUseCase
from app.application.use_cases.change_payment_status import ChangePaymentStatusUseCase
from app.application.use_cases.complete_reservation import CompleteReservationUseCase
from app.application.use_cases.confirm_reservation import ConfirmReservationUseCase
from app.application.use_cases.create_reservation import (
    CreateFullReservationUseCase,
    CreateReservationUseCase,
)
from app.application.use_cases.delete_payment import DeletePaymentUseCase
from app.application.use_cases.delete_reservation import DeleteReservationUseCase
from app.application.use_cases.detach_line_item import DetachLineItemUseCase
from app.application.use_cases.generate_invoice import GenerateInvoiceUseCase
from app.application.use_cases.get_reservation import GetReservationUseCase
from app.application.use_cases.invoice_queries import InvoiceQueries
from app.application.use_cases.mark_overdue_invoices import MarkOverdueInvoicesUseCase
from app.application.use_cases.payment_queries import PaymentQueries
from app.application.use_cases.recalculate_totals import RecalculateReservationTotalsUseCase
from app.application.use_cases.reconcile_invoice import ReconcileInvoiceUseCase
from app.application.use_cases.record_payment import RecordPaymentUseCase
from app.application.use_cases.update_payment import UpdatePaymentUseCase
from app.application.use_cases.update_reservation import UpdateReservationUseCase
from app.config import Settings, get_settings
from app.infrastructure.db.repositories.catalog_sql import CatalogSQL
from app.infrastructure.db.repositories.directory_sql import PartyDirectorySQL
from app.infrastructure.db.repositories.invoice_repo_sql import InvoiceRepoSQL
from app.infrastructure.db.repositories.line_item_repo_sql import LineItemRepoSQL
from app.infrastructure.db.repositories.payment_repo_sql import PaymentRepoSQL
from app.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from app.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from app.infrastructure.in_memory import (
    InMemoryCatalog,
    InMemoryInvoiceRepo,
    InMemoryLineItemRepo,
    InMemoryPartyDirectory,
    InMemoryPaymentRepo,
    InMemoryReservationRepo,
    InMemoryStore,
    InMemoryTransactionManager,
)
from app.infrastructure.in_memory.seed import seed_demo_catalog


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


def get_clock() -> Clock:
    return SystemClock()


@lru_cache(maxsize=1)
def _in_memory_bundle():
    settings = get_settings()
    store = InMemoryStore()
    if settings.seed_demo_catalog:
        seed_demo_catalog(store, SystemClock().today())
    return {
        "store": store,
        "reservation_repo": InMemoryReservationRepo(store),
        "line_item_repo": InMemoryLineItemRepo(store),
        "invoice_repo": InMemoryInvoiceRepo(store),
        "payment_repo": InMemoryPaymentRepo(store),
        "catalog": InMemoryCatalog(store),
        "directory": InMemoryPartyDirectory(store),
        "tx_manager": InMemoryTransactionManager(store),
    }


def build_use_cases(
    *,
    reservation_repo: ReservationRepo,
    line_item_repo: LineItemRepo,
    invoice_repo: InvoiceRepo,
    payment_repo: PaymentRepo,
    catalog: CatalogLookup,
    directory: PartyDirectory,
    tx_manager: TransactionManager,
    clock: Clock,
    settings: Settings,
) -> dict[str, Any]:
    """Arma el grafo de casos de uso sobre un juego de repositorios."""
    handlers = build_line_item_handlers(catalog, line_item_repo)
    recalculate_totals = RecalculateReservationTotalsUseCase(
        reservation_repo=reservation_repo,
        line_item_repo=line_item_repo,
        invoice_repo=invoice_repo,
        payment_repo=payment_repo,
        transaction_manager=tx_manager,
        clock=clock,
    )
    attach_line_item = AttachLineItemUseCase(
        reservation_repo=reservation_repo,
        line_item_repo=line_item_repo,
        handlers=handlers,
        recalculate_totals=recalculate_totals,
        transaction_manager=tx_manager,
        clock=clock,
    )
    create_reservation = CreateReservationUseCase(
        reservation_repo=reservation_repo,
        directory=directory,
        transaction_manager=tx_manager,
        clock=clock,
    )
    reconcile_invoice = ReconcileInvoiceUseCase(
        invoice_repo=invoice_repo,
        payment_repo=payment_repo,
        reservation_repo=reservation_repo,
        recalculate_totals=recalculate_totals,
        transaction_manager=tx_manager,
        clock=clock,
    )
    return {
        # Reservas
        "create_reservation": create_reservation,
        "create_full_reservation": CreateFullReservationUseCase(
            create_reservation=create_reservation,
            attach_line_item=attach_line_item,
            transaction_manager=tx_manager,
        ),
        "get_reservation": GetReservationUseCase(
            reservation_repo=reservation_repo,
            line_item_repo=line_item_repo,
            invoice_repo=invoice_repo,
            transaction_manager=tx_manager,
        ),
        "update_reservation": UpdateReservationUseCase(
            reservation_repo=reservation_repo,
            line_item_repo=line_item_repo,
            directory=directory,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "delete_reservation": DeleteReservationUseCase(
            reservation_repo=reservation_repo,
            line_item_repo=line_item_repo,
            transaction_manager=tx_manager,
        ),
        "confirm_reservation": ConfirmReservationUseCase(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "cancel_reservation": CancelReservationUseCase(
            reservation_repo=reservation_repo,
            line_item_repo=line_item_repo,
            handlers=handlers,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "complete_reservation": CompleteReservationUseCase(
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "recalculate_totals": recalculate_totals,
        "attach_line_item": attach_line_item,
        "detach_line_item": DetachLineItemUseCase(
            reservation_repo=reservation_repo,
            line_item_repo=line_item_repo,
            handlers=handlers,
            recalculate_totals=recalculate_totals,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        # Facturas
        "generate_invoice": GenerateInvoiceUseCase(
            reservation_repo=reservation_repo,
            invoice_repo=invoice_repo,
            transaction_manager=tx_manager,
            clock=clock,
            number_prefix=settings.invoice_number_prefix,
            due_days=settings.invoice_due_days,
        ),
        "change_invoice_status": ChangeInvoiceStatusUseCase(
            invoice_repo=invoice_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "cancel_invoice": CancelInvoiceUseCase(
            invoice_repo=invoice_repo,
            payment_repo=payment_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "mark_overdue_invoices": MarkOverdueInvoicesUseCase(
            invoice_repo=invoice_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "invoice_queries": InvoiceQueries(
            invoice_repo=invoice_repo,
            reservation_repo=reservation_repo,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "reconcile_invoice": reconcile_invoice,
        # Pagos
        "record_payment": RecordPaymentUseCase(
            invoice_repo=invoice_repo,
            payment_repo=payment_repo,
            catalog=catalog,
            reconcile_invoice=reconcile_invoice,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "update_payment": UpdatePaymentUseCase(
            payment_repo=payment_repo,
            invoice_repo=invoice_repo,
            reconcile_invoice=reconcile_invoice,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "change_payment_status": ChangePaymentStatusUseCase(
            payment_repo=payment_repo,
            invoice_repo=invoice_repo,
            reconcile_invoice=reconcile_invoice,
            transaction_manager=tx_manager,
            clock=clock,
        ),
        "delete_payment": DeletePaymentUseCase(
            payment_repo=payment_repo,
            transaction_manager=tx_manager,
        ),
        "payment_queries": PaymentQueries(
            payment_repo=payment_repo,
            invoice_repo=invoice_repo,
            transaction_manager=tx_manager,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    if settings.use_in_memory:
        bundle = _in_memory_bundle()
        return build_use_cases(
            reservation_repo=bundle["reservation_repo"],
            line_item_repo=bundle["line_item_repo"],
            invoice_repo=bundle["invoice_repo"],
            payment_repo=bundle["payment_repo"],
            catalog=bundle["catalog"],
            directory=bundle["directory"],
            tx_manager=bundle["tx_manager"],
            clock=clock,
            settings=settings,
        )

    if not session:
        raise RuntimeError("DB session not available")

    return build_use_cases(
        reservation_repo=ReservationRepoSQL(session),
        line_item_repo=LineItemRepoSQL(session),
        invoice_repo=InvoiceRepoSQL(session),
        payment_repo=PaymentRepoSQL(session),
        catalog=CatalogSQL(session),
        directory=PartyDirectorySQL(session),
        tx_manager=SQLAlchemyTransactionManager(session),
        clock=clock,
        settings=settings,
    )
