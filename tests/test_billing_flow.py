"""
Facturación y pagos: numeración, conciliación y reglas de saldo.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.api.schemas.invoices import GenerateInvoiceRequest
from app.api.schemas.line_items import AttachFlightRequest, AttachServiceRequest
from app.api.schemas.payments import RecordPaymentRequest, UpdatePaymentRequest
from app.domain.entities.invoice import InvoiceStatus
from app.domain.entities.payment import PaymentStatus
from app.domain.errors import (
    DuplicatePaymentReferenceError,
    InvalidInvoiceStatusError,
    InvalidPaymentStatusError,
    InvalidReservationStatusError,
    InvalidStateError,
    InvoiceAlreadyExistsError,
    NothingToInvoiceError,
    PaymentExceedsBalanceError,
    PaymentMethodInactiveError,
)


@pytest.fixture
def invoiced(use_cases, make_reservation):
    """Reserva confirmada con un vuelo de 450.00 y su factura emitida."""

    async def _invoiced():
        reservation = await make_reservation()
        await use_cases["attach_line_item"].execute(
            reservation.id, AttachFlightRequest(flight_id=1, passengers=3)
        )
        await use_cases["confirm_reservation"].execute(reservation.id)
        return await use_cases["generate_invoice"].execute(
            GenerateInvoiceRequest(reservation_id=reservation.id)
        )

    return _invoiced


def _payment(invoice, amount: str, **overrides) -> RecordPaymentRequest:
    fields = {"invoice_id": invoice.id, "payment_method_id": 1, "amount": Decimal(amount)}
    fields.update(overrides)
    return RecordPaymentRequest(**fields)


# === Emisión ===


async def test_invoice_snapshots_reservation_total(invoiced, clock):
    invoice = await invoiced()

    assert invoice.invoice_number == "FAC-2026-00001"
    assert invoice.total == Decimal("450.00")
    assert invoice.status == InvoiceStatus.PENDING
    assert invoice.issue_date == clock.today()
    assert invoice.due_date == clock.today() + timedelta(days=30)


async def test_invoice_requires_confirmed_reservation(use_cases, make_reservation):
    reservation = await make_reservation()
    await use_cases["attach_line_item"].execute(reservation.id, AttachFlightRequest(flight_id=1, passengers=1))

    with pytest.raises(InvalidReservationStatusError):
        await use_cases["generate_invoice"].execute(GenerateInvoiceRequest(reservation_id=reservation.id))


async def test_empty_reservation_has_nothing_to_invoice(use_cases, make_reservation):
    reservation = await make_reservation(status="CONFIRMED")
    with pytest.raises(NothingToInvoiceError):
        await use_cases["generate_invoice"].execute(GenerateInvoiceRequest(reservation_id=reservation.id))


async def test_second_invoice_rejected_until_first_is_cancelled(use_cases, invoiced):
    invoice = await invoiced()
    request = GenerateInvoiceRequest(reservation_id=invoice.reservation_id)

    with pytest.raises(InvoiceAlreadyExistsError):
        await use_cases["generate_invoice"].execute(request)

    await use_cases["cancel_invoice"].execute(invoice.id)
    reissued = await use_cases["generate_invoice"].execute(request)
    assert reissued.invoice_number == "FAC-2026-00002"


async def test_numbering_restarts_each_year(use_cases, invoiced, make_reservation, clock):
    await invoiced()
    clock.advance(days=320)
    reservation = await make_reservation(
        trip_start=clock.today() + timedelta(days=5), trip_end=clock.today() + timedelta(days=10)
    )
    await use_cases["attach_line_item"].execute(reservation.id, AttachServiceRequest(service_id=1))
    await use_cases["confirm_reservation"].execute(reservation.id)

    invoice = await use_cases["generate_invoice"].execute(GenerateInvoiceRequest(reservation_id=reservation.id))
    assert invoice.invoice_number == "FAC-2027-00001"


# === Pagos ===


async def test_full_approved_payment_settles_invoice_and_reservation(use_cases, invoiced):
    invoice = await invoiced()

    outcome = await use_cases["record_payment"].execute(_payment(invoice, "450.00", status="APPROVED"))

    assert outcome.invoice.status == InvoiceStatus.PAID
    assert outcome.invoice.amount_paid == Decimal("450.00")
    assert outcome.reservation.amount_paid == Decimal("450.00")
    assert outcome.reservation.balance_due == Decimal("0.00")


async def test_payment_above_pending_balance_is_rejected(use_cases, invoiced, store):
    invoice = await invoiced()

    with pytest.raises(PaymentExceedsBalanceError):
        await use_cases["record_payment"].execute(_payment(invoice, "500.00"))

    assert store.payments == {}
    assert store.invoices[invoice.id].status == InvoiceStatus.PENDING
    assert store.reservations[invoice.reservation_id].amount_paid == Decimal("0.00")


async def test_pending_payments_do_not_count(use_cases, invoiced):
    invoice = await invoiced()

    outcome = await use_cases["record_payment"].execute(_payment(invoice, "200.00"))

    assert outcome.payment.status == PaymentStatus.PENDING
    assert outcome.invoice.amount_paid == Decimal("0.00")
    assert outcome.reservation.balance_due == Decimal("450.00")


async def test_approving_then_rejecting_reopens_invoice(use_cases, invoiced):
    invoice = await invoiced()
    recorded = await use_cases["record_payment"].execute(_payment(invoice, "450.00"))

    approved = await use_cases["change_payment_status"].execute(recorded.payment.id, "APPROVED")
    assert approved.invoice.status == InvoiceStatus.PAID

    rejected = await use_cases["change_payment_status"].execute(recorded.payment.id, PaymentStatus.REJECTED)
    assert rejected.invoice.status == InvoiceStatus.PENDING
    assert rejected.reservation.balance_due == Decimal("450.00")


async def test_unknown_payment_status_value(use_cases, invoiced):
    invoice = await invoiced()
    recorded = await use_cases["record_payment"].execute(_payment(invoice, "10.00"))

    with pytest.raises(InvalidStateError) as exc_info:
        await use_cases["change_payment_status"].execute(recorded.payment.id, "REFUNDED")
    assert exc_info.value.code == "INVALID_PAYMENT_STATUS_VALUE"


async def test_approval_cannot_exceed_balance(use_cases, invoiced):
    invoice = await invoiced()
    first = await use_cases["record_payment"].execute(_payment(invoice, "300.00"))
    second = await use_cases["record_payment"].execute(_payment(invoice, "300.00"))
    await use_cases["change_payment_status"].execute(first.payment.id, "APPROVED")

    with pytest.raises(PaymentExceedsBalanceError):
        await use_cases["change_payment_status"].execute(second.payment.id, "APPROVED")


async def test_inactive_payment_method(use_cases, invoiced):
    invoice = await invoiced()
    with pytest.raises(PaymentMethodInactiveError):
        await use_cases["record_payment"].execute(_payment(invoice, "10.00", payment_method_id=3))


async def test_transaction_reference_is_unique(use_cases, invoiced):
    invoice = await invoiced()
    await use_cases["record_payment"].execute(_payment(invoice, "10.00", transaction_reference="TRX-1"))

    with pytest.raises(DuplicatePaymentReferenceError):
        await use_cases["record_payment"].execute(_payment(invoice, "10.00", transaction_reference="TRX-1"))


async def test_update_payment_amount_reconciles(use_cases, invoiced):
    invoice = await invoiced()
    recorded = await use_cases["record_payment"].execute(_payment(invoice, "100.00", status="APPROVED"))

    outcome = await use_cases["update_payment"].execute(
        recorded.payment.id, UpdatePaymentRequest(amount=Decimal("450.00"))
    )

    assert outcome.invoice.status == InvoiceStatus.PAID
    assert outcome.reservation.balance_due == Decimal("0.00")


async def test_only_pending_payments_can_be_deleted(use_cases, invoiced, store):
    invoice = await invoiced()
    approved = await use_cases["record_payment"].execute(_payment(invoice, "50.00", status="APPROVED"))
    pending = await use_cases["record_payment"].execute(_payment(invoice, "50.00"))

    with pytest.raises(InvalidPaymentStatusError):
        await use_cases["delete_payment"].execute(approved.payment.id)
    await use_cases["delete_payment"].execute(pending.payment.id)

    remaining = await use_cases["payment_queries"].by_invoice(invoice.id)
    assert [payment.id for payment in remaining] == [approved.payment.id]


async def test_cancelled_invoice_rejects_payments(use_cases, invoiced):
    invoice = await invoiced()
    await use_cases["cancel_invoice"].execute(invoice.id)

    with pytest.raises(InvalidInvoiceStatusError):
        await use_cases["record_payment"].execute(_payment(invoice, "10.00"))


async def test_invoice_with_approved_payment_cannot_be_cancelled(use_cases, invoiced):
    invoice = await invoiced()
    await use_cases["record_payment"].execute(_payment(invoice, "10.00", status="APPROVED"))

    with pytest.raises(InvalidInvoiceStatusError):
        await use_cases["cancel_invoice"].execute(invoice.id)


# === Vencimientos ===


async def test_overdue_sweep_and_queries(use_cases, invoiced, clock):
    invoice = await invoiced()

    clock.advance(days=25)
    due_soon = await use_cases["invoice_queries"].due_soon(7)
    assert [i.id for i in due_soon] == [invoice.id]
    assert await use_cases["mark_overdue_invoices"].execute() == []

    clock.advance(days=6)
    assert [i.id for i in await use_cases["invoice_queries"].overdue()] == [invoice.id]
    marked = await use_cases["mark_overdue_invoices"].execute()
    assert [i.status for i in marked] == [InvoiceStatus.OVERDUE]

    outcome = await use_cases["record_payment"].execute(_payment(invoice, "450.00", status="APPROVED"))
    assert outcome.invoice.status == InvoiceStatus.PAID


async def test_manual_status_override(use_cases, invoiced):
    invoice = await invoiced()

    changed = await use_cases["change_invoice_status"].execute(invoice.id, "OVERDUE", reason="Acuerdo de pago")
    assert changed.status == InvoiceStatus.OVERDUE

    by_status = await use_cases["invoice_queries"].by_status(InvoiceStatus.OVERDUE)
    assert [i.id for i in by_status] == [invoice.id]
    found = await use_cases["invoice_queries"].get_by_number(" fac-2026-00001 ")
    assert found.id == invoice.id


async def test_rejected_payment_amount_is_frozen(use_cases, invoiced, store):
    invoice = await invoiced()
    recorded = await use_cases["record_payment"].execute(_payment(invoice, "50.00"))
    await use_cases["change_payment_status"].execute(recorded.payment.id, "REJECTED")

    with pytest.raises(InvalidPaymentStatusError):
        await use_cases["update_payment"].execute(recorded.payment.id, UpdatePaymentRequest(amount=Decimal("60.00")))

    assert store.payments[recorded.payment.id].amount == Decimal("50.00")
    assert store.payments[recorded.payment.id].status == PaymentStatus.REJECTED


async def test_pending_payment_amount_can_change(use_cases, invoiced):
    invoice = await invoiced()
    recorded = await use_cases["record_payment"].execute(_payment(invoice, "50.00"))

    outcome = await use_cases["update_payment"].execute(
        recorded.payment.id, UpdatePaymentRequest(amount=Decimal("60.00"))
    )

    assert outcome.payment.amount == Decimal("60.00")
    assert outcome.invoice.amount_paid == Decimal("0.00")
