from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from app.domain.entities.invoice import Invoice, InvoiceStatus, invoice_status_for
from app.domain.entities.line_item import (
    FlightItem,
    HotelItem,
    LineItem,
    LineItemKind,
    PackageItem,
    ServiceItem,
    build_line_item,
)
from app.domain.entities.payment import Payment, PaymentStatus
from app.domain.entities.reservation import Reservation, ReservationStatus
from app.domain.errors import (
    InvalidDateRangeError,
    InvalidInvoiceStatusError,
    InvalidPaymentStatusError,
    InvalidRangeError,
    InvalidReservationStatusError,
    QuantityOutOfBoundsError,
)
from app.domain.totals import approved_total, pending_balance, reservation_total
from app.domain.value_objects.date_range import DateRange
from app.domain.value_objects.invoice_number import InvoiceNumber
from app.domain.value_objects.money import to_amount

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


# === Value objects ===


def test_date_range_rejects_end_before_start():
    with pytest.raises(InvalidDateRangeError):
        DateRange(start=date(2026, 4, 5), end=date(2026, 4, 1))


def test_date_range_same_day_only_when_allowed():
    with pytest.raises(InvalidDateRangeError):
        DateRange(start=date(2026, 4, 1), end=date(2026, 4, 1))
    assert DateRange(start=date(2026, 4, 1), end=date(2026, 4, 1), allow_same_day=True).nights == 0


def test_date_range_within_and_overlap():
    trip = DateRange(start=date(2026, 4, 1), end=date(2026, 4, 10))
    stay = DateRange(start=date(2026, 4, 2), end=date(2026, 4, 4))
    assert stay.within(trip)
    assert not DateRange(start=date(2026, 4, 8), end=date(2026, 4, 12)).within(trip)
    # check-out el mismo día del check-in siguiente no se cruza
    assert not stay.overlaps_with(DateRange(start=date(2026, 4, 4), end=date(2026, 4, 6)))
    assert stay.overlaps_with(DateRange(start=date(2026, 4, 3), end=date(2026, 4, 6)))


def test_invoice_number_format_and_sequence():
    first = InvoiceNumber.first("fac", 2026)
    assert first.value == "FAC-2026-00001"
    assert InvoiceNumber.parse("FAC-2026-00041").next().value == "FAC-2026-00042"


def test_invoice_number_rejects_garbage():
    with pytest.raises(ValueError):
        InvoiceNumber.parse("2026-FAC-1")


def test_to_amount_rounds_half_up():
    assert to_amount("10.005") == Decimal("10.01")
    assert to_amount(3) == Decimal("3.00")


# === Ítems ===


def test_hotel_subtotal_is_nights_times_price_times_rooms():
    item = HotelItem(
        resource_id=1,
        quantity=2,
        unit_price=Decimal("100"),
        start_date=date(2026, 4, 1),
        end_date=date(2026, 4, 3),
    )
    assert item.price() == Decimal("400.00")


def test_flight_subtotal_adds_extra_baggage_and_holds_seats():
    item = FlightItem(
        resource_id=1,
        quantity=3,
        unit_price=Decimal("150.00"),
        extra_baggage_cost=Decimal("35.50"),
    )
    assert item.price() == Decimal("485.50")
    assert item.capacity_delta() == 3
    assert item.holds_capacity
    item.capacity_released = True
    assert not item.holds_capacity


def test_package_and_service_subtotals():
    assert PackageItem(quantity=4, unit_price=Decimal("250.00")).price() == Decimal("1000.00")
    service = ServiceItem(quantity=2, unit_price=Decimal("25.00"))
    assert service.price() == Decimal("50.00")
    assert service.capacity_delta() == 0


def test_line_item_base_requires_variant():
    with pytest.raises(TypeError):
        LineItem(quantity=1)


def test_item_without_date_never_starts():
    assert not ServiceItem(quantity=1).has_started(date(2030, 1, 1))
    item = HotelItem(start_date=date(2026, 4, 1), end_date=date(2026, 4, 3))
    assert not item.has_started(date(2026, 3, 31))
    assert item.has_started(date(2026, 4, 1))


def test_build_line_item_restores_variant_fields():
    original = FlightItem(resource_id=7, quantity=2, assigned_seats=["12A", "12B"], extra_baggage_kg=10)
    rebuilt = build_line_item(
        LineItemKind.FLIGHT.value,
        original.details(),
        resource_id=7,
        quantity=2,
    )
    assert isinstance(rebuilt, FlightItem)
    assert rebuilt.assigned_seats == ["12A", "12B"]
    assert rebuilt.extra_baggage_kg == 10


# === Reserva ===


def _reservation(**overrides) -> Reservation:
    fields = dict(
        client_id=1,
        employee_id=1,
        trip_start=date(2026, 4, 1),
        trip_end=date(2026, 4, 10),
        passenger_count=2,
        now=NOW,
    )
    fields.update(overrides)
    return Reservation.open(**fields)


def test_open_reservation_starts_empty_and_pending():
    reservation = _reservation()
    assert reservation.status == ReservationStatus.PENDING
    assert reservation.total_amount == Decimal("0.00")
    assert reservation.balance_due == Decimal("0.00")


def test_open_reservation_rejects_past_trip():
    with pytest.raises(InvalidRangeError):
        _reservation(trip_start=date(2026, 3, 1), trip_end=date(2026, 3, 5))


def test_apply_totals_keeps_balance_consistent():
    reservation = _reservation()
    reservation.apply_totals(Decimal("650"), Decimal("200"), NOW)
    assert reservation.balance_due == Decimal("450.00")
    assert reservation.balance_due == reservation.total_amount - reservation.amount_paid


def test_cancel_requires_reason_and_is_terminal():
    reservation = _reservation(observations="Cliente frecuente")
    with pytest.raises(InvalidRangeError):
        reservation.cancel("   ", NOW)

    reservation.cancel("Cliente desistió", NOW)
    assert reservation.status == ReservationStatus.CANCELLED
    assert reservation.observations.startswith("CANCELADA - Cliente desistió")
    assert "Cliente frecuente" in reservation.observations

    with pytest.raises(InvalidReservationStatusError):
        reservation.cancel("otra vez", NOW)
    with pytest.raises(InvalidReservationStatusError):
        reservation.confirm(NOW)


def test_complete_only_from_confirmed():
    reservation = _reservation()
    with pytest.raises(InvalidReservationStatusError):
        reservation.complete(NOW)
    reservation.confirm(NOW)
    reservation.complete(NOW)
    assert reservation.status == ReservationStatus.COMPLETED
    assert not reservation.is_mutable


# === Facturas y pagos ===


@pytest.mark.parametrize(
    "current, approved, expected",
    [
        (InvoiceStatus.PENDING, "0", InvoiceStatus.PENDING),
        (InvoiceStatus.PENDING, "450", InvoiceStatus.PAID),
        (InvoiceStatus.PAID, "100", InvoiceStatus.PENDING),
        (InvoiceStatus.OVERDUE, "100", InvoiceStatus.OVERDUE),
        (InvoiceStatus.OVERDUE, "450", InvoiceStatus.PAID),
        (InvoiceStatus.CANCELLED, "450", InvoiceStatus.CANCELLED),
    ],
)
def test_invoice_status_follows_approved_total(current, approved, expected):
    assert invoice_status_for(current, Decimal("450.00"), Decimal(approved)) == expected


def test_invoice_issue_sets_due_date_and_mark_overdue():
    invoice = Invoice.issue(1, "FAC-2026-00001", Decimal("450"), date(2026, 3, 2), 30, NOW)
    assert invoice.due_date == date(2026, 4, 1)
    assert not invoice.mark_overdue(date(2026, 4, 1), NOW)
    assert invoice.is_due_within(date(2026, 3, 28), 7)
    assert invoice.mark_overdue(date(2026, 4, 2), NOW)
    assert invoice.status == InvoiceStatus.OVERDUE


def test_invoice_cancel_rejected_with_approved_payments():
    invoice = Invoice.issue(1, "FAC-2026-00001", Decimal("450"), date(2026, 3, 2), 30, NOW)
    with pytest.raises(InvalidInvoiceStatusError):
        invoice.cancel(has_approved_payments=True, now=NOW)
    invoice.cancel(has_approved_payments=False, now=NOW)
    with pytest.raises(InvalidInvoiceStatusError):
        invoice.ensure_accepts_payments()


def test_payment_record_validates_amount_and_deletion():
    with pytest.raises(QuantityOutOfBoundsError):
        Payment.record(invoice_id=1, payment_method_id=1, amount=Decimal("0"), now=NOW)

    payment = Payment.record(invoice_id=1, payment_method_id=1, amount=Decimal("100"), now=NOW)
    payment.ensure_deletable()
    assert payment.change_status(PaymentStatus.APPROVED, NOW)
    assert not payment.change_status(PaymentStatus.APPROVED, NOW)
    with pytest.raises(InvalidPaymentStatusError):
        payment.ensure_deletable()


def test_totals_only_count_approved_payments():
    items = [
        HotelItem(subtotal=Decimal("200.00")),
        FlightItem(subtotal=Decimal("450.00")),
    ]
    payments = [
        Payment(id=1, amount=Decimal("300.00"), status=PaymentStatus.APPROVED),
        Payment(id=2, amount=Decimal("100.00"), status=PaymentStatus.PENDING),
        Payment(id=3, amount=Decimal("50.00"), status=PaymentStatus.REJECTED),
    ]
    assert reservation_total(items) == Decimal("650.00")
    assert approved_total(payments) == Decimal("300.00")
    assert approved_total(payments, exclude_id=1) == Decimal("0.00")
    assert pending_balance(Decimal("650.00"), Decimal("300.00")) == Decimal("350.00")


def test_rejected_payment_amount_cannot_change():
    payment = Payment.record(invoice_id=1, payment_method_id=1, amount=Decimal("100"), now=NOW)
    payment.change_amount(Decimal("80"), NOW)
    payment.change_status(PaymentStatus.REJECTED, NOW)

    with pytest.raises(InvalidPaymentStatusError):
        payment.change_amount(Decimal("90"), NOW)
    assert payment.amount == Decimal("80.00")
