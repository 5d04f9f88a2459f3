from datetime import timedelta

from fastapi.testclient import TestClient

API = "/api/v1"


def _create_reservation(client: TestClient, clock, **overrides) -> dict:
    payload = {
        "client_id": 1,
        "employee_id": 1,
        "trip_start": (clock.today() + timedelta(days=28)).isoformat(),
        "trip_end": (clock.today() + timedelta(days=40)).isoformat(),
        "passenger_count": 4,
    }
    payload.update(overrides)
    res = client.post(f"{API}/reservations", json=payload)
    assert res.status_code == 201, res.json()
    return res.json()


def _hotel_payload(clock) -> dict:
    return {
        "hotel_id": 1,
        "check_in": (clock.today() + timedelta(days=30)).isoformat(),
        "check_out": (clock.today() + timedelta(days=32)).isoformat(),
        "rooms": 1,
        "guests": 2,
    }


def test_health(client: TestClient):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["service"] == "tourism-backoffice"

    assert client.get("/health/live").json() == {"status": "alive"}

    ready = client.get("/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["storage"] == "in_memory"


def test_create_reservation_starts_with_zero_totals(client: TestClient, clock):
    body = _create_reservation(client, clock)

    assert body["status"] == "PENDING"
    assert body["total_amount"] == "0.00"
    assert body["balance_due"] == "0.00"


def test_create_reservation_unknown_client(client: TestClient, clock):
    payload = {
        "client_id": 99,
        "employee_id": 1,
        "trip_start": (clock.today() + timedelta(days=28)).isoformat(),
        "trip_end": (clock.today() + timedelta(days=40)).isoformat(),
        "passenger_count": 2,
    }
    res = client.post(f"{API}/reservations", json=payload)
    assert res.status_code == 404
    assert res.json()["code"] == "CLIENT_NOT_FOUND"


def test_attach_hotel_and_read_detail(client: TestClient, clock):
    reservation = _create_reservation(client, clock)

    res = client.post(f"{API}/reservations/{reservation['id']}/items/hotels", json=_hotel_payload(clock))
    assert res.status_code == 201
    item = res.json()
    assert item["kind"] == "HOTEL"
    assert item["subtotal"] == "200.00"
    assert item["details"]["guests"] == 2

    detail = client.get(f"{API}/reservations/{reservation['id']}").json()
    assert detail["total_amount"] == "200.00"
    assert [i["id"] for i in detail["items"]] == [item["id"]]


def test_domain_errors_map_to_http_status(client: TestClient, clock):
    reservation = _create_reservation(client, clock)
    hotels_url = f"{API}/reservations/{reservation['id']}/items/hotels"

    assert client.post(hotels_url, json=_hotel_payload(clock)).status_code == 201

    duplicate = client.post(hotels_url, json=_hotel_payload(clock))
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "DUPLICATE_LINE_ITEM"

    outside = client.post(
        f"{API}/reservations/{reservation['id']}/items/packages",
        json={"package_id": 1, "persons": 2, "start_date": (clock.today() + timedelta(days=90)).isoformat()},
    )
    assert outside.status_code == 422

    missing = client.get(f"{API}/reservations/999")
    assert missing.status_code == 404
    assert missing.json()["code"] == "RESERVATION_NOT_FOUND"

    invoice = client.post(f"{API}/invoices", json={"reservation_id": reservation["id"]})
    assert invoice.status_code == 400


def test_request_validation_rejects_unknown_fields(client: TestClient, clock):
    reservation = _create_reservation(client, clock)
    payload = {**_hotel_payload(clock), "discount": "10.00"}
    res = client.post(f"{API}/reservations/{reservation['id']}/items/hotels", json=payload)
    assert res.status_code == 422


def test_full_reservation_endpoint(client: TestClient, clock):
    payload = {
        "client_id": 1,
        "employee_id": 1,
        "trip_start": (clock.today() + timedelta(days=28)).isoformat(),
        "trip_end": (clock.today() + timedelta(days=40)).isoformat(),
        "passenger_count": 4,
        "items": [
            {"kind": "HOTEL", **_hotel_payload(clock)},
            {"kind": "FLIGHT", "flight_id": 1, "passengers": 3},
            {"kind": "SERVICE", "service_id": 2, "quantity": 4},
        ],
    }
    res = client.post(f"{API}/reservations/full", json=payload)
    assert res.status_code == 201
    body = res.json()
    assert len(body["items"]) == 3
    assert body["total_amount"] == "810.00"


def test_invoice_and_payment_flow(client: TestClient, clock):
    reservation = _create_reservation(client, clock)
    rid = reservation["id"]
    client.post(f"{API}/reservations/{rid}/items/flights", json={"flight_id": 1, "passengers": 3})
    assert client.post(f"{API}/reservations/{rid}/confirm").json()["status"] == "CONFIRMED"

    invoice = client.post(f"{API}/invoices", json={"reservation_id": rid})
    assert invoice.status_code == 201
    invoice = invoice.json()
    assert invoice["invoice_number"] == "FAC-2026-00001"
    assert invoice["total"] == "450.00"
    assert invoice["pending_balance"] == "450.00"

    too_much = client.post(
        f"{API}/payments",
        json={"invoice_id": invoice["id"], "payment_method_id": 1, "amount": "500.00"},
    )
    assert too_much.status_code == 400
    assert too_much.json()["code"] == "PAYMENT_EXCEEDS_BALANCE"

    paid = client.post(
        f"{API}/payments",
        json={
            "invoice_id": invoice["id"],
            "payment_method_id": 1,
            "amount": "450.00",
            "status": "APPROVED",
            "transaction_reference": "TRX-001",
        },
    )
    assert paid.status_code == 201
    body = paid.json()
    assert body["invoice"]["status"] == "PAID"
    assert body["reservation"]["balance_due"] == "0.00"

    by_number = client.get(f"{API}/invoices/number/FAC-2026-00001")
    assert by_number.json()["status"] == "PAID"
    payments = client.get(f"{API}/payments/invoice/{invoice['id']}").json()
    assert [p["transaction_reference"] for p in payments] == ["TRX-001"]

    cancel = client.post(f"{API}/invoices/{invoice['id']}/cancel")
    assert cancel.status_code == 400


def test_cancel_reservation_endpoint(client: TestClient, clock, store):
    reservation = _create_reservation(client, clock)
    rid = reservation["id"]
    client.post(f"{API}/reservations/{rid}/items/flights", json={"flight_id": 1, "passengers": 2})
    assert store.flights[1].available_seats == 8

    missing_reason = client.post(f"{API}/reservations/{rid}/cancel", json={})
    assert missing_reason.status_code == 422

    res = client.post(f"{API}/reservations/{rid}/cancel", json={"reason": "Cambio de planes"})
    assert res.status_code == 200
    assert res.json()["status"] == "CANCELLED"
    assert store.flights[1].available_seats == 10


def test_detach_and_delete(client: TestClient, clock):
    reservation = _create_reservation(client, clock)
    rid = reservation["id"]
    item = client.post(f"{API}/reservations/{rid}/items/services", json={"service_id": 1}).json()

    detached = client.delete(f"{API}/reservations/{rid}/items/{item['id']}")
    assert detached.status_code == 200
    assert detached.json()["total_amount"] == "0.00"

    assert client.delete(f"{API}/reservations/{rid}").status_code == 204
    assert client.get(f"{API}/reservations/{rid}").status_code == 404


def test_due_soon_and_mark_overdue(client: TestClient, clock):
    reservation = _create_reservation(client, clock)
    rid = reservation["id"]
    client.post(f"{API}/reservations/{rid}/items/services", json={"service_id": 1})
    client.post(f"{API}/reservations/{rid}/confirm")
    invoice = client.post(f"{API}/invoices", json={"reservation_id": rid}).json()

    assert client.get(f"{API}/invoices/due-soon", params={"days": 7}).json() == []

    clock.advance(days=31)
    marked = client.post(f"{API}/invoices/mark-overdue").json()
    assert [i["id"] for i in marked] == [invoice["id"]]
    overdue = client.get(f"{API}/invoices/status/OVERDUE").json()
    assert [i["invoice_number"] for i in overdue] == [invoice["invoice_number"]]


def test_complete_reservation_endpoint(client: TestClient, clock):
    reservation = _create_reservation(client, clock)
    rid = reservation["id"]

    early = client.post(f"{API}/reservations/{rid}/complete")
    assert early.status_code == 400
    assert early.json()["code"] == "INVALID_RESERVATION_STATUS"

    client.post(f"{API}/reservations/{rid}/confirm")
    completed = client.post(f"{API}/reservations/{rid}/complete")
    assert completed.status_code == 200
    assert completed.json()["status"] == "COMPLETED"

    late = client.post(f"{API}/reservations/{rid}/items/services", json={"service_id": 1})
    assert late.status_code == 400
    assert late.json()["code"] == "INVALID_RESERVATION_STATUS"
