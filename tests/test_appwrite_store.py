"""
Tests for the Appwrite booking store against a mocked HTTP transport.
"""

from __future__ import annotations

import json
import threading
import time
from datetime import date
from decimal import Decimal

import httpx
import pytest

from app.application.exceptions import BookingNotFoundError, BookingStoreError
from app.domain.entities.booking import (
    BookingAmounts,
    BookingRequest,
    BookingStatus,
    NewBooking,
    PaymentType,
)
from app.infrastructure.appwrite.appwrite_client import AppwriteDatabaseClient
from app.infrastructure.appwrite.appwrite_store import AppwriteBookingStore

DOCUMENTS_PATH = "/v1/databases/hotel/collections/bookings/documents"


def _document(booking_id: str = "doc_1", **overrides) -> dict:
    document = {
        "$id": booking_id,
        "$createdAt": "2026-01-05T08:30:00.000+00:00",
        "$updatedAt": "2026-01-05T08:30:00.000+00:00",
        "$collectionId": "bookings",
        "$databaseId": "hotel",
        "$permissions": [],
        "guest_name": "Aisyah Rahman",
        "address": "12 Jalan Mawar, Ipoh",
        "phone": "012-3456789",
        "adults": 2,
        "children": 0,
        "vehicle_plate": None,
        "check_in": "2026-01-10",
        "check_out": "2026-01-12",
        "rooms": ["seroja", "dahlia"],
        "payment_type": "deposit",
        "total": 1060.0,
        "deposit": 500.0,
        "balance": 560.0,
        "status": "pending",
    }
    document.update(overrides)
    return document


def _store(handler) -> AppwriteBookingStore:
    client = AppwriteDatabaseClient(
        endpoint="https://appwrite.example.com/v1/",
        project_id="proj",
        api_key="secret",
        database_id="hotel",
        collection_id="bookings",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    return AppwriteBookingStore(client=client)


def _new_booking() -> NewBooking:
    return NewBooking(
        request=BookingRequest(
            guest_name="Aisyah Rahman",
            address="12 Jalan Mawar, Ipoh",
            phone="012-3456789",
            adults=2,
            children=0,
            vehicle_plate=None,
            check_in=date(2026, 1, 10),
            check_out=date(2026, 1, 12),
            rooms=("seroja", "dahlia"),
            payment_type=PaymentType.deposit,
            deposit_amount=Decimal("500"),
        ),
        amounts=BookingAmounts(total=Decimal("1060"), deposit=Decimal("500"), balance=Decimal("560")),
    )


def test_create_posts_canonical_document():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=_document())

    record = _store(handler).create(_new_booking())

    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == DOCUMENTS_PATH
    assert request.headers["X-Appwrite-Project"] == "proj"
    assert request.headers["X-Appwrite-Key"] == "secret"
    body = json.loads(request.content)
    assert body["documentId"] == "unique()"
    assert body["data"]["rooms"] == ["seroja", "dahlia"]
    assert body["data"]["total"] == 1060.0
    assert body["data"]["status"] == "pending"

    assert record.booking_id == "doc_1"
    assert record.balance == Decimal("560")
    assert record.status is BookingStatus.pending
    assert record.created_at.year == 2026


def test_list_sends_status_and_order_queries():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"total": 1, "documents": [_document()]})

    records = _store(handler).list_bookings(BookingStatus.pending)

    queries = [json.loads(q) for q in seen[0].url.params.get_list("queries[]")]
    assert queries == [
        {"method": "equal", "attribute": "status", "values": ["pending"]},
        {"method": "orderDesc", "attribute": "$createdAt"},
    ]
    assert [r.booking_id for r in records] == ["doc_1"]


def test_update_payment_patches_payment_fields():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_document(deposit=1060.0, balance=0.0, status="completed"))

    record = _store(handler).update_payment("doc_1", Decimal("1060"), Decimal("0"), BookingStatus.completed)

    assert seen[0].method == "PATCH"
    assert seen[0].url.path == f"{DOCUMENTS_PATH}/doc_1"
    assert json.loads(seen[0].content) == {"data": {"deposit": 1060.0, "balance": 0.0, "status": "completed"}}
    assert record.status is BookingStatus.completed


def test_delete_accepts_empty_response():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(204)

    _store(handler).delete("doc_1")


def test_missing_document_raises_not_found():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Document with the requested ID could not be found.", "code": 404})

    with pytest.raises(BookingNotFoundError):
        _store(handler).get("nope")


def test_rejected_write_surfaces_reason():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Invalid document structure: Unknown attribute: \"guest_name\"", "code": 400})

    with pytest.raises(BookingStoreError, match="Invalid document structure"):
        _store(handler).create(_new_booking())


def test_transport_error_becomes_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(BookingStoreError, match="unreachable"):
        _store(handler).list_bookings()


def test_malformed_document_becomes_store_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=_document(status="cancelled"))

    with pytest.raises(BookingStoreError):
        _store(handler).get("doc_1")


def test_apply_payment_reads_then_patches_new_totals():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "GET":
            return httpx.Response(200, json=_document())
        return httpx.Response(200, json=_document(**json.loads(request.content)["data"]))

    record = _store(handler).apply_payment("doc_1", Decimal("100"))

    assert [r.method for r in seen] == ["GET", "PATCH"]
    assert json.loads(seen[1].content) == {"data": {"deposit": 600.0, "balance": 460.0, "status": "pending"}}
    assert record.deposit == Decimal("600")


def test_apply_payment_serialises_payments_on_one_booking():
    state = {"deposit": 500.0, "balance": 560.0, "status": "pending"}
    state_lock = threading.Lock()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            with state_lock:
                snapshot = dict(state)
            time.sleep(0.05)
            return httpx.Response(200, json=_document(**snapshot))
        with state_lock:
            state.update(json.loads(request.content)["data"])
            snapshot = dict(state)
        return httpx.Response(200, json=_document(**snapshot))

    store = _store(handler)
    threads = [
        threading.Thread(target=store.apply_payment, args=("doc_1", Decimal("100")))
        for _ in range(2)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert state == {"deposit": 700.0, "balance": 360.0, "status": "pending"}
