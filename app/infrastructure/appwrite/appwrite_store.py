from __future__ import annotations

import threading
from decimal import Decimal
from typing import Any

from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus, NewBooking
from app.infrastructure.appwrite.appwrite_client import AppwriteDatabaseClient, equal, order_desc
from app.infrastructure.store.documents import deserialize_booking, serialize_booking, serialize_payment


class AppwriteBookingStore(BookingStorePort):
    """
    Booking store over an Appwrite collection.

    Payments are read-modify-write against the remote document, so they are
    serialised per booking id within this process.
    """

    def __init__(self, client: AppwriteDatabaseClient) -> None:
        self._client = client
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()

    def _get_lock(self, booking_id: str) -> threading.Lock:
        with self._lock_lock:
            if booking_id not in self._locks:
                self._locks[booking_id] = threading.Lock()
            return self._locks[booking_id]

    def create(self, booking: NewBooking) -> BookingRecord:
        return _to_record(self._client.create_document(serialize_booking(booking)))

    def get(self, booking_id: str) -> BookingRecord:
        return _to_record(self._client.get_document(booking_id))

    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        queries = []
        if status is not None:
            queries.append(equal("status", status.value))
        queries.append(order_desc("$createdAt"))
        return [_to_record(d) for d in self._client.list_documents(queries)]

    def update_payment(
        self,
        booking_id: str,
        deposit: Decimal,
        balance: Decimal,
        status: BookingStatus,
    ) -> BookingRecord:
        with self._get_lock(booking_id):
            document = self._client.update_document(booking_id, serialize_payment(deposit, balance, status))
        return _to_record(document)

    def apply_payment(self, booking_id: str, amount: Decimal) -> BookingRecord:
        with self._get_lock(booking_id):
            amounts = self.get(booking_id).with_payment(amount)
            document = self._client.update_document(
                booking_id,
                serialize_payment(amounts.deposit, amounts.balance, amounts.status),
            )
        return _to_record(document)

    def delete(self, booking_id: str) -> None:
        with self._get_lock(booking_id):
            self._client.delete_document(booking_id)
        with self._lock_lock:
            self._locks.pop(booking_id, None)


def _to_record(document: dict[str, Any]) -> BookingRecord:
    return deserialize_booking(
        str(document.get("$id", "")),
        document.get("$createdAt", ""),
        document,
        updated_at=document.get("$updatedAt"),
    )
