from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from app.application.exceptions import BookingNotFoundError
from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus, NewBooking
from app.infrastructure.store.documents import deserialize_booking, serialize_booking, serialize_payment


class MemoryBookingStore(BookingStorePort):
    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self._lock = threading.RLock()

    def create(self, booking: NewBooking) -> BookingRecord:
        booking_id = uuid.uuid4().hex
        with self._lock:
            self._documents[booking_id] = {
                "id": booking_id,
                "created_at": datetime.now(timezone.utc).isoformat(),
                "updated_at": None,
                "data": serialize_booking(booking),
            }
            return self.get(booking_id)

    def get(self, booking_id: str) -> BookingRecord:
        with self._lock:
            document = self._documents.get(booking_id)
            if document is None:
                raise BookingNotFoundError(booking_id)
            return _to_record(document)

    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        with self._lock:
            # insertion order is creation order; newest first
            records = [_to_record(d) for d in reversed(list(self._documents.values()))]
        if status is not None:
            records = [r for r in records if r.status is status]
        return records

    def update_payment(
        self,
        booking_id: str,
        deposit: Decimal,
        balance: Decimal,
        status: BookingStatus,
    ) -> BookingRecord:
        with self._lock:
            document = self._documents.get(booking_id)
            if document is None:
                raise BookingNotFoundError(booking_id)
            document["data"].update(serialize_payment(deposit, balance, status))
            document["updated_at"] = datetime.now(timezone.utc).isoformat()
            return _to_record(document)

    def apply_payment(self, booking_id: str, amount: Decimal) -> BookingRecord:
        with self._lock:
            amounts = self.get(booking_id).with_payment(amount)
            return self.update_payment(booking_id, amounts.deposit, amounts.balance, amounts.status)

    def delete(self, booking_id: str) -> None:
        with self._lock:
            if self._documents.pop(booking_id, None) is None:
                raise BookingNotFoundError(booking_id)


def _to_record(document: dict[str, Any]) -> BookingRecord:
    return deserialize_booking(
        document["id"],
        document["created_at"],
        document["data"],
        updated_at=document.get("updated_at"),
    )
