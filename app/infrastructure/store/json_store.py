from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any

from app.application.exceptions import BookingNotFoundError, BookingStoreError
from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus, NewBooking
from app.infrastructure.store.documents import deserialize_booking, serialize_booking, serialize_payment


class JsonBookingStore(BookingStorePort):
    """Single-file JSON store for local development."""

    def __init__(self, path: str = "./data/bookings.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load(self) -> dict[str, Any]:
        """Load all documents, return an empty collection if the file is missing."""
        if not self._path.exists():
            return {"documents": [], "version": 1}

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            raise BookingStoreError(f"Cannot read booking file {self._path}: {e}") from e

        if "documents" not in data:
            data["documents"] = []
        return data

    def _save(self, data: dict[str, Any]) -> None:
        """Save documents atomically via a temp file."""
        temp_path = self._path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise BookingStoreError(f"Cannot write booking file {self._path}: {e}") from e

    def create(self, booking: NewBooking) -> BookingRecord:
        document = {
            "id": uuid.uuid4().hex,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "updated_at": None,
            "data": serialize_booking(booking),
        }
        with self._lock:
            data = self._load()
            data["documents"].append(document)
            self._save(data)
        self._logger.debug("Booking written", extra={"booking_id": document["id"]})
        return _to_record(document)

    def get(self, booking_id: str) -> BookingRecord:
        with self._lock:
            data = self._load()
        return _to_record(_find(data, booking_id))

    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        with self._lock:
            data = self._load()
        records = [_to_record(d) for d in reversed(data["documents"])]
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
            data = self._load()
            document = _find(data, booking_id)
            document["data"].update(serialize_payment(deposit, balance, status))
            document["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._save(data)
        return _to_record(document)

    def apply_payment(self, booking_id: str, amount: Decimal) -> BookingRecord:
        with self._lock:
            data = self._load()
            document = _find(data, booking_id)
            amounts = _to_record(document).with_payment(amount)
            document["data"].update(serialize_payment(amounts.deposit, amounts.balance, amounts.status))
            document["updated_at"] = datetime.now(timezone.utc).isoformat()
            self._save(data)
        return _to_record(document)

    def delete(self, booking_id: str) -> None:
        with self._lock:
            data = self._load()
            document = _find(data, booking_id)
            data["documents"].remove(document)
            self._save(data)


def _find(data: dict[str, Any], booking_id: str) -> dict[str, Any]:
    for document in data["documents"]:
        if document["id"] == booking_id:
            return document
    raise BookingNotFoundError(booking_id)


def _to_record(document: dict[str, Any]) -> BookingRecord:
    return deserialize_booking(
        document["id"],
        document["created_at"],
        document["data"],
        updated_at=document.get("updated_at"),
    )
