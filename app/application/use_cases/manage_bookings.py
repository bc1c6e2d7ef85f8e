from __future__ import annotations

import logging
from decimal import Decimal

from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus


class ManageBookingsUseCase:
    def __init__(self, store: BookingStorePort) -> None:
        self._store = store
        self._logger = logging.getLogger(__name__)

    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        return self._store.list_bookings(status=status)

    def get_booking(self, booking_id: str) -> BookingRecord:
        return self._store.get(booking_id)

    def record_payment(self, booking_id: str, amount: Decimal) -> BookingRecord:
        """Apply a further payment against the outstanding balance."""
        if not amount.is_finite() or amount <= 0:
            raise ValueError("Payment amount must be a positive number")

        updated = self._store.apply_payment(booking_id, amount)
        self._logger.info(
            "Payment recorded",
            extra={"booking_id": booking_id, "amount": str(amount), "status": updated.status.value},
        )
        return updated

    def mark_completed(self, booking_id: str) -> BookingRecord:
        booking = self._store.get(booking_id)
        updated = self._store.update_payment(
            booking_id,
            deposit=booking.total,
            balance=Decimal("0"),
            status=BookingStatus.completed,
        )
        self._logger.info("Booking marked completed", extra={"booking_id": booking_id})
        return updated

    def delete_booking(self, booking_id: str) -> None:
        self._store.delete(booking_id)
        self._logger.info("Booking deleted", extra={"booking_id": booking_id})
