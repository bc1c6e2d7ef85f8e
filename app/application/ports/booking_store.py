from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from app.domain.entities.booking import BookingRecord, BookingStatus, NewBooking


class BookingStorePort(ABC):
    @abstractmethod
    def create(self, booking: NewBooking) -> BookingRecord:
        """Persist a new booking. Returns the stored record with id and timestamps."""
        raise NotImplementedError

    @abstractmethod
    def get(self, booking_id: str) -> BookingRecord:
        """Fetch a booking. Raises BookingNotFoundError if missing."""
        raise NotImplementedError

    @abstractmethod
    def list_bookings(self, status: BookingStatus | None = None) -> list[BookingRecord]:
        """List bookings newest first, optionally filtered by status."""
        raise NotImplementedError

    @abstractmethod
    def update_payment(
        self,
        booking_id: str,
        deposit: Decimal,
        balance: Decimal,
        status: BookingStatus,
    ) -> BookingRecord:
        """Overwrite the payment fields of a booking. Returns the updated record."""
        raise NotImplementedError

    @abstractmethod
    def apply_payment(self, booking_id: str, amount: Decimal) -> BookingRecord:
        """
        Add `amount` to the paid deposit and recompute balance and status.

        The read and the write happen as one step: concurrent payments on the
        same booking must all be counted. Raises BookingNotFoundError if missing.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, booking_id: str) -> None:
        """Delete a booking. Raises BookingNotFoundError if missing."""
        raise NotImplementedError
