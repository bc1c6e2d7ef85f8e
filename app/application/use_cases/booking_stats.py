from __future__ import annotations

from datetime import date
from decimal import Decimal

from app.application.ports.booking_store import BookingStorePort
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.domain.entities.stats import MonthlySummary


class BookingStatsUseCase:
    """Read-only summaries for the dashboard and occupancy calendar."""

    def __init__(self, store: BookingStorePort) -> None:
        self._store = store

    def monthly_summary(self, month: str) -> MonthlySummary:
        """Summarize bookings checking in during `month` (YYYY-MM)."""
        year_str, _, month_str = month.partition("-")
        if not (year_str.isdigit() and month_str.isdigit() and 1 <= int(month_str) <= 12):
            raise ValueError(f"Month must be formatted YYYY-MM, got {month!r}")
        year, month_num = int(year_str), int(month_str)

        bookings = [
            b for b in self._store.list_bookings()
            if b.check_in.year == year and b.check_in.month == month_num
        ]
        completed = sum(1 for b in bookings if b.status is BookingStatus.completed)

        return MonthlySummary(
            month=f"{year:04d}-{month_num:02d}",
            total_bookings=len(bookings),
            completed=completed,
            pending=len(bookings) - completed,
            collected=sum((b.deposit for b in bookings), Decimal("0")),
            outstanding=sum((b.balance for b in bookings), Decimal("0")),
        )

    def bookings_on(self, night: date) -> list[BookingRecord]:
        return [b for b in self._store.list_bookings() if b.occupies(night)]

    def room_occupancy(self, night: date) -> dict[str, str]:
        """Room id -> booking id for every room taken on that night."""
        return _rooms_taken(self.bookings_on(night))

    def occupancy(self, night: date) -> tuple[list[BookingRecord], dict[str, str]]:
        """Bookings staying that night and the rooms they take, from one listing."""
        bookings = self.bookings_on(night)
        return bookings, _rooms_taken(bookings)


def _rooms_taken(bookings: list[BookingRecord]) -> dict[str, str]:
    rooms: dict[str, str] = {}
    for booking in bookings:
        for room_id in booking.rooms:
            rooms.setdefault(room_id, booking.booking_id)
    return rooms
