"""
Tests for durable booking persistence in the JSON file store.
"""

from __future__ import annotations

import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

import pytest

from app.application.exceptions import BookingNotFoundError, BookingStoreError
from app.domain.entities.booking import (
    BookingAmounts,
    BookingRequest,
    BookingStatus,
    NewBooking,
    PaymentType,
)
from app.infrastructure.store.json_store import JsonBookingStore


def _new_booking(deposit: str = "500") -> NewBooking:
    total = Decimal("1060")
    deposit_d = Decimal(deposit)
    return NewBooking(
        request=BookingRequest(
            guest_name="Aisyah Rahman",
            address="12 Jalan Mawar, Ipoh",
            phone="012-3456789",
            adults=2,
            children=1,
            vehicle_plate="WXY 1234",
            check_in=date(2026, 1, 10),
            check_out=date(2026, 1, 12),
            rooms=("seroja", "dahlia"),
            payment_type=PaymentType.deposit,
            deposit_amount=deposit_d,
        ),
        amounts=BookingAmounts(total=total, deposit=deposit_d, balance=max(Decimal("0"), total - deposit_d)),
    )


def test_json_store_persists_across_instances():
    """A booking written by one store instance is readable by another."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "bookings.json")
        created = JsonBookingStore(path=path).create(_new_booking())

        reloaded = JsonBookingStore(path=path).get(created.booking_id)

        assert reloaded.guest_name == "Aisyah Rahman"
        assert reloaded.vehicle_plate == "WXY 1234"
        assert reloaded.check_in == date(2026, 1, 10)
        assert reloaded.rooms == ("seroja", "dahlia")
        assert reloaded.payment_type is PaymentType.deposit
        assert reloaded.total == Decimal("1060")
        assert reloaded.deposit == Decimal("500")
        assert reloaded.balance == Decimal("560")
        assert reloaded.status is BookingStatus.pending
        assert reloaded.created_at == created.created_at


def test_json_store_lists_newest_first_with_status_filter():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingStore(path=os.path.join(tmpdir, "bookings.json"))
        pending = store.create(_new_booking("500"))
        paid = store.create(_new_booking("1060"))

        assert [b.booking_id for b in store.list_bookings()] == [paid.booking_id, pending.booking_id]
        assert [b.booking_id for b in store.list_bookings(BookingStatus.pending)] == [pending.booking_id]


def test_json_store_updates_payment_fields():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "bookings.json")
        store = JsonBookingStore(path=path)
        booking = store.create(_new_booking())

        store.update_payment(booking.booking_id, Decimal("1060"), Decimal("0"), BookingStatus.completed)

        reloaded = JsonBookingStore(path=path).get(booking.booking_id)
        assert reloaded.deposit == Decimal("1060")
        assert reloaded.balance == 0
        assert reloaded.status is BookingStatus.completed
        assert reloaded.updated_at is not None


def test_json_store_delete_and_not_found():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingStore(path=os.path.join(tmpdir, "bookings.json"))
        booking = store.create(_new_booking())

        store.delete(booking.booking_id)

        with pytest.raises(BookingNotFoundError):
            store.get(booking.booking_id)
        with pytest.raises(BookingNotFoundError):
            store.delete(booking.booking_id)


def test_json_store_missing_file_is_empty():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingStore(path=os.path.join(tmpdir, "nested", "bookings.json"))
        assert store.list_bookings() == []


def test_json_store_corrupted_file_raises_store_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "bookings.json")
        with open(path, "w", encoding="utf-8") as f:
            f.write("{not json")

        with pytest.raises(BookingStoreError):
            JsonBookingStore(path=path).list_bookings()


def test_json_store_counts_concurrent_payments():
    """Every payment lands even when several arrive at once."""
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingStore(path=os.path.join(tmpdir, "bookings.json"))
        booking = store.create(_new_booking(deposit="500"))

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda _: store.apply_payment(booking.booking_id, Decimal("100")), range(4)))

        settled = JsonBookingStore(path=os.path.join(tmpdir, "bookings.json")).get(booking.booking_id)
        assert settled.deposit == Decimal("900")
        assert settled.balance == Decimal("160")
        assert settled.status is BookingStatus.pending
        assert settled.updated_at is not None


def test_json_store_apply_payment_clamps_balance_and_completes():
    with tempfile.TemporaryDirectory() as tmpdir:
        store = JsonBookingStore(path=os.path.join(tmpdir, "bookings.json"))
        booking = store.create(_new_booking(deposit="500"))

        updated = store.apply_payment(booking.booking_id, Decimal("700"))

        assert updated.deposit == Decimal("1200")
        assert updated.balance == 0
        assert updated.status is BookingStatus.completed
        with pytest.raises(BookingNotFoundError):
            store.apply_payment("missing", Decimal("10"))
