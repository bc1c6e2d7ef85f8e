from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from app.application.exceptions import BookingStoreError
from app.domain.entities.booking import BookingRecord, BookingStatus, NewBooking, PaymentType


def serialize_booking(booking: NewBooking) -> dict[str, Any]:
    """Flatten a new booking into the canonical document fields."""
    request = booking.request
    amounts = booking.amounts
    return {
        "guest_name": request.guest_name,
        "address": request.address,
        "phone": request.phone,
        "adults": request.adults,
        "children": request.children,
        "vehicle_plate": request.vehicle_plate,
        "check_in": request.check_in.isoformat(),
        "check_out": request.check_out.isoformat(),
        "rooms": list(request.rooms),
        "payment_type": request.payment_type.value,
        "total": float(amounts.total),
        "deposit": float(amounts.deposit),
        "balance": float(amounts.balance),
        "status": booking.status.value,
    }


def serialize_payment(deposit: Decimal, balance: Decimal, status: BookingStatus) -> dict[str, Any]:
    return {
        "deposit": float(deposit),
        "balance": float(balance),
        "status": status.value,
    }


def deserialize_booking(booking_id: str, created_at: str, data: dict[str, Any], updated_at: str | None = None) -> BookingRecord:
    """Build a BookingRecord from stored document fields."""
    try:
        return BookingRecord(
            booking_id=booking_id,
            created_at=_parse_timestamp(created_at),
            updated_at=_parse_timestamp(updated_at) if updated_at else None,
            guest_name=data["guest_name"],
            address=data.get("address") or "",
            phone=data["phone"],
            adults=int(data["adults"]),
            children=int(data.get("children") or 0),
            vehicle_plate=data.get("vehicle_plate") or None,
            check_in=date.fromisoformat(data["check_in"]),
            check_out=date.fromisoformat(data["check_out"]),
            rooms=tuple(data.get("rooms") or ()),
            payment_type=PaymentType(data["payment_type"]),
            total=_to_decimal(data["total"]),
            deposit=_to_decimal(data["deposit"]),
            balance=_to_decimal(data["balance"]),
            status=BookingStatus(data["status"]),
        )
    except (KeyError, TypeError, ValueError, InvalidOperation) as e:
        raise BookingStoreError(f"Malformed booking document {booking_id}: {e}") from e


def _to_decimal(value: Any) -> Decimal:
    return Decimal(str(value))


def _parse_timestamp(value: str) -> datetime:
    # Appwrite returns "...+00:00"; older payloads may end in "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
