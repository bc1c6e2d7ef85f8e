from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


class PaymentType(str, Enum):
    deposit = "deposit"
    full = "full"


class BookingStatus(str, Enum):
    pending = "pending"
    completed = "completed"

    @classmethod
    def for_balance(cls, balance: Decimal) -> "BookingStatus":
        return cls.pending if balance > 0 else cls.completed


@dataclass(frozen=True)
class BookingForm:
    """Booking form fields exactly as typed, before any parsing."""

    name: str = ""
    address: str = ""
    phone: str = ""
    adults: str = "1"
    children: str = "0"
    vehicle_plate: str = ""
    check_in: str = ""
    check_out: str = ""
    rooms: list[str] = field(default_factory=list)
    payment_type: str = ""
    deposit_amount: str = ""


@dataclass(frozen=True)
class BookingRequest:
    guest_name: str
    address: str
    phone: str
    adults: int
    children: int
    vehicle_plate: str | None
    check_in: date
    check_out: date
    rooms: tuple[str, ...]
    payment_type: PaymentType
    deposit_amount: Decimal | None = None


@dataclass(frozen=True)
class BookingAmounts:
    total: Decimal
    deposit: Decimal
    balance: Decimal

    @property
    def status(self) -> BookingStatus:
        return BookingStatus.for_balance(self.balance)


@dataclass(frozen=True)
class NewBooking:
    """Everything the store needs to create a booking document."""

    request: BookingRequest
    amounts: BookingAmounts

    @property
    def status(self) -> BookingStatus:
        return self.amounts.status


@dataclass(frozen=True)
class BookingRecord:
    booking_id: str
    created_at: datetime
    guest_name: str
    address: str
    phone: str
    adults: int
    children: int
    vehicle_plate: str | None
    check_in: date
    check_out: date
    rooms: tuple[str, ...]
    payment_type: PaymentType
    total: Decimal
    deposit: Decimal
    balance: Decimal
    status: BookingStatus
    updated_at: datetime | None = None

    @property
    def amounts(self) -> BookingAmounts:
        return BookingAmounts(total=self.total, deposit=self.deposit, balance=self.balance)

    def occupies(self, night: date) -> bool:
        return self.check_in <= night < self.check_out

    def with_payment(self, amount: Decimal) -> BookingAmounts:
        """Amounts after a further payment; balance clamps at zero."""
        deposit = self.deposit + amount
        balance = max(Decimal("0"), self.total - deposit)
        return BookingAmounts(total=self.total, deposit=deposit, balance=balance)
