from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from app.application.utils.money import receipt_lines
from app.domain.entities.booking import BookingAmounts, BookingForm, BookingRecord
from app.domain.entities.room_type import RoomType
from app.domain.entities.stats import MonthlySummary


class PaymentTypeSchema(str, Enum):
    deposit = "deposit"
    full = "full"


class StatusSchema(str, Enum):
    pending = "pending"
    completed = "completed"


class RoomSchema(BaseModel):
    room_id: str
    display_name: str
    description: str
    nightly_rate: float

    @classmethod
    def from_entity(cls, room: RoomType) -> "RoomSchema":
        return cls(
            room_id=room.room_id,
            display_name=room.display_name,
            description=room.description,
            nightly_rate=float(room.nightly_rate),
        )


class BookingFormSchema(BaseModel):
    """Raw form input. Values stay loosely typed; the validator does the parsing."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    address: str = ""
    phone: str = ""
    adults: str | int = "1"
    children: str | int = "0"
    vehicle_plate: str = Field("", alias="vehiclePlate")
    check_in: str = Field("", alias="checkIn")
    check_out: str = Field("", alias="checkOut")
    rooms: list[str] = Field(default_factory=list)
    payment_type: str = Field("", alias="paymentType")
    deposit_amount: str | float | None = Field(None, alias="depositAmount")

    def to_form(self) -> BookingForm:
        return BookingForm(
            name=self.name,
            address=self.address,
            phone=self.phone,
            adults=str(self.adults),
            children=str(self.children),
            vehicle_plate=self.vehicle_plate,
            check_in=self.check_in,
            check_out=self.check_out,
            rooms=list(self.rooms),
            payment_type=self.payment_type,
            deposit_amount="" if self.deposit_amount is None else str(self.deposit_amount),
        )


class ValidationResponseSchema(BaseModel):
    is_valid: bool
    errors: dict[str, str] = Field(default_factory=dict)


class AmountsSchema(BaseModel):
    total: float
    deposit: float
    balance: float
    status: StatusSchema
    receipt: list[str] = Field(default_factory=list)

    @classmethod
    def from_amounts(cls, amounts: BookingAmounts, currency: str = "RM") -> "AmountsSchema":
        return cls(
            total=float(amounts.total),
            deposit=float(amounts.deposit),
            balance=float(amounts.balance),
            status=StatusSchema(amounts.status.value),
            receipt=receipt_lines(amounts, currency),
        )


class BookingSchema(BaseModel):
    booking_id: str
    created_at: datetime
    updated_at: datetime | None = None
    guest_name: str
    address: str
    phone: str
    adults: int
    children: int
    vehicle_plate: str | None = None
    check_in: date
    check_out: date
    rooms: list[str]
    payment_type: PaymentTypeSchema
    total: float
    deposit: float
    balance: float
    status: StatusSchema

    @classmethod
    def from_record(cls, record: BookingRecord) -> "BookingSchema":
        return cls(
            booking_id=record.booking_id,
            created_at=record.created_at,
            updated_at=record.updated_at,
            guest_name=record.guest_name,
            address=record.address,
            phone=record.phone,
            adults=record.adults,
            children=record.children,
            vehicle_plate=record.vehicle_plate,
            check_in=record.check_in,
            check_out=record.check_out,
            rooms=list(record.rooms),
            payment_type=PaymentTypeSchema(record.payment_type.value),
            total=float(record.total),
            deposit=float(record.deposit),
            balance=float(record.balance),
            status=StatusSchema(record.status.value),
        )


class SubmissionResponseSchema(BaseModel):
    booking: BookingSchema
    receipt: list[str]


class PaymentRequestSchema(BaseModel):
    amount: Decimal = Field(gt=0)


class MonthlySummarySchema(BaseModel):
    month: str
    total_bookings: int
    completed: int
    pending: int
    collected: float
    outstanding: float

    @classmethod
    def from_summary(cls, summary: MonthlySummary) -> "MonthlySummarySchema":
        return cls(
            month=summary.month,
            total_bookings=summary.total_bookings,
            completed=summary.completed,
            pending=summary.pending,
            collected=float(summary.collected),
            outstanding=float(summary.outstanding),
        )


class OccupancySchema(BaseModel):
    day: date
    bookings: list[BookingSchema]
    rooms: dict[str, str]
