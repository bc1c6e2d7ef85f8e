from __future__ import annotations

from decimal import Decimal

from app.application.ports.room_catalog import RoomCatalogPort
from app.application.use_cases.pricing import PricingEngine
from app.application.utils.form_parser import (
    dedupe_rooms,
    is_valid_phone,
    parse_amount,
    parse_count,
    parse_iso_date,
)
from app.application.utils.money import format_money
from app.domain.entities.booking import BookingForm, BookingRequest, PaymentType
from app.domain.entities.validation import ValidationResult


class BookingValidator:
    """
    Parse-then-validate pipeline for the booking form.

    Raw strings are parsed into typed values first; parse failures become
    field errors, and ordering/positivity rules only run on values that
    parsed. Every rule runs, so the error map lists all problems at once.
    Validation failures are returned as data, never raised.
    """

    def __init__(
        self,
        catalog: RoomCatalogPort | None = None,
        allow_overpayment: bool = True,
        currency: str = "RM",
    ) -> None:
        self._catalog = catalog
        self._allow_overpayment = allow_overpayment
        self._currency = currency

    def validate(self, form: BookingForm) -> ValidationResult:
        errors: dict[str, str] = {}

        name = form.name.strip()
        if not name:
            errors["name"] = "Name is required"

        address = form.address.strip()
        if not address:
            errors["address"] = "Address is required"

        phone = form.phone.strip()
        if not phone:
            errors["phone"] = "Phone number is required"
        elif not is_valid_phone(phone):
            errors["phone"] = "Please enter a valid phone number"

        adults = parse_count(form.adults)
        if adults is None or adults < 1:
            errors["adults"] = "At least 1 adult is required"

        children = parse_count(form.children) if form.children.strip() else 0
        if children is None:
            errors["children"] = "Number of children must be a whole number"
        elif children < 0:
            errors["children"] = "Number of children cannot be negative"

        check_in = parse_iso_date(form.check_in)
        if not form.check_in.strip():
            errors["checkIn"] = "Check-in date is required"
        elif check_in is None:
            errors["checkIn"] = "Check-in date must be a valid date (YYYY-MM-DD)"

        check_out = parse_iso_date(form.check_out)
        if not form.check_out.strip():
            errors["checkOut"] = "Check-out date is required"
        elif check_out is None:
            errors["checkOut"] = "Check-out date must be a valid date (YYYY-MM-DD)"
        elif check_in is not None and check_out <= check_in:
            errors["checkOut"] = "Check-out must be after check-in date"

        rooms = dedupe_rooms(form.rooms)
        if not rooms:
            errors["rooms"] = "Please select at least one room"
        elif self._catalog is not None:
            unknown = [room_id for room_id in rooms if self._catalog.get_room(room_id) is None]
            if unknown:
                errors["rooms"] = f"Unknown room: {', '.join(unknown)}"

        payment_type = self._parse_payment_type(form.payment_type)
        if payment_type is None:
            errors["paymentType"] = "Please select a payment type"

        deposit_amount: Decimal | None = None
        if payment_type is PaymentType.deposit:
            deposit_amount = parse_amount(form.deposit_amount)
            if not form.deposit_amount.strip():
                errors["depositAmount"] = "Deposit amount is required"
            elif deposit_amount is None or deposit_amount <= 0:
                errors["depositAmount"] = "Please enter a valid amount"
            elif not self._allow_overpayment and self._catalog is not None:
                if "checkIn" not in errors and "checkOut" not in errors and "rooms" not in errors:
                    total = PricingEngine(self._catalog).compute_total(rooms, check_in, check_out)
                    if deposit_amount > total:
                        errors["depositAmount"] = (
                            f"Deposit cannot exceed the total of {format_money(total, self._currency)}"
                        )

        if errors:
            return ValidationResult(errors=errors)

        return ValidationResult(
            request=BookingRequest(
                guest_name=name,
                address=address,
                phone=phone,
                adults=adults,
                children=children,
                vehicle_plate=form.vehicle_plate.strip() or None,
                check_in=check_in,
                check_out=check_out,
                rooms=rooms,
                payment_type=payment_type,
                deposit_amount=deposit_amount,
            )
        )

    def _parse_payment_type(self, value: str) -> PaymentType | None:
        try:
            return PaymentType((value or "").strip().lower())
        except ValueError:
            return None
