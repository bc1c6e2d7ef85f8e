from __future__ import annotations

import logging
import math
from datetime import date, datetime
from decimal import Decimal

from app.application.exceptions import PricingPreconditionError
from app.application.ports.room_catalog import RoomCatalogPort
from app.application.utils.form_parser import parse_amount, parse_moment
from app.domain.entities.booking import BookingAmounts, BookingRequest, PaymentType

SECONDS_PER_DAY = 24 * 60 * 60


class PricingEngine:
    def __init__(self, catalog: RoomCatalogPort, strict_rooms: bool = False) -> None:
        self._catalog = catalog
        self._strict_rooms = strict_rooms
        self._logger = logging.getLogger(__name__)

    def compute_nights(self, check_in: str | date | datetime, check_out: str | date | datetime) -> int:
        """
        Number of nights between two ISO dates, rounded up to whole days.
        Callers must validate the pair first; anything that would yield
        fewer than one night raises PricingPreconditionError.
        """
        start = parse_moment(check_in)
        end = parse_moment(check_out)
        if start is None or end is None:
            raise PricingPreconditionError(f"Unparseable stay dates: {check_in!r} -> {check_out!r}")

        try:
            seconds = (end - start).total_seconds()
        except TypeError as e:
            # naive vs aware datetimes
            raise PricingPreconditionError(str(e)) from e

        nights = math.ceil(seconds / SECONDS_PER_DAY)
        if nights < 1:
            raise PricingPreconditionError(f"Check-out {check_out!r} is not after check-in {check_in!r}")
        return nights

    def compute_room_total(self, room_ids: list[str] | tuple[str, ...], nights: int) -> Decimal:
        if nights < 1:
            raise PricingPreconditionError(f"Night count must be positive, got {nights}")

        nightly = Decimal("0")
        for room_id in room_ids:
            rate = self._catalog.get_rate(room_id)
            if rate is None:
                if self._strict_rooms:
                    raise PricingPreconditionError(f"Unknown room: {room_id}")
                self._logger.warning("Unknown room priced at zero", extra={"room_id": room_id})
                continue
            nightly += rate
        return nightly * nights

    def compute_total(
        self,
        room_ids: list[str] | tuple[str, ...],
        check_in: str | date | datetime,
        check_out: str | date | datetime,
    ) -> Decimal:
        return self.compute_room_total(room_ids, self.compute_nights(check_in, check_out))

    def compute_amounts(
        self,
        total: Decimal,
        payment_type: PaymentType | str,
        deposit_input: str | Decimal | None = None,
    ) -> BookingAmounts:
        """Split a total into deposit paid and remaining balance (never negative)."""
        if PaymentType(payment_type) is PaymentType.full:
            return BookingAmounts(total=total, deposit=total, balance=Decimal("0"))

        if isinstance(deposit_input, Decimal):
            deposit = deposit_input if deposit_input.is_finite() else Decimal("0")
        else:
            deposit = parse_amount(deposit_input) or Decimal("0")
        balance = max(Decimal("0"), total - deposit)
        return BookingAmounts(total=total, deposit=deposit, balance=balance)

    def quote(self, request: BookingRequest) -> BookingAmounts:
        total = self.compute_total(request.rooms, request.check_in, request.check_out)
        return self.compute_amounts(total, request.payment_type, request.deposit_amount)
