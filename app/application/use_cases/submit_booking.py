from __future__ import annotations

import logging
from dataclasses import dataclass, field

from app.application.exceptions import BookingStoreError
from app.application.ports.booking_store import BookingStorePort
from app.application.use_cases.pricing import PricingEngine
from app.application.use_cases.validate_booking import BookingValidator
from app.domain.entities.booking import BookingForm, BookingRecord, NewBooking


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    record: BookingRecord | None = None
    errors: dict[str, str] = field(default_factory=dict)
    error: str | None = None


class SubmitBookingUseCase:
    def __init__(
        self,
        validator: BookingValidator,
        pricing: PricingEngine,
        store: BookingStorePort,
    ) -> None:
        self._validator = validator
        self._pricing = pricing
        self._store = store
        self._logger = logging.getLogger(__name__)

    def execute(self, form: BookingForm) -> SubmissionResult:
        """
        Validate the form, price it, and create the booking in one attempt.
        Nothing reaches pricing or the store unless validation passes.
        """
        validation = self._validator.validate(form)
        if not validation.is_valid or validation.request is None:
            self._logger.info("Booking rejected by validation", extra={"fields": ",".join(sorted(validation.errors))})
            return SubmissionResult(success=False, errors=validation.errors)

        request = validation.request
        amounts = self._pricing.quote(request)
        booking = NewBooking(request=request, amounts=amounts)

        try:
            record = self._store.create(booking)
        except BookingStoreError as e:
            self._logger.error("Error creating booking", extra={"reason": str(e)})
            return SubmissionResult(success=False, error=str(e) or "Failed to create booking")

        self._logger.info(
            "Booking created",
            extra={
                "booking_id": record.booking_id,
                "status": record.status.value,
                "total": str(record.total),
            },
        )
        return SubmissionResult(success=True, record=record)
