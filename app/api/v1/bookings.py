from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.api.v1.schemas import (
    AmountsSchema,
    BookingFormSchema,
    BookingSchema,
    MonthlySummarySchema,
    OccupancySchema,
    PaymentRequestSchema,
    RoomSchema,
    StatusSchema,
    SubmissionResponseSchema,
    ValidationResponseSchema,
)
from app.application.exceptions import BookingNotFoundError, BookingStoreError
from app.application.ports.room_catalog import RoomCatalogPort
from app.application.use_cases.booking_stats import BookingStatsUseCase
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.application.use_cases.pricing import PricingEngine
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.application.use_cases.validate_booking import BookingValidator
from app.application.utils.money import receipt_lines
from app.core.config import settings
from app.domain.entities.booking import BookingStatus
from app.wiring.dependencies import (
    get_booking_stats_use_case,
    get_booking_validator,
    get_manage_bookings_use_case,
    get_pricing_engine,
    get_room_catalog,
    get_submit_booking_use_case,
)

router = APIRouter()


@router.get("/rooms", response_model=list[RoomSchema])
def list_rooms(catalog: RoomCatalogPort = Depends(get_room_catalog)):
    return [RoomSchema.from_entity(room) for room in catalog.list_rooms()]


@router.post("/bookings/validate", response_model=ValidationResponseSchema)
def validate_booking(
    req: BookingFormSchema,
    validator: BookingValidator = Depends(get_booking_validator),
):
    result = validator.validate(req.to_form())
    return ValidationResponseSchema(is_valid=result.is_valid, errors=result.errors)


@router.post("/bookings/quote", response_model=AmountsSchema)
def quote_booking(
    req: BookingFormSchema,
    validator: BookingValidator = Depends(get_booking_validator),
    pricing: PricingEngine = Depends(get_pricing_engine),
):
    result = validator.validate(req.to_form())
    if not result.is_valid or result.request is None:
        raise HTTPException(status_code=422, detail=result.errors)
    return AmountsSchema.from_amounts(pricing.quote(result.request), settings.CURRENCY)


@router.post("/bookings", response_model=SubmissionResponseSchema, status_code=status.HTTP_201_CREATED)
def submit_booking(
    req: BookingFormSchema,
    uc: SubmitBookingUseCase = Depends(get_submit_booking_use_case),
):
    result = uc.execute(req.to_form())
    if result.errors:
        raise HTTPException(status_code=422, detail=result.errors)
    if not result.success or result.record is None:
        raise HTTPException(status_code=502, detail=result.error or "Failed to create booking")

    return SubmissionResponseSchema(
        booking=BookingSchema.from_record(result.record),
        receipt=receipt_lines(result.record.amounts, settings.CURRENCY),
    )


@router.get("/bookings", response_model=list[BookingSchema])
def list_bookings(
    status: StatusSchema | None = None,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
):
    try:
        records = uc.list_bookings(BookingStatus(status.value) if status else None)
    except BookingStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [BookingSchema.from_record(r) for r in records]


@router.get("/bookings/{booking_id}", response_model=BookingSchema)
def get_booking(
    booking_id: str,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
):
    try:
        record = uc.get_booking(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookingStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return BookingSchema.from_record(record)


@router.post("/bookings/{booking_id}/payments", response_model=BookingSchema)
def record_payment(
    booking_id: str,
    req: PaymentRequestSchema,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
):
    try:
        record = uc.record_payment(booking_id, req.amount)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookingStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return BookingSchema.from_record(record)


@router.post("/bookings/{booking_id}/complete", response_model=BookingSchema)
def complete_booking(
    booking_id: str,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
):
    try:
        record = uc.mark_completed(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookingStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return BookingSchema.from_record(record)


@router.delete("/bookings/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    booking_id: str,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
) -> Response:
    try:
        uc.delete_booking(booking_id)
    except BookingNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookingStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/stats/monthly/{month}", response_model=MonthlySummarySchema)
def monthly_summary(
    month: str,
    uc: BookingStatsUseCase = Depends(get_booking_stats_use_case),
):
    try:
        summary = uc.monthly_summary(month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BookingStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return MonthlySummarySchema.from_summary(summary)


@router.get("/stats/occupancy/{day}", response_model=OccupancySchema)
def occupancy(
    day: date,
    uc: BookingStatsUseCase = Depends(get_booking_stats_use_case),
):
    try:
        bookings, rooms = uc.occupancy(day)
    except BookingStoreError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return OccupancySchema(
        day=day,
        bookings=[BookingSchema.from_record(b) for b in bookings],
        rooms=rooms,
    )
