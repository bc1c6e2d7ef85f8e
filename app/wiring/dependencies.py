from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.booking_store import BookingStorePort
from app.application.ports.room_catalog import RoomCatalogPort
from app.application.use_cases.booking_stats import BookingStatsUseCase
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.application.use_cases.pricing import PricingEngine
from app.application.use_cases.submit_booking import SubmitBookingUseCase
from app.application.use_cases.validate_booking import BookingValidator
from app.infrastructure.appwrite.appwrite_client import AppwriteDatabaseClient
from app.infrastructure.appwrite.appwrite_store import AppwriteBookingStore
from app.infrastructure.catalog.room_catalog_store import RoomCatalogStore
from app.infrastructure.store.json_store import JsonBookingStore
from app.infrastructure.store.memory_store import MemoryBookingStore


_booking_store: BookingStorePort | None = None


@lru_cache
def get_room_catalog() -> RoomCatalogPort:
    return RoomCatalogStore()


def get_booking_store() -> BookingStorePort:
    global _booking_store
    if _booking_store is None:
        _booking_store = _build_booking_store()
    return _booking_store


def _build_booking_store() -> BookingStorePort:
    logger = logging.getLogger(__name__)
    provider = settings.STORE_PROVIDER.lower()
    logger.info("STORE_PROVIDER=%s ENV=%s", provider, settings.ENV)

    if provider == "appwrite":
        required = {
            "APPWRITE_PROJECT_ID": settings.APPWRITE_PROJECT_ID,
            "APPWRITE_API_KEY": settings.APPWRITE_API_KEY,
            "APPWRITE_DATABASE_ID": settings.APPWRITE_DATABASE_ID,
            "APPWRITE_BOOKINGS_COLLECTION_ID": settings.APPWRITE_BOOKINGS_COLLECTION_ID,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ValueError(f"Missing Appwrite settings: {', '.join(missing)}")
        client = AppwriteDatabaseClient(
            endpoint=settings.APPWRITE_ENDPOINT,
            project_id=settings.APPWRITE_PROJECT_ID,
            api_key=settings.APPWRITE_API_KEY,
            database_id=settings.APPWRITE_DATABASE_ID,
            collection_id=settings.APPWRITE_BOOKINGS_COLLECTION_ID,
            timeout=settings.APPWRITE_TIMEOUT_SECONDS,
        )
        return AppwriteBookingStore(client=client)

    if provider == "json":
        return JsonBookingStore(path=settings.JSON_STORE_PATH)

    if provider != "memory":
        raise ValueError(f"Unknown STORE_PROVIDER: {settings.STORE_PROVIDER}")
    return MemoryBookingStore()


def get_pricing_engine() -> PricingEngine:
    return PricingEngine(catalog=get_room_catalog())


def get_booking_validator() -> BookingValidator:
    return BookingValidator(
        catalog=get_room_catalog() if settings.ROOMS_STRICT else None,
        allow_overpayment=settings.ALLOW_OVERPAYMENT,
        currency=settings.CURRENCY,
    )


def get_submit_booking_use_case() -> SubmitBookingUseCase:
    return SubmitBookingUseCase(
        validator=get_booking_validator(),
        pricing=get_pricing_engine(),
        store=get_booking_store(),
    )


def get_manage_bookings_use_case() -> ManageBookingsUseCase:
    return ManageBookingsUseCase(store=get_booking_store())


def get_booking_stats_use_case() -> BookingStatsUseCase:
    return BookingStatsUseCase(store=get_booking_store())
