from functools import lru_cache
import logging

from app.core.config import settings
from app.application.ports.key_value_store import KeyValueStorePort
from app.application.ports.schedule_source import ScheduleSourcePort
from app.application.use_cases.booking_ledger import BookingLedger
from app.application.use_cases.load_schedule import ScheduleService
from app.infrastructure.schedule.http_schedule_source import HttpScheduleSource
from app.infrastructure.schedule.static_schedule_source import StaticScheduleSource
from app.infrastructure.store.json_store import JsonKeyValueStore
from app.infrastructure.store.memory_store import MemoryKeyValueStore


_key_value_store: KeyValueStorePort | None = None


def get_key_value_store() -> KeyValueStorePort:
    global _key_value_store
    if _key_value_store is None:
        if settings.STORE_PROVIDER.lower() == "json":
            _key_value_store = JsonKeyValueStore(data_dir=settings.BOOKINGS_DATA_DIR)
        else:
            _key_value_store = MemoryKeyValueStore()
    return _key_value_store


def get_schedule_source() -> ScheduleSourcePort:
    logger = logging.getLogger(__name__)
    if not settings.SCHEDULE_API_BASE_URL:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using StaticScheduleSource (SCHEDULE_API_BASE_URL missing, ENV=dev/local)")
            return StaticScheduleSource()
        raise ValueError("SCHEDULE_API_BASE_URL is required outside dev/local.")

    logger.info("Using HttpScheduleSource", extra={"url": settings.SCHEDULE_API_BASE_URL})
    return HttpScheduleSource(
        base_url=settings.SCHEDULE_API_BASE_URL,
        username=settings.SCHEDULE_API_USERNAME,
        password=settings.SCHEDULE_API_PASSWORD,
        timeout_seconds=settings.SCHEDULE_API_TIMEOUT_SECONDS,
    )


@lru_cache
def get_schedule_service() -> ScheduleService:
    return ScheduleService(source=get_schedule_source())


def get_booking_ledger() -> BookingLedger:
    return BookingLedger(store=get_key_value_store())
