from slowapi import Limiter
from slowapi.util import get_remote_address

from eventra.core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.DEFAULT_RATE_LIMIT] if settings.ENVIRONMENT != "local" else [],
    enabled=settings.ENVIRONMENT != "local",
)

EVENT_WRITE_RATE_LIMIT = settings.EVENT_WRITE_RATE_LIMIT

EVENT_IMPORT_RATE_LIMIT = settings.EVENT_IMPORT_RATE_LIMIT

BACKFILL_RATE_LIMIT = settings.BACKFILL_RATE_LIMIT
