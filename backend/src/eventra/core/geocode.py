"""Best-effort geocoding of free-text event locations.

Uses a Nominatim-compatible search endpoint. Lookups never raise: any
failure is logged and yields None, so event creation proceeds without
coordinates.
"""

from dataclasses import dataclass
import math

import httpx

from eventra.core.config import Settings
from eventra.core.exceptions import AppException
from eventra.core.http import fetch_json
from eventra.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float


class Geocoder:
    """Resolve an address to coordinates with a Nominatim search call."""

    def __init__(
        self,
        url: str,
        user_agent: str,
        timeout_seconds: float = 10.0,
        enabled: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds
        self.enabled = enabled
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Geocoder":
        return cls(
            url=settings.GEOCODING_URL,
            user_agent=settings.GEOCODING_USER_AGENT,
            timeout_seconds=settings.GEOCODING_TIMEOUT_SECONDS,
            enabled=settings.GEOCODING_ENABLED,
            transport=transport,
        )

    async def geocode(self, address: str) -> GeoPoint | None:
        if not self.enabled or not address or not address.strip():
            return None

        try:
            data = await fetch_json(
                self.url,
                timeout_seconds=self.timeout_seconds,
                service_name="geocoder",
                transport=self.transport,
                params={"format": "json", "q": address, "limit": "1"},
                headers={"Accept": "application/json", "User-Agent": self.user_agent},
            )
        except AppException as e:
            logger.warning("geocode_failed", error_code=e.error_code, error=e.message)
            return None

        if not isinstance(data, list) or not data or not isinstance(data[0], dict):
            logger.info("geocode_no_match")
            return None

        try:
            lat = float(data[0]["lat"])
            lon = float(data[0]["lon"])
        except (KeyError, TypeError, ValueError):
            logger.warning("geocode_malformed_response")
            return None

        if not (math.isfinite(lat) and math.isfinite(lon)):
            return None
        return GeoPoint(lat=lat, lon=lon)
