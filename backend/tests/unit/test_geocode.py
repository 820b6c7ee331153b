"""Tests for eventra.core.geocode module."""

import httpx
import pytest

from eventra.core.config import Settings
from eventra.core.geocode import Geocoder, GeoPoint

SEARCH_URL = "https://nominatim.test/search"


def make_geocoder(handler, enabled: bool = True) -> Geocoder:
    return Geocoder(
        url=SEARCH_URL,
        user_agent="Eventra-Test/1.0",
        enabled=enabled,
        transport=httpx.MockTransport(handler),
    )


class TestGeocoder:
    """Tests for Geocoder.geocode()."""

    @pytest.mark.asyncio
    async def test_returns_first_match(self):
        """geocode() parses lat/lon of the first search result."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json=[{"lat": "36.19", "lon": "44.01"}])

        point = await make_geocoder(handler).geocode("Erbil Citadel")

        assert point == GeoPoint(lat=36.19, lon=44.01)
        params = requests[0].url.params
        assert params["q"] == "Erbil Citadel"
        assert params["format"] == "json"
        assert params["limit"] == "1"
        assert requests[0].headers["User-Agent"] == "Eventra-Test/1.0"

    @pytest.mark.asyncio
    async def test_no_results(self):
        """geocode() returns None when nothing matches."""
        point = await make_geocoder(lambda r: httpx.Response(200, json=[])).geocode(
            "nowhere"
        )
        assert point is None

    @pytest.mark.asyncio
    async def test_http_error_returns_none(self):
        """geocode() swallows upstream errors."""
        point = await make_geocoder(lambda r: httpx.Response(503)).geocode("Basra")
        assert point is None

    @pytest.mark.asyncio
    async def test_malformed_coordinates(self):
        """geocode() returns None for unparsable coordinates."""
        geocoder = make_geocoder(
            lambda r: httpx.Response(200, json=[{"lat": "north", "lon": "44"}])
        )
        assert await geocoder.geocode("Basra") is None

    @pytest.mark.asyncio
    async def test_network_error(self):
        """geocode() returns None when the service is unreachable."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        assert await make_geocoder(handler).geocode("Najaf") is None

    @pytest.mark.asyncio
    async def test_disabled_or_blank(self):
        """geocode() makes no request when disabled or given a blank address."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=[])

        assert await make_geocoder(handler, enabled=False).geocode("Erbil") is None
        assert await make_geocoder(handler).geocode("   ") is None
        assert calls == []

    def test_from_settings(self):
        """from_settings() copies the geocoding configuration."""
        geocoder = Geocoder.from_settings(
            Settings(GEOCODING_URL=SEARCH_URL, GEOCODING_ENABLED=False)
        )
        assert geocoder.url == SEARCH_URL
        assert geocoder.enabled is False
