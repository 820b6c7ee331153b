"""Outbound HTTP for upstream services (translation provider, geocoder).

Failures surface as application errors: a request that exceeds its budget
raises TimeoutError, anything else (connection failure, non-2xx status,
unparseable body) raises ExternalServiceError. Request URLs are never logged
because provider URLs can carry API keys.
"""

import asyncio
import builtins
from typing import Any

import httpx

from eventra.core.exceptions import ExternalServiceError, TimeoutError
from eventra.core.logging import get_logger

logger = get_logger(__name__)

CLIENT_TIMEOUT = httpx.Timeout(30.0, connect=5.0, pool=5.0)


def create_http_client(
    transport: httpx.AsyncBaseTransport | None = None, **kwargs: Any
) -> httpx.AsyncClient:
    """AsyncClient with the shared timeout; pass ``transport`` to stub it out."""
    kwargs.setdefault("timeout", CLIENT_TIMEOUT)
    return httpx.AsyncClient(transport=transport, follow_redirects=True, **kwargs)


async def fetch_with_timeout(
    url: str,
    method: str = "GET",
    timeout_seconds: float = 30.0,
    service_name: str = "external service",
    transport: httpx.AsyncBaseTransport | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request, bounded by ``timeout_seconds`` end to end."""
    try:
        async with create_http_client(transport) as client:
            request = client.request(method, url, **kwargs)
            return await asyncio.wait_for(request, timeout=timeout_seconds)
    except (builtins.TimeoutError, httpx.TimeoutException) as e:
        logger.warning("http_timeout", service=service_name, timeout=timeout_seconds)
        raise TimeoutError(service_name, timeout_seconds) from e
    except httpx.RequestError as e:
        logger.warning("http_request_failed", service=service_name, error=str(e))
        raise ExternalServiceError(service_name, str(e)) from e


async def fetch_json(
    url: str,
    method: str = "GET",
    timeout_seconds: float = 30.0,
    service_name: str = "external service",
    transport: httpx.AsyncBaseTransport | None = None,
    **kwargs: Any,
) -> Any:
    """fetch_with_timeout(), then require a 2xx status and a JSON body."""
    response = await fetch_with_timeout(
        url, method, timeout_seconds, service_name, transport, **kwargs
    )
    if response.is_error:
        logger.warning(
            "http_status_error", service=service_name, status=response.status_code
        )
        raise ExternalServiceError(service_name, f"HTTP {response.status_code}")
    try:
        return response.json()
    except ValueError as e:
        logger.warning("http_invalid_json", service=service_name)
        raise ExternalServiceError(service_name, "Invalid JSON response") from e
