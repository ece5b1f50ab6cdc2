from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import httpx
from geo_engine.models import GeoPoint

from api.clients._upstream import response_body
from api.errors import NotFoundError, UpstreamError, UpstreamTimeoutError, ValidationError

logger = logging.getLogger(__name__)


class NominatimGeocodingClient:
    def __init__(
        self,
        base_url: str,
        user_agent: str,
        timeout_seconds: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def geocode(self, address: str) -> GeoPoint:
        if not address or not address.strip():
            raise ValidationError("Address is required")

        params: dict[str, Any] = {"q": address, "format": "json", "limit": 1}
        headers = {"User-Agent": self._user_agent}
        try:
            factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
            async with factory() as client:
                response = await client.get(f"{self._base_url}/search", params=params, headers=headers)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("geocode_timeout", extra={"component": "geocoder", "timeout_seconds": self._timeout_seconds})
            raise UpstreamTimeoutError("Geocoding timed out") from exc
        except httpx.HTTPStatusError as exc:
            body = response_body(exc.response)
            logger.error(
                "geocode_http_error",
                extra={"component": "geocoder", "status_code": exc.response.status_code},
            )
            raise UpstreamError(f"Geocoding failed: {_provider_message(body)}", details=body) from exc
        except httpx.HTTPError as exc:
            logger.error("geocode_unreachable", extra={"component": "geocoder", "error": str(exc)})
            raise UpstreamError(f"Geocoding failed: {exc}") from exc

        results = response_body(response)
        result_count = len(results) if isinstance(results, list) else 0
        logger.debug("geocode_response", extra={"component": "geocoder", "result_count": result_count})
        if not isinstance(results, list) or not results:
            raise NotFoundError("Address not found or could not be geocoded.")
        try:
            return GeoPoint(lat=float(results[0]["lat"]), lon=float(results[0]["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamError("Geocoding failed: malformed provider response", details=results[0]) from exc


def _provider_message(body: Any) -> str:
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return "Server error"
