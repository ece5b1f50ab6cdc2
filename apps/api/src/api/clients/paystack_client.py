from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import httpx

from api.clients._upstream import response_body
from api.errors import UpstreamError, UpstreamTimeoutError

logger = logging.getLogger(__name__)


class PaystackClient:
    def __init__(
        self,
        base_url: str,
        secret_key: str,
        timeout_seconds: float = 10.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._secret_key = secret_key
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def initialize_transaction(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/transaction/initialize", operation="initialize", json=payload)

    async def verify_transaction(self, reference: str) -> dict[str, Any]:
        path = f"/transaction/verify/{quote(reference, safe='')}"
        return await self._request("GET", path, operation="verify")

    async def _request(self, method: str, path: str, operation: str, **kwargs: Any) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {self._secret_key}"}
        try:
            factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
            async with factory() as client:
                response = await client.request(method, f"{self._base_url}{path}", headers=headers, **kwargs)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            logger.error("paystack_timeout", extra={"component": "paystack", "operation": operation})
            raise UpstreamTimeoutError(f"Payment provider {operation} timed out") from exc
        except httpx.HTTPStatusError as exc:
            body = response_body(exc.response)
            logger.error(
                "paystack_http_error",
                extra={"component": "paystack", "operation": operation, "status_code": exc.response.status_code},
            )
            raise UpstreamError(f"Payment provider {operation} failed", details=body) from exc
        except httpx.HTTPError as exc:
            logger.error("paystack_unreachable", extra={"component": "paystack", "operation": operation})
            raise UpstreamError(f"Payment provider {operation} failed", details=str(exc)) from exc

        body = response_body(response)
        if not isinstance(body, dict):
            raise UpstreamError(f"Invalid payment provider {operation} response", details=body)
        return body
