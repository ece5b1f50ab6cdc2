from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int
    details: Any = None


class ValidationError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__("VALIDATION_ERROR", message, 400)


class NotFoundError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__("NOT_FOUND", message, 404)


class UpstreamError(ApiError):
    """A provider answered with a non-success status or could not be reached."""

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__("UPSTREAM_FAILURE", message, 502, details)


class UpstreamTimeoutError(ApiError):
    def __init__(self, message: str) -> None:
        super().__init__("UPSTREAM_TIMEOUT", message, 504)


class ClientDisconnectedError(ApiError):
    def __init__(self, message: str = "Client closed request") -> None:
        super().__init__("CLIENT_CLOSED_REQUEST", message, 499)
