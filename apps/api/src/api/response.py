from typing import Any


def error_response(code: str, message: str, details: Any = None) -> dict[str, Any]:
    payload: dict[str, Any] = {"error": message, "code": code}
    if details is not None:
        payload["details"] = details
    return payload


def status_response(status: str) -> dict[str, Any]:
    return {"status": status}
