from __future__ import annotations

from typing import Any

import httpx


def response_body(response: httpx.Response) -> Any:
    """Upstream body as JSON when possible, otherwise as text."""
    try:
        return response.json()
    except ValueError:
        return response.text
