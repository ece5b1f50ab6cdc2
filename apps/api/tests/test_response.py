from api.response import error_response, status_response


def test_error_response_shape() -> None:
    payload = error_response("NOT_FOUND", "missing")
    assert payload == {"error": "missing", "code": "NOT_FOUND"}


def test_error_response_carries_upstream_details() -> None:
    payload = error_response("UPSTREAM_FAILURE", "provider failed", {"status": False, "message": "Invalid key"})
    assert payload["details"] == {"status": False, "message": "Invalid key"}


def test_status_response_shape() -> None:
    assert status_response("ok") == {"status": "ok"}
