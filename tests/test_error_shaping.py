import pytest

from app.api.middleware.error_shaping import shape_enumeration_error
from app.core.enumeration.errors import (
    EnumerationError,
    InvalidArgument,
    MalformedKey,
    RequestWindowExceeded,
    SearchBackendError,
)


@pytest.mark.parametrize(
    "exc, status, code",
    [
        (InvalidArgument("invalid order_by parameter: x"), 400, "invalid_argument"),
        (RequestWindowExceeded(offset=10000, hits_total=20000), 422, "request_window_exceeded"),
        (MalformedKey(key="ns/key", delimiter="="), 502, "malformed_key"),
        (SearchBackendError("connection refused"), 502, "search_backend_error"),
        (EnumerationError("other"), 500, "enumeration_error"),
    ],
)
def test_status_and_code(exc, status, code):
    got_status, detail = shape_enumeration_error(exc)
    assert got_status == status
    assert detail["code"] == code
    assert detail["message"] == str(exc)


def test_window_error_carries_counts():
    _, detail = shape_enumeration_error(RequestWindowExceeded(offset=10000, hits_total=20000))
    assert detail["offset"] == 10000
    assert detail["hits_total"] == 20000
