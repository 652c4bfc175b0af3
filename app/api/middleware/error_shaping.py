from __future__ import annotations

import logging
import traceback
from typing import Any, Callable, Dict, Tuple

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from app.core.enumeration.errors import (
    EnumerationError,
    InvalidArgument,
    MalformedKey,
    RequestWindowExceeded,
    SearchBackendError,
)

log = logging.getLogger("hostenum.errors")

# (error type, status, code); first match wins.
_ERROR_STATUS = (
    (InvalidArgument, 400, "invalid_argument"),
    (RequestWindowExceeded, 422, "request_window_exceeded"),
    (MalformedKey, 502, "malformed_key"),
    (SearchBackendError, 502, "search_backend_error"),
)


def _request_id(request: Request):
    return getattr(request.state, "request_id", None) or request.headers.get("x-request-id")


def shape_enumeration_error(exc: EnumerationError) -> Tuple[int, Dict[str, Any]]:
    status, code = 500, "enumeration_error"
    for exc_type, exc_status, exc_code in _ERROR_STATUS:
        if isinstance(exc, exc_type):
            status, code = exc_status, exc_code
            break

    detail: Dict[str, Any] = {"code": code, "message": str(exc)}
    if isinstance(exc, RequestWindowExceeded):
        detail["offset"] = exc.offset
        detail["hits_total"] = exc.hits_total
    return status, detail


async def enumeration_error_handler(request: Request, exc: EnumerationError) -> JSONResponse:
    status, detail = shape_enumeration_error(exc)
    if status >= 500:
        log.warning("Enumeration failed: %s rid=%s path=%s", detail["code"], _request_id(request), request.url.path)
    payload: Dict[str, Any] = {"detail": detail}
    rid = _request_id(request)
    if rid:
        payload["request_id"] = rid
    return JSONResponse(status_code=status, content=payload)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(EnumerationError, enumeration_error_handler)


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """Turn an exception that escaped the enumeration handlers into a bare 500.

    The traceback stays in the ``hostenum.errors`` log; the client only sees
    the request id it can quote back.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = _request_id(request)
            log.error(
                "enumeration request crashed path=%s rid=%s error=%r\n%s",
                request.url.path,
                rid,
                e,
                traceback.format_exc(),
            )
            payload = {"detail": "Internal Server Error"}
            if rid:
                payload["request_id"] = rid
            return JSONResponse(status_code=500, content=payload)
