from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from app.api.observability.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    normalize_path,
)

log = logging.getLogger("hostenum.request")

ACCOUNT_HEADER = "x-account"
SCOPED_PREFIX = "/api/v1/hosts/"


def _json_log(event: str, **fields):
    # Structured log in a single line; filters and bodies are never logged.
    msg = {"event": event, **fields}
    log.info("%s", msg)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request ID + one structured log line per API request.

    Adds:
      request.state.request_id
      response header: X-Request-Id
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = rid

        start = time.time()
        resp = await call_next(request)
        dur_ms = int((time.time() - start) * 1000)

        resp.headers["X-Request-Id"] = rid

        p = normalize_path(request.url.path)
        m = request.method.upper()
        HTTP_REQUESTS_TOTAL.labels(method=m, path=p, status=str(resp.status_code)).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=m, path=p).observe(dur_ms / 1000.0)

        if request.url.path.startswith("/api/"):
            account: Optional[str] = getattr(request.state, "account", None)
            _json_log(
                "request",
                request_id=rid,
                method=request.method,
                path=request.url.path,
                status_code=resp.status_code,
                duration_ms=dur_ms,
                account=account,
            )
        return resp


class AccountScopeMiddleware(BaseHTTPMiddleware):
    """
    Carries the caller's account (X-Account) into request.state.account.

    The account is an opaque scope; nothing here authorizes it.
    With required=True, host enumeration calls without the header get a 400.
    """

    def __init__(self, app, required: bool = False):
        super().__init__(app)
        self.required = required

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        account = (request.headers.get(ACCOUNT_HEADER) or "").strip() or None
        request.state.account = account

        if self.required and account is None and request.url.path.startswith(SCOPED_PREFIX):
            return JSONResponse(status_code=400, content={"detail": "Missing X-Account header"})

        return await call_next(request)
