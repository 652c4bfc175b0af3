from __future__ import annotations

from prometheus_client import Counter, Histogram

from app.core.enumeration.adapters import ADAPTERS

HOSTS_PREFIX = "/api/v1/hosts/"

_KNOWN_PATHS = frozenset(
    [HOSTS_PREFIX + kind for kind in ADAPTERS]
    + ["/api/v1/health/live", "/api/v1/health/ready", "/metrics", "/docs", "/openapi.json"]
)


def normalize_path(path: str) -> str:
    """Map a request path onto a bounded set of metric labels."""
    p = (path or "/").rstrip("/") or "/"
    if p in _KNOWN_PATHS:
        return p
    # unknown enumeration kinds share one label
    if p.startswith(HOSTS_PREFIX):
        return HOSTS_PREFIX + ":kind"
    return "/:other"


HTTP_REQUESTS_TOTAL = Counter(
    "hostenum_http_requests_total",
    "Enumeration API requests by route and status",
    ["method", "path", "status"],
)

# enumeration calls wrap one or two search round trips
HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "hostenum_http_request_duration_seconds",
    "Enumeration API request latency in seconds",
    ["method", "path"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
