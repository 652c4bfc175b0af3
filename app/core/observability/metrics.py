from __future__ import annotations

from prometheus_client import Counter as PromCounter

ENUMERATION_OUTCOMES = (
    "ok",
    "invalid_argument",
    "malformed_key",
    "window_exceeded",
    "empty_past_end",
    "backend_error",
)

_PROM_ENUMERATIONS = PromCounter(
    "hostenum_enumeration_requests_total",
    "Enumeration requests by kind and outcome",
    ["kind", "outcome"],
)


def inc_enumeration(kind: str, outcome: str) -> None:
    """
    Count one finished enumeration call.
    Unknown outcomes are folded into backend_error to keep label cardinality fixed.
    """
    if outcome not in ENUMERATION_OUTCOMES:
        outcome = "backend_error"
    _PROM_ENUMERATIONS.labels(kind=kind or "unknown", outcome=outcome).inc()

