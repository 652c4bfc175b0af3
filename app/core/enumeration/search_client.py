"""Thin async client for the search engine's ``_search`` endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import httpx
from pydantic import ValidationError

from .models import AggregationBucket

log = logging.getLogger("hostenum.search")

RESULT_WINDOW_REASON = "Result window is too large"


@dataclass
class SearchResponse:
    buckets: List[AggregationBucket] = field(default_factory=list)
    hits_total: int = 0

    @classmethod
    def from_body(cls, body: Dict[str, Any]) -> "SearchResponse":
        raw_buckets = ((body.get("aggregations") or {}).get("terms") or {}).get("buckets") or []
        total = (body.get("hits") or {}).get("total") or 0
        if isinstance(total, dict):
            total = total.get("value") or 0
        return cls(
            buckets=[AggregationBucket(**b) for b in raw_buckets],
            hits_total=int(total),
        )


class SearchClientError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        root_causes: Optional[List[Tuple[str, str]]] = None,
    ):
        self.status_code = status_code
        self.root_causes = list(root_causes or [])
        super().__init__(message)

    @property
    def is_result_window_error(self) -> bool:
        return any(RESULT_WINDOW_REASON in (reason or "") for _, reason in self.root_causes)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "SearchClientError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        error = body.get("error") if isinstance(body, dict) else None

        causes: List[Tuple[str, str]] = []
        if isinstance(error, dict):
            for rc in error.get("root_cause") or []:
                causes.append((str(rc.get("type", "")), str(rc.get("reason", ""))))
            if not causes and (error.get("type") or error.get("reason")):
                causes.append((str(error.get("type", "")), str(error.get("reason", ""))))
        elif isinstance(error, str):
            causes.append(("", error))

        summary = "; ".join(f"{t}: {r}" if t else r for t, r in causes) or response.reason_phrase
        return cls(
            f"search request failed with status {response.status_code}: {summary}",
            status_code=response.status_code,
            root_causes=causes,
        )


class SearchClient:
    def __init__(
        self,
        base_url: str,
        *,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        auth = httpx.BasicAuth(username, password) if username and password else None
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            auth=auth,
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def search(self, index: str, body: Dict[str, Any]) -> SearchResponse:
        try:
            response = await self._client.post(f"/{index}/_search", json=body)
        except httpx.HTTPError as exc:
            raise SearchClientError(f"search request to {index} failed: {exc}") from exc

        if response.is_error:
            err = SearchClientError.from_response(response)
            log.debug("search error index=%s status=%s causes=%s", index, err.status_code, err.root_causes)
            raise err

        try:
            payload = response.json()
        except ValueError as exc:
            raise SearchClientError(
                f"search response from {index} is not JSON", status_code=response.status_code
            ) from exc
        try:
            return SearchResponse.from_body(payload)
        except (AttributeError, TypeError, ValueError, ValidationError) as exc:
            raise SearchClientError(
                f"unexpected search response from {index}: {exc}", status_code=response.status_code
            ) from exc

    async def aclose(self) -> None:
        await self._client.aclose()
