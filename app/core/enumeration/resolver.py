from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List

from app.core.observability.metrics import inc_enumeration

from .adapters import EnumerationAdapter
from .errors import (
    EnumerationError,
    InvalidArgument,
    MalformedKey,
    RequestWindowExceeded,
    SearchBackendError,
)
from .filters import FilterCompiler
from .models import EnumerationMeta, EnumerationRequest, EnumerationResult
from .ordering import order_to_native, resolve_order
from .pagination import normalize, slice_page, validate_limit, validate_offset
from .schema import FieldSchema
from .search_client import SearchClient, SearchClientError

log = logging.getLogger("hostenum.enumeration")

HOST_PATH_PREFIX = ("host",)

_OUTCOMES = (
    (InvalidArgument, "invalid_argument"),
    (MalformedKey, "malformed_key"),
    (RequestWindowExceeded, "window_exceeded"),
)


def _outcome(exc: EnumerationError) -> str:
    for exc_type, outcome in _OUTCOMES:
        if isinstance(exc, exc_type):
            return outcome
    return "backend_error"


class EnumerationResolver:
    """Runs one enumeration request end to end.

    Validating -> Filtering -> Querying -> (RecoveringWindowOverflow) -> Decoding.

    Holds no per-call state; one instance serves concurrent calls.
    """

    def __init__(
        self,
        *,
        client: SearchClient,
        compiler: FilterCompiler,
        schema: FieldSchema,
        index: str,
    ):
        self.client = client
        self.compiler = compiler
        self.schema = schema
        self.index = index

    async def resolve(self, adapter: EnumerationAdapter, request: EnumerationRequest) -> EnumerationResult:
        try:
            return await self._resolve(adapter, request)
        except EnumerationError as exc:
            inc_enumeration(adapter.kind, _outcome(exc))
            raise

    async def _resolve(self, adapter: EnumerationAdapter, request: EnumerationRequest) -> EnumerationResult:
        validate_limit(request.limit)
        validate_offset(request.offset)
        order = resolve_order(request.order_by, request.order_how, adapter.order_by_mapping)
        limit, offset = normalize(request.limit, request.offset)

        query = self._build_query(request)
        body = self._build_body(request, query, order_to_native(order))
        log.debug("enumeration kind=%s index=%s body=%s", adapter.kind, self.index, body)

        try:
            response = await self.client.search(self.index, body)
        except SearchClientError as exc:
            if not exc.is_result_window_error:
                log.warning("search backend failure kind=%s: %s", adapter.kind, exc)
                raise SearchBackendError(str(exc), status_code=exc.status_code) from exc
            return await self._recover_window_overflow(adapter, query, offset, exc)

        page = slice_page(response.buckets, limit, offset)
        data = []
        for bucket in page:
            record = adapter.decode(bucket)
            if record is not None:
                data.append(record)

        inc_enumeration(adapter.kind, "ok")
        return EnumerationResult(data=data, meta=EnumerationMeta(count=len(data), total=len(response.buckets)))

    def _build_query(self, request: EnumerationRequest) -> Dict[str, Any]:
        constraints: List[Dict[str, Any]] = [copy.deepcopy(c) for c in request.scope]
        constraints.extend(self.compiler.compile(HOST_PATH_PREFIX, request.host_filter, self.schema))
        return {"bool": {"filter": constraints}}

    @staticmethod
    def _build_body(request: EnumerationRequest, query: Dict[str, Any], order: List[dict]) -> Dict[str, Any]:
        terms = copy.deepcopy(request.aggregation)
        terms["order"] = order
        return {
            "aggs": {"terms": {"terms": terms}},
            "query": query,
            "_source": [],
            "size": 0,
        }

    async def _recover_window_overflow(
        self,
        adapter: EnumerationAdapter,
        query: Dict[str, Any],
        offset: int,
        cause: SearchClientError,
    ) -> EnumerationResult:
        # The engine rejects a window past its limit even when the page is
        # simply past the end of the data; one count query tells them apart.
        count_body = {"query": query, "size": 0, "from": 0, "track_total_hits": True}
        try:
            counted = await self.client.search(self.index, count_body)
        except SearchClientError as exc:
            log.warning("window overflow recovery failed kind=%s: %s", adapter.kind, exc)
            raise SearchBackendError(str(exc), status_code=exc.status_code) from exc

        if counted.hits_total >= offset:
            log.info(
                "result window exceeded kind=%s offset=%d hits=%d", adapter.kind, offset, counted.hits_total
            )
            raise RequestWindowExceeded(offset=offset, hits_total=counted.hits_total) from cause

        log.info(
            "offset past end of data kind=%s offset=%d hits=%d; returning empty page",
            adapter.kind,
            offset,
            counted.hits_total,
        )
        inc_enumeration(adapter.kind, "empty_past_end")
        return EnumerationResult.empty()
