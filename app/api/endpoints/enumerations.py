from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request

from app.api.deps import get_resolver
from app.api.schemas.enumerations import (
    HostOperatingSystemsQuery,
    HostOperatingSystemsResponse,
    HostTagsQuery,
    HostTagsResponse,
)
from app.core.enumeration import ADAPTERS, EnumerationResolver

router = APIRouter(prefix="/api/v1/hosts", tags=["enumerations"])

ACCOUNT_FIELD = "host.account"


def _scope(request: Request) -> List[Dict[str, Any]]:
    account = getattr(request.state, "account", None)
    if not account:
        return []
    return [{"term": {ACCOUNT_FIELD: account}}]


@router.post("/tags", response_model=HostTagsResponse)
async def host_tags(
    body: HostTagsQuery,
    request: Request,
    resolver: EnumerationResolver = Depends(get_resolver),
):
    adapter = ADAPTERS["tags"]
    req = adapter.build_request(
        limit=body.limit,
        offset=body.offset,
        order_by=body.order_by,
        order_how=body.order_how,
        host_filter=body.host_filter,
        search_filter=body.filter.model_dump() if body.filter else None,
        scope=_scope(request),
    )
    result = await resolver.resolve(adapter, req)
    return HostTagsResponse(data=result.data, meta=result.meta)


@router.post("/operating_systems", response_model=HostOperatingSystemsResponse)
async def host_operating_systems(
    body: HostOperatingSystemsQuery,
    request: Request,
    resolver: EnumerationResolver = Depends(get_resolver),
):
    adapter = ADAPTERS["operating_systems"]
    req = adapter.build_request(
        limit=body.limit,
        offset=body.offset,
        order_by=body.order_by,
        order_how=body.order_how,
        host_filter=body.host_filter,
        scope=_scope(request),
    )
    result = await resolver.resolve(adapter, req)
    return HostOperatingSystemsResponse(data=result.data, meta=result.meta)
