from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from app.api.deps import get_host_schema, get_settings

router = APIRouter()


@router.get("/api/v1/health/live", tags=["health"])
def liveness():
    return {"status": "alive"}


@router.get("/api/v1/health/ready", tags=["health"])
def readiness():
    """
    Readiness reflects ability to serve traffic: settings parse and the host
    schema loads. The search engine itself is not probed.
    """
    settings = get_settings()
    get_host_schema()
    return {"status": "ready", "index": settings.es_index}


@router.get("/metrics", include_in_schema=False)
def prometheus_metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
