from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.enumeration.models import EnumerationMeta, OperatingSystemCount, TagCount


class _EnumerationQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    limit: Optional[int] = Field(default=None, description="Page size, 0-100. Defaults to 10.")
    offset: Optional[int] = Field(default=None, description="Buckets to skip. Defaults to 0.")
    order_by: Optional[str] = None
    order_how: Optional[str] = Field(default=None, description="ASC or DESC, case-insensitive.")
    host_filter: Optional[Dict[str, Any]] = Field(default=None, alias="hostFilter")


class TagSearchModel(BaseModel):
    eq: Optional[str] = None
    regex: Optional[str] = None


class TagFilterModel(BaseModel):
    search: Optional[TagSearchModel] = None


class HostTagsQuery(_EnumerationQuery):
    order_by: Optional[str] = Field(default=None, description="count or tag")
    filter: Optional[TagFilterModel] = None


class HostOperatingSystemsQuery(_EnumerationQuery):
    order_by: Optional[str] = Field(default=None, description="count or operating_system")


class HostTagsResponse(BaseModel):
    data: List[TagCount]
    meta: EnumerationMeta


class HostOperatingSystemsResponse(BaseModel):
    data: List[OperatingSystemCount]
    meta: EnumerationMeta
