"""Typed records flowing through one enumeration request/response cycle."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class OrderDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class OrderClause:
    field: str
    direction: OrderDirection

    def to_native(self) -> Dict[str, str]:
        return {self.field: self.direction.value}


# Last clause is always the ascending key tie-breaker.
OrderSpec = Tuple[OrderClause, ...]


class AggregationBucket(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    key: str
    doc_count: int = 0
    doc_count_error_upper_bound: int = 0


@dataclass(frozen=True)
class EnumerationRequest:
    """Arguments of a single enumeration call, built once and never mutated."""

    limit: Optional[int] = None
    offset: Optional[int] = None
    order_by: Optional[str] = None
    order_how: Optional[str] = None
    host_filter: Optional[Dict[str, Any]] = None
    aggregation: Dict[str, Any] = field(default_factory=dict)
    scope: Tuple[Dict[str, Any], ...] = ()


class TagKey(BaseModel):
    namespace: Optional[str] = None
    key: str
    value: Optional[str] = None


class TagCount(BaseModel):
    tag: TagKey
    count: int


class OperatingSystemKey(BaseModel):
    name: str
    major: Optional[str] = None
    minor: Optional[str] = None


class OperatingSystemCount(BaseModel):
    operating_system: OperatingSystemKey
    count: int


class EnumerationMeta(BaseModel):
    count: int = 0
    # Buckets returned under the aggregation size cap; an approximation of cardinality.
    total: int = 0


class EnumerationResult(BaseModel):
    data: List[Any] = Field(default_factory=list)
    meta: EnumerationMeta = Field(default_factory=EnumerationMeta)

    @classmethod
    def empty(cls) -> "EnumerationResult":
        return cls(data=[], meta=EnumerationMeta(count=0, total=0))
