from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence

from pydantic import BaseModel

from .decoders import OS_DELIMITER, decode_operating_system_bucket, decode_tag_bucket
from .models import AggregationBucket, EnumerationRequest

# Approximates "all distinct values"; meta.total can never exceed it.
AGGREGATION_SIZE = 10000

TAGS_SEARCH_FIELD = "host.tags_search"
OS_FACT_PREFIX = "host.system_profile_facts.operating_system"


class TagSortKey(str, Enum):
    COUNT = "count"
    TAG = "tag"


class OperatingSystemSortKey(str, Enum):
    COUNT = "count"
    OPERATING_SYSTEM = "operating_system"


class EnumerationAdapter(ABC):
    kind: str
    order_by_mapping: Mapping[Enum, str]

    @abstractmethod
    def aggregation(self, search_filter: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Return the ``terms`` aggregation body without its ``order``."""

    @abstractmethod
    def decode(self, bucket: AggregationBucket) -> Optional[BaseModel]:
        """Decode a bucket; ``None`` drops it from the page."""

    def build_request(
        self,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Optional[str] = None,
        order_how: Optional[str] = None,
        host_filter: Optional[Dict[str, Any]] = None,
        search_filter: Optional[Mapping[str, Any]] = None,
        scope: Sequence[Dict[str, Any]] = (),
    ) -> EnumerationRequest:
        return EnumerationRequest(
            limit=limit,
            offset=offset,
            order_by=order_by,
            order_how=order_how,
            host_filter=host_filter,
            aggregation=self.aggregation(search_filter),
            scope=tuple(scope),
        )


class HostTagsAdapter(EnumerationAdapter):
    kind = "tags"
    order_by_mapping = {
        TagSortKey.COUNT: "_count",
        TagSortKey.TAG: "_key",
    }

    def aggregation(self, search_filter: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        terms: Dict[str, Any] = {
            "field": TAGS_SEARCH_FIELD,
            "size": AGGREGATION_SIZE,
            "show_term_doc_count_error": True,
        }
        search = (search_filter or {}).get("search") or {}
        if search.get("eq"):
            terms["include"] = [search["eq"]]
        elif search.get("regex"):
            terms["include"] = search["regex"]
        return terms

    def decode(self, bucket: AggregationBucket):
        return decode_tag_bucket(bucket)


def _os_script(delimiter: str) -> str:
    facts = [f"doc['{OS_FACT_PREFIX}.{name}']" for name in ("name", "major", "minor")]
    present = " && ".join(f"{f}.size()!=0" for f in facts)
    joined = f" + '{delimiter}' + ".join(f"{f}.value" for f in facts)
    return f"if({present}){{return {joined};}}"


class HostOperatingSystemsAdapter(EnumerationAdapter):
    kind = "operating_systems"
    order_by_mapping = {
        OperatingSystemSortKey.COUNT: "_count",
        OperatingSystemSortKey.OPERATING_SYSTEM: "_key",
    }
    script = _os_script(OS_DELIMITER)

    def aggregation(self, search_filter: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return {
            "script": self.script,
            "size": AGGREGATION_SIZE,
            "show_term_doc_count_error": True,
        }

    def decode(self, bucket: AggregationBucket):
        return decode_operating_system_bucket(bucket)


ADAPTERS: Dict[str, EnumerationAdapter] = {
    HostTagsAdapter.kind: HostTagsAdapter(),
    HostOperatingSystemsAdapter.kind: HostOperatingSystemsAdapter(),
}
