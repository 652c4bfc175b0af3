"""Bucket key decoders.

Tag buckets carry keys shaped ``<namespace>/<key>=<value>``, e.g.
``NS1/key1=val1`` decodes to ``{"namespace": "NS1", "key": "key1", "value": "val1"}``.

Operating-system buckets carry ``<name>||||<major>||||<minor>`` built by the
aggregation script; an empty key means the host lacks complete OS facts.
"""

from __future__ import annotations

from typing import Optional, Tuple

from .errors import MalformedKey
from .models import AggregationBucket, OperatingSystemCount, OperatingSystemKey, TagCount, TagKey

NAMESPACE_DELIMITER = "/"
VALUE_DELIMITER = "="
OS_DELIMITER = "||||"


def split_once(value: str, delimiter: str, *, raw_key: str) -> Tuple[str, str]:
    index = value.find(delimiter)
    if index == -1:
        raise MalformedKey(key=raw_key, delimiter=delimiter)
    return value[:index], value[index + len(delimiter) :]


def _none_if_empty(value: str) -> Optional[str]:
    return value if value != "" else None


def decode_tag_key(raw: str) -> TagKey:
    # Namespaces are producer controlled and never contain '/'.
    namespace, rest = split_once(raw, NAMESPACE_DELIMITER, raw_key=raw)
    # Keys are assumed to end at the first '='; a key containing '=' is split wrongly.
    key, value = split_once(rest, VALUE_DELIMITER, raw_key=raw)
    return TagKey(namespace=_none_if_empty(namespace), key=key, value=_none_if_empty(value))


def decode_tag_bucket(bucket: AggregationBucket) -> TagCount:
    return TagCount(tag=decode_tag_key(bucket.key), count=bucket.doc_count)


def decode_operating_system_key(raw: str) -> Optional[OperatingSystemKey]:
    if raw == "":
        return None
    parts = raw.split(OS_DELIMITER)
    parts.extend([None] * (3 - len(parts)))
    name, major, minor = parts[:3]
    return OperatingSystemKey(name=name, major=major, minor=minor)


def decode_operating_system_bucket(bucket: AggregationBucket) -> Optional[OperatingSystemCount]:
    os_key = decode_operating_system_key(bucket.key)
    if os_key is None:
        return None
    return OperatingSystemCount(operating_system=os_key, count=bucket.doc_count)
