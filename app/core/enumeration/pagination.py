from __future__ import annotations

from typing import Optional, Sequence, Tuple, TypeVar

from .errors import InvalidArgument

DEFAULT_LIMIT = 10
DEFAULT_OFFSET = 0
MAX_LIMIT = 100

T = TypeVar("T")


def validate_limit(limit: Optional[int]) -> None:
    if limit is None:
        return
    if limit < 0:
        raise InvalidArgument(f"value must be 0 or greater (was {limit})")
    if limit > MAX_LIMIT:
        raise InvalidArgument(f"value must be {MAX_LIMIT} or less (was {limit})")


def validate_offset(offset: Optional[int]) -> None:
    if offset is not None and offset < 0:
        raise InvalidArgument(f"value must be 0 or greater (was {offset})")


def normalize(limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
    return (
        DEFAULT_LIMIT if limit is None else int(limit),
        DEFAULT_OFFSET if offset is None else int(offset),
    )


def slice_page(buckets: Sequence[T], limit: int, offset: int) -> list[T]:
    """Return ``buckets[offset:offset + limit]``; an offset past the end yields an empty page."""
    if offset >= len(buckets):
        return []
    return list(buckets[offset : offset + limit])
