"""Caller sort arguments -> native terms-aggregation ``order`` clauses."""

from __future__ import annotations

from enum import Enum
from typing import List, Mapping, Optional, Type

from .errors import InvalidArgument
from .models import OrderClause, OrderDirection, OrderSpec

COUNT_FIELD = "_count"
KEY_FIELD = "_key"

_VALID_ORDER_HOW = ("asc", "desc")


def parse_order_by(order_by: Optional[str], sort_keys: Type[Enum]) -> Optional[Enum]:
    if not order_by:
        return None
    try:
        return sort_keys(order_by)
    except ValueError:
        raise InvalidArgument(f"invalid order_by parameter: {order_by}") from None


def parse_order_how(order_how: Optional[str]) -> Optional[OrderDirection]:
    if not order_how:
        return None
    if order_how.lower() not in _VALID_ORDER_HOW:
        raise InvalidArgument(f"invalid order_how parameter: {order_how}")
    return OrderDirection(order_how.upper())


def resolve_order(
    order_by: Optional[str],
    order_how: Optional[str],
    mapping: Mapping[Enum, str],
) -> OrderSpec:
    """Build the order spec for ``order_by``/``order_how``.

    ``mapping`` goes from a sort-key enum member to a native field. Only the
    members present in ``mapping`` are accepted. The key tie-breaker is always
    appended last so that repeated calls page through buckets identically.
    """
    sort_keys = type(next(iter(mapping)))
    key = parse_order_by(order_by, sort_keys)
    if key is not None and key not in mapping:
        raise InvalidArgument(f"invalid order_by parameter: {order_by}")
    direction = parse_order_how(order_how)

    clauses: List[OrderClause] = []
    if key is not None:
        clauses.append(OrderClause(mapping[key], direction or OrderDirection.ASC))
    elif direction is not None:
        clauses.append(OrderClause(COUNT_FIELD, direction))

    clauses.append(OrderClause(KEY_FIELD, OrderDirection.ASC))
    return tuple(clauses)


def order_to_native(order: OrderSpec) -> List[dict]:
    return [clause.to_native() for clause in order]
