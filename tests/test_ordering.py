import pytest

from app.core.enumeration.adapters import HostOperatingSystemsAdapter, HostTagsAdapter
from app.core.enumeration.errors import InvalidArgument
from app.core.enumeration.ordering import order_to_native, resolve_order

TAGS = HostTagsAdapter.order_by_mapping
OS = HostOperatingSystemsAdapter.order_by_mapping


@pytest.mark.parametrize(
    "order_by, order_how, expected",
    [
        (None, None, [{"_key": "ASC"}]),
        ("count", None, [{"_count": "ASC"}, {"_key": "ASC"}]),
        ("tag", None, [{"_key": "ASC"}, {"_key": "ASC"}]),
        (None, "DESC", [{"_count": "DESC"}, {"_key": "ASC"}]),
        (None, "asc", [{"_count": "ASC"}, {"_key": "ASC"}]),
        ("tag", "desc", [{"_key": "DESC"}, {"_key": "ASC"}]),
        ("count", "DESC", [{"_count": "DESC"}, {"_key": "ASC"}]),
    ],
)
def test_tag_order_resolution(order_by, order_how, expected):
    assert order_to_native(resolve_order(order_by, order_how, TAGS)) == expected


def test_operating_system_sort_key():
    order = resolve_order("operating_system", "Desc", OS)
    assert order_to_native(order) == [{"_key": "DESC"}, {"_key": "ASC"}]


@pytest.mark.parametrize("order_by", [None, "count", "tag"])
@pytest.mark.parametrize("order_how", [None, "ASC", "DESC"])
def test_tie_breaker_is_always_last(order_by, order_how):
    order = resolve_order(order_by, order_how, TAGS)
    assert order_to_native(order)[-1] == {"_key": "ASC"}
    assert order == resolve_order(order_by, order_how, TAGS)


def test_rejects_unknown_order_by():
    with pytest.raises(InvalidArgument, match="invalid order_by parameter: invalid"):
        resolve_order("invalid", None, TAGS)


def test_rejects_sort_key_of_other_kind():
    with pytest.raises(InvalidArgument, match="invalid order_by parameter: tag"):
        resolve_order("tag", None, OS)


def test_rejects_unknown_order_how():
    with pytest.raises(InvalidArgument, match="invalid order_how parameter: invalid"):
        resolve_order(None, "invalid", TAGS)
