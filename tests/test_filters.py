import pytest

from app.core.enumeration.errors import InvalidArgument
from app.core.enumeration.filters import FilterCompiler
from app.core.enumeration.schema import builtin_host_schema

SCHEMA = builtin_host_schema()


def _compile(tree):
    return FilterCompiler().compile(["host"], tree, SCHEMA)


@pytest.mark.parametrize("tree", [None, {}])
def test_absent_filter_matches_all(tree):
    assert _compile(tree) == []


def test_term_on_top_level_field():
    assert _compile({"id": {"eq": "1234"}}) == [{"term": {"host.id": "1234"}}]


def test_term_on_nested_field():
    tree = {"system_profile_facts": {"operating_system": {"name": {"eq": "RHEL"}}}}
    assert _compile(tree) == [{"term": {"host.system_profile_facts.operating_system.name": "RHEL"}}]


def test_range_operators_merge_into_one_clause():
    tree = {"system_profile_facts": {"number_of_cpus": {"gte": 2, "lt": 8}}}
    assert _compile(tree) == [{"range": {"host.system_profile_facts.number_of_cpus": {"gte": 2, "lt": 8}}}]


def test_wildcard_and_boolean():
    tree = {"display_name": {"matches": "web-*"}, "system_profile_facts": {"is_marketplace": {"is": True}}}
    assert _compile(tree) == [
        {"wildcard": {"host.display_name": "web-*"}},
        {"term": {"host.system_profile_facts.is_marketplace": True}},
    ]


def test_combinators():
    tree = {
        "OR": [{"id": {"eq": "a"}}, {"id": {"eq": "b"}}],
        "NOT": {"reporter": {"eq": "puptoo"}},
        "AND": [{"fqdn": {"eq": "x.example.com"}}],
    }
    assert _compile(tree) == [
        {
            "bool": {
                "should": [{"term": {"host.id": "a"}}, {"term": {"host.id": "b"}}],
                "minimum_should_match": 1,
            }
        },
        {"bool": {"must_not": [{"term": {"host.reporter": "puptoo"}}]}},
        {"bool": {"filter": [{"term": {"host.fqdn": "x.example.com"}}]}},
    ]


def test_unknown_field():
    with pytest.raises(InvalidArgument, match="unknown filter field: host.nope"):
        _compile({"nope": {"eq": 1}})


def test_operator_not_valid_for_type():
    with pytest.raises(InvalidArgument, match="operator gt is not supported"):
        _compile({"display_name": {"gt": "a"}})


def test_combinator_requires_list():
    with pytest.raises(InvalidArgument, match="OR filter must be a list"):
        _compile({"OR": {"id": {"eq": "a"}}})
