"""Host filter tree -> native term/range constraints.

A filter tree is a nested mapping whose keys are schema field names, down to
an operator mapping at the leaves::

    {"system_profile_facts": {"operating_system": {"name": {"eq": "RHEL"}}}}
    -> [{"term": {"host.system_profile_facts.operating_system.name": "RHEL"}}]

``AND``/``OR`` take a list of trees and ``NOT`` a single tree.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from .errors import InvalidArgument
from .schema import FieldSchema

RANGE_OPERATORS = ("gt", "gte", "lt", "lte")

_OPERATORS_BY_TYPE = {
    "string": ("eq", "matches"),
    "integer": ("eq",) + RANGE_OPERATORS,
    "date": ("eq",) + RANGE_OPERATORS,
    "boolean": ("is", "eq"),
}


class FilterCompiler:
    def compile(
        self,
        path_prefix: Sequence[str],
        filter_tree: Optional[Mapping[str, Any]],
        schema: FieldSchema,
    ) -> List[Dict[str, Any]]:
        if not filter_tree:
            return []
        return self._compile_object(list(path_prefix), filter_tree, schema)

    def _compile_object(
        self, path: List[str], tree: Mapping[str, Any], schema: FieldSchema
    ) -> List[Dict[str, Any]]:
        if not isinstance(tree, Mapping):
            raise InvalidArgument(f"filter for {'.'.join(path)} must be an object")

        out: List[Dict[str, Any]] = []
        for name, sub in tree.items():
            if name == "AND":
                out.append({"bool": {"filter": self._compile_list(path, sub, schema, name)}})
            elif name == "OR":
                out.append(
                    {"bool": {"should": self._compile_list(path, sub, schema, name), "minimum_should_match": 1}}
                )
            elif name == "NOT":
                out.append({"bool": {"must_not": self._compile_object(path, sub, schema)}})
            else:
                node = schema.get(name)
                if node is None:
                    raise InvalidArgument(f"unknown filter field: {'.'.join(path + [name])}")
                if isinstance(node, FieldSchema):
                    out.extend(self._compile_object(path + [name], sub, node))
                else:
                    out.extend(self._compile_leaf(path + [name], node, sub))
        return out

    def _compile_list(
        self, path: List[str], subs: Any, schema: FieldSchema, combinator: str
    ) -> List[Dict[str, Any]]:
        if not isinstance(subs, (list, tuple)):
            raise InvalidArgument(f"{combinator} filter must be a list")
        out: List[Dict[str, Any]] = []
        for sub in subs:
            out.extend(self._compile_object(path, sub, schema))
        return out

    def _compile_leaf(self, path: List[str], field_type: str, ops: Any) -> List[Dict[str, Any]]:
        field = ".".join(path)
        if not isinstance(ops, Mapping):
            raise InvalidArgument(f"filter for {field} must be an operator object")

        allowed = _OPERATORS_BY_TYPE[field_type]
        out: List[Dict[str, Any]] = []
        bounds: Dict[str, Any] = {}
        for op, value in ops.items():
            if op not in allowed:
                raise InvalidArgument(f"operator {op} is not supported for {field} ({field_type})")
            if op in RANGE_OPERATORS:
                bounds[op] = value
            elif op == "matches":
                out.append({"wildcard": {field: value}})
            else:
                out.append({"term": {field: value}})
        if bounds:
            out.append({"range": {field: bounds}})
        return out
