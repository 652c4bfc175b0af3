"""
Host field schema used to compile host filters.

The built-in schema mirrors the indexed host document. An override file can
replace it without code changes.

Override file format (YAML or JSON), nested mappings are objects and leaves
are one of ``string``, ``integer``, ``date``, ``boolean``:
    id: string
    system_profile_facts:
      operating_system:
        name: string
        major: integer

Environment variable:
    HOSTENUM_SCHEMA_FILE: path to the override file (optional).
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

_log = logging.getLogger("hostenum.schema")

SCALAR_TYPES = ("string", "integer", "date", "boolean")

SchemaNode = Union[str, "FieldSchema"]


class FieldSchema:
    """An object node: field name -> scalar type name or nested ``FieldSchema``."""

    def __init__(self, fields: Dict[str, SchemaNode]):
        self.fields = fields

    def get(self, name: str) -> Optional[SchemaNode]:
        return self.fields.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    @classmethod
    def from_mapping(cls, raw: Dict[str, Any], *, _path: str = "") -> "FieldSchema":
        fields: Dict[str, SchemaNode] = {}
        for name, node in raw.items():
            where = f"{_path}.{name}" if _path else str(name)
            if isinstance(node, dict):
                fields[str(name)] = cls.from_mapping(node, _path=where)
            elif isinstance(node, str) and node in SCALAR_TYPES:
                fields[str(name)] = node
            else:
                raise ValueError(f"invalid schema type for {where}: {node!r}")
        return cls(fields)


BUILTIN_HOST_SCHEMA: Dict[str, Any] = {
    "id": "string",
    "account": "string",
    "org_id": "string",
    "display_name": "string",
    "ansible_host": "string",
    "fqdn": "string",
    "insights_id": "string",
    "subscription_manager_id": "string",
    "satellite_id": "string",
    "bios_uuid": "string",
    "reporter": "string",
    "created_on": "date",
    "modified_on": "date",
    "stale_timestamp": "date",
    "tags_search": "string",
    "system_profile_facts": {
        "arch": "string",
        "os_release": "string",
        "os_kernel_version": "string",
        "infrastructure_type": "string",
        "infrastructure_vendor": "string",
        "cloud_provider": "string",
        "number_of_cpus": "integer",
        "number_of_sockets": "integer",
        "cores_per_socket": "integer",
        "system_memory_bytes": "integer",
        "last_boot_time": "date",
        "is_marketplace": "boolean",
        "sap_system": "boolean",
        "host_type": "string",
        "operating_system": {
            "name": "string",
            "major": "integer",
            "minor": "integer",
        },
    },
}


def builtin_host_schema() -> FieldSchema:
    return FieldSchema.from_mapping(BUILTIN_HOST_SCHEMA)


def load_host_schema(path: Optional[Path] = None) -> FieldSchema:
    """
    Load the host schema from ``path`` when given, else the built-in one.

    A missing, unreadable or malformed override file is logged and the
    built-in schema is returned instead.
    """
    if path is None:
        return builtin_host_schema()

    resolved = Path(path)
    try:
        raw_text = resolved.read_text(encoding="utf-8")
    except OSError as exc:
        _log.warning("Cannot read host schema file %s: %s", resolved, exc)
        return builtin_host_schema()

    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            _log.warning("Failed to parse host schema file %s as JSON or YAML: %s", resolved, exc)
            return builtin_host_schema()

    if not isinstance(data, dict):
        _log.warning("Host schema file %s must be a mapping, got %s", resolved, type(data).__name__)
        return builtin_host_schema()

    try:
        schema = FieldSchema.from_mapping(data)
    except ValueError as exc:
        _log.warning("Invalid host schema file %s: %s", resolved, exc)
        return builtin_host_schema()

    _log.info("Loaded host schema with %d top-level fields from %s", len(schema.fields), resolved)
    return schema
