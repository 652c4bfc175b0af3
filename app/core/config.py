"""
Process configuration.

Read once from environment variables (``HOSTENUM_*``). Numeric values that do
not parse fail fast at startup.
"""
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

_TRUE = ("1", "true", "yes")


def _env(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_flag(name: str, default: str = "0") -> bool:
    return _env(name, default).lower() in _TRUE


class Settings(BaseModel):
    env: str = "dev"

    es_url: str = "http://localhost:9200"
    es_username: str = ""
    es_password: str = ""
    es_index: str = "xjoin.inventory.hosts"
    es_timeout_seconds: float = Field(default=30.0, gt=0)

    schema_file: Optional[Path] = None
    account_required: bool = False

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = Field(default=4000, gt=0, lt=65536)

    @classmethod
    def from_env(cls) -> "Settings":
        schema_file = _env("HOSTENUM_SCHEMA_FILE")
        return cls(
            env=_env("HOSTENUM_ENV", "dev").lower(),
            es_url=_env("HOSTENUM_ES_URL", "http://localhost:9200"),
            es_username=_env("HOSTENUM_ES_USERNAME"),
            es_password=_env("HOSTENUM_ES_PASSWORD"),
            es_index=_env("HOSTENUM_ES_INDEX", "xjoin.inventory.hosts"),
            es_timeout_seconds=float(_env("HOSTENUM_ES_TIMEOUT_SECONDS", "30")),
            schema_file=Path(schema_file) if schema_file else None,
            account_required=_env_flag("HOSTENUM_ACCOUNT_REQUIRED"),
            log_level=_env("HOSTENUM_LOG_LEVEL", "INFO").upper(),
            host=_env("HOSTENUM_HOST", "0.0.0.0"),
            port=int(_env("HOSTENUM_PORT", "4000")),
        )


_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger (idempotent)."""
    global _configured
    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)
    _configured = True
