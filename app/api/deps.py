from __future__ import annotations

from functools import lru_cache

from app.core.config import Settings
from app.core.enumeration import EnumerationResolver, FieldSchema, FilterCompiler, SearchClient, load_host_schema


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_host_schema() -> FieldSchema:
    return load_host_schema(get_settings().schema_file)


@lru_cache(maxsize=1)
def get_search_client() -> SearchClient:
    s = get_settings()
    return SearchClient(
        s.es_url,
        username=s.es_username,
        password=s.es_password,
        timeout_seconds=s.es_timeout_seconds,
    )


def get_resolver() -> EnumerationResolver:
    return EnumerationResolver(
        client=get_search_client(),
        compiler=FilterCompiler(),
        schema=get_host_schema(),
        index=get_settings().es_index,
    )


async def close_search_client() -> None:
    if get_search_client.cache_info().currsize:
        await get_search_client().aclose()
        get_search_client.cache_clear()
