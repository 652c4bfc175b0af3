import os

import httpx
import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_resolver
from app.api.main import app
from app.core.enumeration import EnumerationResolver, FilterCompiler, SearchClient
from app.core.enumeration.schema import builtin_host_schema
from es_fakes import ES_INDEX, ES_PASSWORD, ES_URL, ES_USERNAME, FakeSearchEngine


@pytest.fixture(scope="session", autouse=True)
def _force_test_env():
    os.environ.setdefault("HOSTENUM_ENV", "dev")
    os.environ.setdefault("HOSTENUM_ACCOUNT_REQUIRED", "0")


@pytest.fixture()
def engine():
    return FakeSearchEngine()


@pytest.fixture()
def search_client(engine):
    return SearchClient(
        ES_URL,
        username=ES_USERNAME,
        password=ES_PASSWORD,
        transport=httpx.MockTransport(engine.handler),
    )


@pytest.fixture()
def resolver(search_client):
    return EnumerationResolver(
        client=search_client,
        compiler=FilterCompiler(),
        schema=builtin_host_schema(),
        index=ES_INDEX,
    )


@pytest.fixture()
def client(resolver):
    app.dependency_overrides[get_resolver] = lambda: resolver
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_resolver, None)
