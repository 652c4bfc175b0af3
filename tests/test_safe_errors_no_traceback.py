from fastapi.testclient import TestClient

from app.api.deps import get_resolver
from app.api.main import app


class _ExplodingResolver:
    async def resolve(self, adapter, request):
        raise RuntimeError("boom in resolver")


def test_unknown_path_does_not_leak_traceback():
    c = TestClient(app)
    r = c.get("/api/v1/does/not/exist")
    assert r.status_code == 404
    assert "Traceback" not in r.text
    assert "File \"" not in r.text


def test_unhandled_error_is_500_without_traceback():
    app.dependency_overrides[get_resolver] = lambda: _ExplodingResolver()
    try:
        c = TestClient(app)
        r = c.post("/api/v1/hosts/tags", json={}, headers={"X-Request-Id": "rid-500"})
    finally:
        app.dependency_overrides.pop(get_resolver, None)

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal Server Error", "request_id": "rid-500"}
    assert "boom in resolver" not in r.text
    assert "Traceback" not in r.text
