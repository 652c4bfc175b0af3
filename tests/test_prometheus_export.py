"""Prometheus export endpoint contract tests.

Validates that the scrape endpoint is reachable and exposes the expected
metric names. Absolute counter values are not asserted.
"""

from fastapi.testclient import TestClient

from app.api.main import app
from app.api.observability.metrics import normalize_path


def test_prometheus_metrics_endpoint_returns_200(client):
    client.post("/api/v1/hosts/tags", json={})
    c = TestClient(app)
    r = c.get("/metrics")
    assert r.status_code == 200
    assert "hostenum_http_requests_total" in r.text
    assert "hostenum_enumeration_requests_total" in r.text


def test_normalize_path_keeps_label_cardinality_low():
    assert normalize_path("/api/v1/hosts/tags") == "/api/v1/hosts/tags"
    assert normalize_path("/api/v1/hosts/operating_systems/") == "/api/v1/hosts/operating_systems"
    assert normalize_path("/api/v1/hosts/123") == "/api/v1/hosts/:kind"
    assert normalize_path("/api/v1/health/live") == "/api/v1/health/live"
    assert normalize_path("/wp-admin/setup.php") == "/:other"
