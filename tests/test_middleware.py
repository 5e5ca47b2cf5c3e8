"""
test_middleware.py — Tests for request/response middleware

Verifies request ID generation, log context binding, and CORS
headers added by the middleware stack in main.py.

Called by: pytest
Depends on: todo_service/main.py (middleware), tests/conftest.py (client fixture)
"""

from loguru import logger


def test_request_id_header_present(client):
    """Every response should include X-Request-ID."""
    resp = client.get("/todos")
    assert "X-Request-ID" in resp.headers
    assert len(resp.headers["X-Request-ID"]) == 8  # uuid4().hex[:8]


def test_request_id_unique_per_request(client):
    """Each request gets a distinct ID."""
    ids = {client.get("/todos").headers["X-Request-ID"] for _ in range(5)}
    assert len(ids) == 5


def test_404_still_gets_request_id(client):
    """Even fallback responses carry the request ID."""
    resp = client.get("/nonexistent-route-xyz")
    assert resp.status_code == 404
    assert "X-Request-ID" in resp.headers


def test_request_id_bound_to_logs(client):
    """Log records emitted while handling a request carry its ID."""
    records = []
    sink_id = logger.add(lambda m: records.append(m.record), format="{message}")
    try:
        resp = client.post("/todos", json={"title": "A"})
    finally:
        logger.remove(sink_id)

    request_id = resp.headers["X-Request-ID"]
    created = [r for r in records if "created" in r["message"]]
    assert created
    assert created[-1]["extra"].get("request_id") == request_id


def test_cors_header_echoed_with_origin(client):
    """Requests carrying an Origin get cross-origin headers back."""
    resp = client.get("/todos", headers={"Origin": "http://example.com"})
    assert resp.status_code == 200
    assert resp.headers.get("access-control-allow-origin") == "*"


def test_no_cors_header_without_origin(client):
    resp = client.get("/todos")
    assert "access-control-allow-origin" not in resp.headers


def test_cors_preflight(client):
    resp = client.options(
        "/todos",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 200
    assert "POST" in resp.headers.get("access-control-allow-methods", "")
