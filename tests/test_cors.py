"""Tests for the cross-origin allow-list."""
from products_api.utils.cors import CORS_REJECTED, is_origin_allowed

ALLOWED = "http://localhost:5173"


def test_is_origin_allowed():
    """Test the allow-list predicate."""
    assert is_origin_allowed(ALLOWED, [ALLOWED])
    assert is_origin_allowed(ALLOWED + "/", [ALLOWED])
    assert not is_origin_allowed("http://evil.example", [ALLOWED])
    assert not is_origin_allowed(None, [ALLOWED])
    assert not is_origin_allowed("", [ALLOWED])
    assert not is_origin_allowed(ALLOWED, [])


def test_allowed_origin_reaches_api(client):
    """Test a request from the configured front-end gets CORS headers."""
    response = client.get("/api/products", headers={"Origin": ALLOWED})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED


def test_disallowed_origin_rejected(client):
    """Test a request from another origin is rejected before routing."""
    response = client.get("/api/products", headers={"Origin": "http://evil.example"})

    assert response.status_code == 403
    assert response.text == CORS_REJECTED
    assert response.headers["content-type"].startswith("text/plain")


def test_disallowed_origin_cannot_mutate(client):
    """Test a rejected request never touches the store."""
    response = client.post(
        "/api/products",
        json={"name": "Monitor", "price": 300},
        headers={"Origin": "http://evil.example"}
    )
    assert response.status_code == 403

    assert client.get("/api/products").json() == []


def test_preflight_from_allowed_origin(client):
    """Test the configured front-end can preflight mutating requests."""
    response = client.options(
        "/api/products",
        headers={
            "Origin": ALLOWED,
            "Access-Control-Request-Method": "POST",
        }
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == ALLOWED


def test_request_without_origin_passes(client):
    """Test same-origin and non-browser requests are not blocked."""
    response = client.get("/api/products")

    assert response.status_code == 200
