"""Test FastAPI endpoints."""

import pytest


def test_root_endpoint(client):
    """Test root endpoint returns the greeting and nothing else."""
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"message": "Hello from AWIBI MEDTECH API"}


def test_health_endpoint(client):
    """Test health check endpoint."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"status": "OK"}


@pytest.mark.parametrize("path", ["/", "/health"])
def test_repeated_requests_are_identical(client, path):
    """Test the same route always returns byte-identical bodies."""
    bodies = {client.get(path).content for _ in range(5)}

    assert len(bodies) == 1


def test_handlers_ignore_query_and_headers(client):
    """Test handlers do not depend on request parameters."""
    response = client.get("/", params={"name": "x"}, headers={"X-Custom": "1"})

    assert response.status_code == 200
    assert response.json() == {"message": "Hello from AWIBI MEDTECH API"}


@pytest.mark.parametrize("path", ["/foo", "/health/live", "/api/health", "/docs", "/openapi.json", "/redoc"])
def test_nonexistent_endpoint(client, path):
    """Test unknown paths fall through to the default 404."""
    response = client.get(path)

    assert response.status_code == 404
    assert response.json() == {"detail": "Not Found"}


@pytest.mark.parametrize("method", ["POST", "PUT", "DELETE", "PATCH"])
@pytest.mark.parametrize("path", ["/", "/health"])
def test_wrong_method_on_known_path(client, method, path):
    """Test non-GET methods get the framework's method-not-allowed default."""
    response = client.request(method, path)

    assert response.status_code == 405
    assert response.json() == {"detail": "Method Not Allowed"}
    assert response.headers["allow"] == "GET"


def test_unknown_path_with_wrong_method(client):
    """Test an unknown path is 404 whatever the method."""
    response = client.post("/foo")

    assert response.status_code == 404


def test_cors_allows_known_frontend(client):
    """Test local frontend origins receive CORS headers."""
    response = client.get("/health", headers={"Origin": "http://localhost:3000"})

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"
    assert response.json() == {"status": "OK"}


def test_cors_allows_vercel_deployments(client):
    """Test preview deployments on vercel.app are allowed."""
    origin = "https://awibi-preview.vercel.app"
    response = client.get("/", headers={"Origin": origin})

    assert response.headers["access-control-allow-origin"] == origin


def test_cors_ignores_unknown_origin(client):
    """Test unknown origins get no CORS headers but still a normal response."""
    response = client.get("/", headers={"Origin": "http://evil.example.com"})

    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers
    assert response.json() == {"message": "Hello from AWIBI MEDTECH API"}


def test_cors_preflight(client):
    """Test preflight requests are answered by the CORS layer."""
    response = client.options(
        "/health",
        headers={
            "Origin": "http://localhost:5173",
            "Access-Control-Request-Method": "GET",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_cors_frontend_url_setting(make_client):
    """Test FRONTEND_URL is added to the allowed origins."""
    client = make_client(FRONTEND_URL="https://medtech.example.org")

    response = client.get("/", headers={"Origin": "https://medtech.example.org"})

    assert response.headers["access-control-allow-origin"] == "https://medtech.example.org"
