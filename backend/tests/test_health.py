"""Tests for health and root endpoints"""
from fastapi.testclient import TestClient


def test_health(client: TestClient):
    """Test the basic health check"""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "admin-panel"


def test_ready(client: TestClient):
    """Test the readiness check against the test database"""
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] is True


def test_live(client: TestClient):
    """Test the liveness check"""
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_root(client: TestClient):
    """Test the root endpoint"""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_unknown_route_is_json_404(client: TestClient):
    """Test an unknown path"""
    assert client.get("/nope").status_code == 404
