"""Unit tests for health endpoints."""

from fastapi.testclient import TestClient

from prose_pod_api.main import app

client = TestClient(app)


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_health_check(self):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert set(data["services"]) == {"server_config", "pod_address"}

    def test_readiness_check(self):
        response = client.get("/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_liveness_check(self):
        response = client.get("/live")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "alive"
        assert "timestamp" in data

    def test_security_headers(self):
        response = client.get("/ready")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
