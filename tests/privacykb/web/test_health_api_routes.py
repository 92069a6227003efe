"""Tests for health check API routes."""

from starlette.testclient import TestClient

from privacykb.database.core import KnowledgeBaseDatabaseService


class TestHealthCheck:
    """Test the basic health endpoints."""

    def test_health_check(self, client):
        """Should report the service as healthy."""
        response = client.get("/api/health/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "privacykb"
        assert data["timestamp"].endswith("Z")
        assert "version" in data

    def test_liveness_probe(self, client):
        """Should report the process as alive."""
        response = client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}


class TestReadinessProbe:
    """Test the readiness endpoint."""

    def test_ready_with_database(self, client):
        """Should be ready when the knowledge base can be queried."""
        response = client.get("/api/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["database"] is True

    def test_not_ready_without_database(self, app_with_temp_data, tmp_path):
        """Should answer 503 when the database file is missing."""
        container = app_with_temp_data.container
        container.kb_database.override(KnowledgeBaseDatabaseService(tmp_path / "missing.db"))
        try:
            with TestClient(app_with_temp_data) as client:
                response = client.get("/api/health/ready")
        finally:
            container.kb_database.reset_override()

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not_ready"
        assert data["checks"]["database"] is False
