"""
Tests for health check endpoints.
"""

from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from rest_api.main import app
from shared.infrastructure.db import get_db


class TestHealthEndpoints:
    """Test health check API endpoints."""

    def test_health_check(self, client):
        """Basic health check should return healthy status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "rest-api"
        assert data["environment"] == "test"

    def test_detailed_health_check(self, client):
        response = client.get("/api/health/detailed")
        assert response.status_code == 200
        assert response.json()["database"] == "ok"

    def test_detailed_health_check_database_down(self, client):
        """An unreachable database degrades the service to 503."""
        broken = MagicMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        def override_get_db():
            yield broken

        app.dependency_overrides[get_db] = override_get_db
        response = client.get("/api/health/detailed")

        assert response.status_code == 503
        assert response.json()["status"] == "degraded"
        assert response.json()["database"] == "unreachable"
