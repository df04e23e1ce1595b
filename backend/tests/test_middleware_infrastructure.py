"""
Tests for middleware and infrastructure components.
"""

from unittest.mock import MagicMock, patch

import pytest
from fastapi import FastAPI, Response
from fastapi.testclient import TestClient

from rest_api.core.middlewares import (
    ContentTypeValidationMiddleware,
    SecurityHeadersMiddleware,
    register_middlewares,
)
from shared.infrastructure.correlation import (
    CorrelationIdFilter,
    CorrelationIdMiddleware,
    get_request_id,
    request_id_var,
)
from shared.infrastructure.db import safe_commit


def _app_with(middleware) -> FastAPI:
    app = FastAPI()
    app.add_middleware(middleware)

    @app.get("/test")
    def get_endpoint():
        return {"message": "ok", "request_id": get_request_id()}

    @app.post("/test")
    def post_endpoint():
        return {"message": "ok"}

    return app


# =============================================================================
# SecurityHeadersMiddleware Tests
# =============================================================================


class TestSecurityHeadersMiddleware:
    """Tests for security headers middleware."""

    def test_adds_security_headers(self):
        response = TestClient(_app_with(SecurityHeadersMiddleware)).get("/test")

        assert response.headers.get("X-Content-Type-Options") == "nosniff"
        assert response.headers.get("X-Frame-Options") == "DENY"
        assert response.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_no_hsts_outside_production(self):
        response = TestClient(_app_with(SecurityHeadersMiddleware)).get("/test")
        assert "Strict-Transport-Security" not in response.headers

    def test_adds_hsts_in_production(self):
        """HSTS is only sent in production."""
        with patch("rest_api.core.middlewares.settings") as mock_settings:
            mock_settings.is_production = True
            response = TestClient(_app_with(SecurityHeadersMiddleware)).get("/test")

        assert "max-age=31536000" in response.headers.get("Strict-Transport-Security", "")


# =============================================================================
# ContentTypeValidationMiddleware Tests
# =============================================================================


class TestContentTypeValidationMiddleware:
    """Tests for content-type validation middleware."""

    @pytest.fixture
    def test_client(self):
        return TestClient(_app_with(ContentTypeValidationMiddleware))

    def test_allows_json(self, test_client):
        assert test_client.post("/test", json={"key": "value"}).status_code == 200

    def test_allows_missing_content_type(self, test_client):
        """Empty-body POSTs such as order cancellation carry no Content-Type."""
        assert test_client.post("/test").status_code == 200

    def test_rejects_other_content_types(self, test_client):
        response = test_client.post("/test", content="some data", headers={"Content-Type": "text/plain"})

        assert response.status_code == 415
        assert "Unsupported Media Type" in response.json()["detail"]

    def test_get_not_checked(self, test_client):
        assert test_client.get("/test", headers={"Content-Type": "text/plain"}).status_code == 200


# =============================================================================
# CorrelationIdMiddleware Tests
# =============================================================================


class TestCorrelationIdMiddleware:
    """Tests for correlation ID middleware."""

    @pytest.fixture
    def test_client(self):
        return TestClient(_app_with(CorrelationIdMiddleware))

    def test_generates_request_id_when_not_provided(self, test_client):
        response = test_client.get("/test")

        request_id = response.headers.get("X-Request-ID")
        assert request_id is not None
        assert len(request_id) == 36  # UUID v4 length
        assert response.json()["request_id"] == request_id

    def test_uses_provided_request_id(self, test_client):
        response = test_client.get("/test", headers={"X-Request-ID": "my-custom-request-id-12345"})
        assert response.headers.get("X-Request-ID") == "my-custom-request-id-12345"

    def test_oversized_request_id_replaced(self, test_client):
        response = test_client.get("/test", headers={"X-Request-ID": "x" * 200})
        assert len(response.headers.get("X-Request-ID")) == 36


# =============================================================================
# CorrelationIdFilter Tests
# =============================================================================


class TestCorrelationIdFilter:
    """Tests for correlation ID logging filter."""

    def test_adds_request_id_to_log_record(self):
        token = request_id_var.set("test-request-123")
        try:
            record = MagicMock()
            assert CorrelationIdFilter().filter(record) is True
            assert record.request_id == "test-request-123"
        finally:
            request_id_var.reset(token)

    def test_uses_dash_when_no_request_id(self):
        token = request_id_var.set("")
        try:
            record = MagicMock()
            assert CorrelationIdFilter().filter(record) is True
            assert record.request_id == "-"
        finally:
            request_id_var.reset(token)


# =============================================================================
# safe_commit Tests
# =============================================================================


class TestSafeCommit:
    """Tests for safe_commit utility."""

    def test_commits_successfully(self):
        mock_db = MagicMock()

        safe_commit(mock_db)

        mock_db.commit.assert_called_once()
        mock_db.rollback.assert_not_called()

    def test_rollbacks_and_reraises(self):
        class CustomDBError(Exception):
            pass

        mock_db = MagicMock()
        mock_db.commit.side_effect = CustomDBError("Custom error")

        with pytest.raises(CustomDBError):
            safe_commit(mock_db)

        mock_db.rollback.assert_called_once()


# =============================================================================
# register_middlewares Tests
# =============================================================================


class TestRegisterMiddlewares:
    """Tests for middleware registration."""

    def test_registers_all_middlewares(self):
        app = FastAPI()

        register_middlewares(app)

        middleware_classes = [m.cls for m in app.user_middleware]
        assert SecurityHeadersMiddleware in middleware_classes
        assert ContentTypeValidationMiddleware in middleware_classes
        assert CorrelationIdMiddleware in middleware_classes

    def test_registered_stack_strips_server_header(self):
        app = FastAPI()
        register_middlewares(app)

        @app.get("/test")
        def get_endpoint(response: Response):
            response.headers["Server"] = "uvicorn"
            return {"message": "ok"}

        response = TestClient(app).get("/test", headers={"X-Request-ID": "req-1"})

        assert response.status_code == 200
        assert "server" not in response.headers
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Request-ID"] == "req-1"

    def test_full_app_echoes_request_id(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
