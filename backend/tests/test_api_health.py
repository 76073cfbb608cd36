"""Tests for the root and health endpoints."""

from smartbudget.config import settings


class TestHealthAPI:
    """Test service liveness endpoints."""

    def test_health_check(self, client):
        """Health reports ok with the configured application name."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "app_name": settings.app_name}

    def test_root(self, client):
        """Root describes the running application."""
        data = client.get("/").json()
        assert data["name"] == settings.app_name
        assert data["status"] == "running"

    def test_lifespan_starts_background_services(self, client):
        """Startup attaches the bulk runner and feedback recorder to the app."""
        state = client.app.state
        assert state.bulk_categorization_service is not None
        assert state.feedback_service is not None
