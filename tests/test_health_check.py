from unittest.mock import patch

from django.db import OperationalError


class TestHealthCheck:
    def test_health_check_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "timestamp" in data
        assert "services" in data

    def test_health_check_reports_database_status(self, client):
        response = client.get("/health")
        data = response.json()
        assert data["services"]["database"]["status"] == "up"
        assert "response_time_ms" in data["services"]["database"]

    def test_health_check_reports_database_down(self, client):
        with patch(
            "modules.core.views.connections",
        ) as mock_connections:
            mock_connections.__getitem__.return_value.ensure_connection.side_effect = (
                OperationalError("connection refused")
            )
            response = client.get("/health")

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "unhealthy"
        assert data["services"]["database"]["status"] == "down"

    def test_health_check_reports_ordering_configuration(self, client, settings):
        settings.ORDER_REFERENCE_TIME_ZONE = "Europe/Copenhagen"
        response = client.get("/health")
        ordering = response.json()["services"]["ordering"]
        assert ordering["status"] == "up"
        assert ordering["reference_time_zone"] == "Europe/Copenhagen"

    def test_health_check_unknown_reference_zone_is_unhealthy(self, client, settings):
        settings.ORDER_REFERENCE_TIME_ZONE = "Nowhere/Atlantis"
        response = client.get("/health")
        assert response.status_code == 503
        assert response.json()["services"]["ordering"]["status"] == "down"
