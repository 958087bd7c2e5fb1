import pytest
from rest_framework import status


@pytest.mark.django_db
class TestHealthCheck:

    def test_health_check_reports_database(self, api_client):
        response = api_client.get("/api/health/")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["success"] is True
        assert response.data["data"]["database"] == "ok"


@pytest.mark.django_db
class TestErrorEnvelope:

    def test_validation_errors_use_envelope(self, api_client):
        response = api_client.post("/api/orders/", {"order_items": []}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["success"] is False
        assert response.data["error"].startswith("order_items")
        assert "order_items" in response.data["details"]

    def test_not_found_uses_envelope(self, api_client):
        response = api_client.get("/api/orders/999999/")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["success"] is False
        assert response.data["error"]
