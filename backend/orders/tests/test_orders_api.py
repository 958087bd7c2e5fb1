"""
Orders API tests.

Exercises the request/response envelope and the HTTP status each domain
error is surfaced with.
"""
import uuid
from unittest import mock

import pytest
from decimal import Decimal
from rest_framework import status

from orders.models import Meal, Order


def order_payload(bowl, *entrees_and_sides, **extra):
    entrees, sides = entrees_and_sides
    payload = {
        "order_items": [
            {
                "mealType": {"meal_type_id": bowl.id},
                "entrees": [{"menu_item_id": item.id} for item in entrees],
                "sides": [{"menu_item_id": item.id} for item in sides],
            }
        ],
    }
    payload.update(extra)
    return payload


@pytest.mark.django_db
class TestCreateOrderAPI:

    def test_create_order(self, api_client, bowl, orange_chicken, fried_rice):
        payload = order_payload(
            bowl, [orange_chicken], [fried_rice], customer_name="Sam", rush_order=True
        )

        response = api_client.post("/api/orders/", payload, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["success"] is True
        data = response.data["data"]
        assert data["totalPrice"] == Decimal("7.50")
        order = Order.objects.get(pk=data["orderId"])
        assert order.customer_name == "Sam"
        assert order.rush_order is True
        assert order.staff is None

    def test_staff_recorded_for_authenticated_cashier(
        self, staff_client, staff_user, bowl, orange_chicken, fried_rice
    ):
        response = staff_client.post(
            "/api/orders/", order_payload(bowl, [orange_chicken], [fried_rice]), format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert Order.objects.get(pk=response.data["data"]["orderId"]).staff == staff_user

    def test_create_order_with_points(self, api_client, bowl, orange_chicken, fried_rice, rewards_customer):
        payload = order_payload(
            bowl,
            [orange_chicken],
            [fried_rice],
            customerId=str(rewards_customer.id),
            pointsApplied=100,
        )

        response = api_client.post("/api/orders/", payload, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        data = response.data["data"]
        assert data["totalPrice"] == Decimal("3.50")
        assert data["subtotal"] == Decimal("7.50")
        assert data["discount"] == Decimal("4.00")
        assert data["pointsRedeemed"] == 100
        assert data["pointsEarned"] == 3

    def test_missing_order_items(self, api_client):
        response = api_client.post("/api/orders/", {"customer_name": "Sam"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["success"] is False
        assert Order.objects.count() == 0

    def test_unknown_menu_item(self, api_client, bowl, orange_chicken):
        payload = {
            "order_items": [
                {
                    "mealType": {"meal_type_id": bowl.id},
                    "entrees": [{"menu_item_id": orange_chicken.id}],
                    "sides": [{"menu_item_id": 424242}],
                }
            ]
        }

        response = api_client.post("/api/orders/", payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "424242" in response.data["error"]
        assert Order.objects.count() == 0
        assert Meal.objects.count() == 0

    def test_insufficient_points(self, api_client, bowl, orange_chicken, fried_rice, new_customer):
        payload = order_payload(
            bowl, [orange_chicken], [fried_rice], customerId=str(new_customer.id), pointsApplied=25
        )

        response = api_client.post("/api/orders/", payload, format="json")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["success"] is False
        assert Order.objects.count() == 0

    def test_unknown_customer(self, api_client, bowl, orange_chicken, fried_rice):
        payload = order_payload(
            bowl, [orange_chicken], [fried_rice], customerId=str(uuid.uuid4()), pointsApplied=25
        )

        response = api_client.post("/api/orders/", payload, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_points_without_customer(self, api_client, bowl, orange_chicken, fried_rice):
        payload = order_payload(bowl, [orange_chicken], [fried_rice], pointsApplied=25)

        response = api_client.post("/api/orders/", payload, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert Order.objects.count() == 0

    def test_internal_failure_is_500_and_rolled_back(self, api_client, bowl, orange_chicken, fried_rice):
        with mock.patch(
            "orders.services.order_service.MealDetail.objects.bulk_create",
            side_effect=RuntimeError("insert failed"),
        ):
            response = api_client.post(
                "/api/orders/", order_payload(bowl, [orange_chicken], [fried_rice]), format="json"
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {"success": False, "error": "Failed to create order"}
        assert Order.objects.count() == 0


@pytest.mark.django_db
class TestUpdateStatusAPI:

    @pytest.fixture
    def order_id(self, api_client, bowl, orange_chicken, fried_rice):
        response = api_client.post(
            "/api/orders/", order_payload(bowl, [orange_chicken], [fried_rice]), format="json"
        )
        return response.data["data"]["orderId"]

    def test_complete_order(self, api_client, order_id, stock_levels):
        response = api_client.patch(
            f"/api/orders/{order_id}/status/", {"status": "completed"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.data["data"]
        assert data["order_id"] == order_id
        assert data["order_status"] == "completed"
        assert data["completed_at"] is not None
        assert data["inventory"]["shortfalls"] == []

    def test_missing_status(self, api_client, order_id):
        response = api_client.patch(f"/api/orders/{order_id}/status/", {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["success"] is False

    def test_unknown_status(self, api_client, order_id):
        response = api_client.patch(
            f"/api/orders/{order_id}/status/", {"status": "addressed"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_order_not_found(self, api_client):
        response = api_client.patch("/api/orders/999999/status/", {"status": "ready"}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["success"] is False

    def test_invalid_transition(self, api_client, order_id):
        api_client.patch(f"/api/orders/{order_id}/status/", {"status": "cancelled"}, format="json")

        response = api_client.patch(
            f"/api/orders/{order_id}/status/", {"status": "completed"}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_repeated_completion(self, api_client, order_id):
        first = api_client.patch(
            f"/api/orders/{order_id}/status/", {"status": "completed"}, format="json"
        )
        second = api_client.patch(
            f"/api/orders/{order_id}/status/", {"status": "completed"}, format="json"
        )

        assert second.status_code == status.HTTP_200_OK
        assert second.data["data"]["changed"] is False
        assert second.data["data"]["completed_at"] == first.data["data"]["completed_at"]


@pytest.mark.django_db
class TestOrderProjectionsAPI:

    @pytest.fixture
    def placed(self, api_client, bowl, orange_chicken, fried_rice):
        ids = []
        for name in ("Ana", "", "Lee"):
            response = api_client.post(
                "/api/orders/",
                order_payload(bowl, [orange_chicken], [fried_rice], customer_name=name),
                format="json",
            )
            ids.append(response.data["data"]["orderId"])
        api_client.patch(f"/api/orders/{ids[2]}/status/", {"status": "completed"}, format="json")
        return ids

    def test_list_and_filter(self, api_client, placed):
        response = api_client.get("/api/orders/")
        assert response.status_code == status.HTTP_200_OK
        assert len(response.data["data"]) == 3

        response = api_client.get("/api/orders/", {"status": "completed"})
        assert [o["order_id"] for o in response.data["data"]] == [placed[2]]

    def test_retrieve(self, api_client, placed):
        response = api_client.get(f"/api/orders/{placed[0]}/")

        assert response.status_code == status.HTTP_200_OK
        data = response.data["data"]
        assert data["customer_name"] == "Ana"
        assert [d["role"] for d in data["meals"][0]["details"]] == ["entree", "side"]

    def test_active(self, api_client, placed):
        response = api_client.get("/api/orders/active/")

        assert response.status_code == status.HTTP_200_OK
        assert {o["order_id"] for o in response.data["data"]} == set(placed)
        assert all(o["meal_count"] == 1 for o in response.data["data"])

    def test_kitchen(self, api_client, placed):
        response = api_client.get("/api/orders/kitchen/")

        data = response.data["data"]
        assert [o["order_id"] for o in data] == placed[:2]
        assert data[1]["customer_name"] == "Guest"
        assert data[0]["meals"][0]["items"] == [
            {"name": "Orange Chicken", "role": "entree"},
            {"name": "Fried Rice", "role": "side"},
        ]

    def test_prepared(self, api_client, placed):
        response = api_client.get("/api/orders/prepared/")

        assert [o["order_id"] for o in response.data["data"]] == [placed[2]]
        assert response.data["data"][0]["customer_name"] == "Lee"

    def test_customer_history(self, api_client, bowl, orange_chicken, fried_rice, rewards_customer):
        created = api_client.post(
            "/api/orders/",
            order_payload(bowl, [orange_chicken], [fried_rice], customerId=str(rewards_customer.id)),
            format="json",
        )

        response = api_client.get(f"/api/orders/customer/{rewards_customer.id}/")

        assert response.status_code == status.HTTP_200_OK
        assert [o["order_id"] for o in response.data["data"]] == [created.data["data"]["orderId"]]
