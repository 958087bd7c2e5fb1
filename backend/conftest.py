"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest
from decimal import Decimal

from django.core.cache import cache


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def clear_cache_after_test():
    """
    Clear cache after each test to prevent cache pollution.
    """
    yield  # Run the test
    cache.clear()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Unauthenticated DRF API client.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/orders/')
    """
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def staff_user(db):
    """Cashier account recorded as the order's staff member."""
    from django.contrib.auth import get_user_model

    return get_user_model().objects.create_user(username="cashier1", password="pass12345")


@pytest.fixture
def staff_client(api_client, staff_user):
    api_client.force_authenticate(user=staff_user)
    return api_client


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def bowl(db):
    """Meal type with a $6.00 base price."""
    from menu.models import MealType

    return MealType.objects.create(
        name="Bowl", price=Decimal("6.00"), entree_count=1, side_count=1
    )


@pytest.fixture
def plate(db):
    from menu.models import MealType

    return MealType.objects.create(
        name="Plate", price=Decimal("8.00"), entree_count=2, side_count=1
    )


@pytest.fixture
def orange_chicken(db):
    """Entree with a $1.00 upcharge."""
    from menu.models import MenuItem

    return MenuItem.objects.create(
        name="Orange Chicken", item_type=MenuItem.ItemType.ENTREE, upcharge=Decimal("1.00")
    )


@pytest.fixture
def broccoli_beef(db):
    from menu.models import MenuItem

    return MenuItem.objects.create(
        name="Broccoli Beef", item_type=MenuItem.ItemType.ENTREE, upcharge=Decimal("0.00")
    )


@pytest.fixture
def fried_rice(db):
    """Side with a $0.50 upcharge."""
    from menu.models import MenuItem

    return MenuItem.objects.create(
        name="Fried Rice", item_type=MenuItem.ItemType.SIDE, upcharge=Decimal("0.50")
    )


@pytest.fixture
def fountain_drink(db):
    from menu.models import MenuItem

    return MenuItem.objects.create(
        name="Fountain Drink", item_type=MenuItem.ItemType.DRINK, upcharge=Decimal("2.10")
    )


@pytest.fixture
def bowl_selection(bowl, orange_chicken, fried_rice):
    """One bowl with one entree and one side: $6.00 + $1.00 + $0.50 = $7.50."""
    from orders.calculators import OrderItemSelection

    return OrderItemSelection(
        meal_type_id=bowl.id,
        entree_ids=(orange_chicken.id,),
        side_ids=(fried_rice.id,),
    )


@pytest.fixture
def stock_levels(orange_chicken, fried_rice):
    """Inventory rows for the bowl's entree and side."""
    from inventory.models import InventoryItem

    return {
        "entree": InventoryItem.objects.create(
            menu_item=orange_chicken, stock=50, storage="Walk-in Freezer"
        ),
        "side": InventoryItem.objects.create(menu_item=fried_rice, stock=11, storage="Dry Storage"),
    }


# ============================================================================
# CUSTOMER FIXTURES
# ============================================================================

@pytest.fixture
def rewards_customer(db):
    """Customer holding 100 rewards points."""
    from customers.models import Customer

    return Customer.objects.create_customer(
        email="Jamie@Example.com", name="Jamie", rewards_points=100
    )


@pytest.fixture
def new_customer(db):
    """Customer with an empty points balance."""
    from customers.models import Customer

    return Customer.objects.create_customer(phone_number="555-0100", name="Riley")
