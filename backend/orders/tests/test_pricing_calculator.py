import pytest
from decimal import Decimal

from menu.services import CatalogService, CatalogSnapshot
from orders.calculators import OrderItemSelection, PricingCalculator
from orders.services import OrderService


class TestPricingCalculator:
    """Pure pricing against an in-memory snapshot."""

    snapshot = CatalogSnapshot(
        meal_type_prices={1: 600, 2: 800},
        item_upcharges={10: 100, 11: 0, 20: 50, 30: 210},
    )

    def test_single_meal(self):
        item = OrderItemSelection(meal_type_id=1, entree_ids=(10,), side_ids=(20,))

        assert PricingCalculator(self.snapshot).calculate_total([item]) == Decimal("7.50")

    def test_multiple_meals_with_drink(self):
        items = [
            OrderItemSelection(meal_type_id=1, entree_ids=(10,), side_ids=(20,)),
            OrderItemSelection(meal_type_id=2, entree_ids=(10, 11), side_ids=(20,), drink_id=30),
        ]

        # 7.50 + (8.00 + 1.00 + 0.00 + 0.50 + 2.10)
        assert PricingCalculator(self.snapshot).calculate_total(items) == Decimal("19.10")

    def test_repeated_items_are_charged_each_time(self):
        item = OrderItemSelection(meal_type_id=1, entree_ids=(10, 10, 10))

        assert PricingCalculator(self.snapshot).total_minor([item]) == 900

    def test_unknown_references_price_at_zero(self):
        item = OrderItemSelection(meal_type_id=99, entree_ids=(404,))

        assert PricingCalculator(self.snapshot).calculate_total([item]) == Decimal("0.00")

    def test_no_items(self):
        assert PricingCalculator(self.snapshot).calculate_total([]) == Decimal("0.00")

    def test_menu_item_refs_order(self):
        item = OrderItemSelection(meal_type_id=1, entree_ids=(10, 11), side_ids=(20,), drink_id=30)

        assert list(item.menu_item_refs()) == [
            ("entree", 10),
            ("entree", 11),
            ("side", 20),
            ("drink", 30),
        ]


@pytest.mark.django_db
class TestRederivePersistedOrder:

    def test_subtotal_matches_rows(self, bowl_selection, plate, broccoli_beef, orange_chicken, fountain_drink):
        plate_selection = OrderItemSelection(
            meal_type_id=plate.id,
            entree_ids=(broccoli_beef.id, orange_chicken.id),
            drink_id=fountain_drink.id,
        )
        result = OrderService.create_order(order_items=[bowl_selection, plate_selection])

        items = OrderItemSelection.from_order(result.order)
        total = PricingCalculator(CatalogService.load_snapshot()).calculate_total(items)

        assert items == [bowl_selection, plate_selection]
        assert total == result.order.subtotal == Decimal("18.60")
