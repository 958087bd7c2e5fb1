"""
Inventory Adjuster tests.

Stock is decremented with a guarded UPDATE when an order completes; it never
goes negative, and anything left under the reorder threshold is flagged.
"""
import pytest
from django.db import transaction
from django.test import override_settings

from inventory.exceptions import InsufficientStockError
from inventory.models import InventoryItem
from inventory.services import InventoryService
from orders.services import OrderService


def place_order(selection, count=1):
    return OrderService.create_order(order_items=[selection] * count).order


@pytest.mark.django_db
class TestConsumedQuantities:

    def test_counts_details_per_menu_item(self, bowl_selection, orange_chicken, fried_rice):
        order = place_order(bowl_selection, count=3)

        assert InventoryService.consumed_quantities(order.pk) == {
            orange_chicken.id: 3,
            fried_rice.id: 3,
        }


@pytest.mark.django_db
class TestAdjustForCompletedOrder:

    def test_decrements_stock(self, bowl_selection, stock_levels, orange_chicken):
        order = place_order(bowl_selection, count=2)

        with transaction.atomic():
            adjustment = InventoryService.adjust_for_completed_order(order)

        stock_levels["entree"].refresh_from_db()
        assert stock_levels["entree"].stock == 48
        assert adjustment.decremented[orange_chicken.id] == 2
        assert adjustment.fully_applied

    def test_flags_reorder_below_threshold(self, bowl_selection, stock_levels, fried_rice):
        order = place_order(bowl_selection, count=2)

        with transaction.atomic():
            adjustment = InventoryService.adjust_for_completed_order(order)

        side = stock_levels["side"]
        side.refresh_from_db()
        assert side.stock == 9
        assert side.reorder is True
        assert fried_rice.id in adjustment.flagged_for_reorder

        stock_levels["entree"].refresh_from_db()
        assert stock_levels["entree"].reorder is False

    def test_insufficient_stock_is_left_unchanged(self, bowl_selection, stock_levels, fried_rice):
        InventoryItem.objects.filter(pk=stock_levels["side"].pk).update(stock=1)
        order = place_order(bowl_selection, count=2)

        with transaction.atomic():
            adjustment = InventoryService.adjust_for_completed_order(order)

        side = stock_levels["side"]
        side.refresh_from_db()
        assert side.stock == 1
        assert side.reorder is True
        assert not adjustment.fully_applied
        shortfall = adjustment.shortfalls[0]
        assert (shortfall.menu_item_id, shortfall.required, shortfall.available) == (
            fried_rice.id,
            2,
            1,
        )

    @override_settings(INVENTORY_INSUFFICIENT_STOCK_POLICY="reject")
    def test_reject_policy_raises(self, bowl_selection, stock_levels):
        InventoryItem.objects.filter(pk=stock_levels["side"].pk).update(stock=0)
        order = place_order(bowl_selection)

        with pytest.raises(InsufficientStockError) as exc_info:
            with transaction.atomic():
                InventoryService.adjust_for_completed_order(order)

        assert len(exc_info.value.shortfalls) == 1
        # The entree decrement rolled back with the failed block
        stock_levels["entree"].refresh_from_db()
        assert stock_levels["entree"].stock == 50

    def test_untracked_items_are_skipped(self, bowl_selection, orange_chicken, fried_rice):
        order = place_order(bowl_selection)

        with transaction.atomic():
            adjustment = InventoryService.adjust_for_completed_order(order)

        assert sorted(adjustment.untracked) == sorted([orange_chicken.id, fried_rice.id])
        assert adjustment.decremented == {}
        assert InventoryItem.objects.count() == 0

    @override_settings(INVENTORY_REORDER_THRESHOLD=49)
    def test_threshold_from_settings(self, bowl_selection, stock_levels):
        order = place_order(bowl_selection, count=2)

        with transaction.atomic():
            InventoryService.adjust_for_completed_order(order)

        stock_levels["entree"].refresh_from_db()
        assert stock_levels["entree"].stock == 48
        assert stock_levels["entree"].reorder is True


@pytest.mark.django_db
class TestInventoryProjections:

    def test_low_stock_lists_flagged_items(self, stock_levels):
        InventoryItem.objects.filter(pk=stock_levels["side"].pk).update(reorder=True)

        items = list(InventoryService.get_low_stock_items())

        assert items == [stock_levels["side"]]

    def test_restock_report_uses_threshold(self, stock_levels):
        assert list(InventoryService.get_restock_report()) == [stock_levels["side"]]
        assert list(InventoryService.get_restock_report(threshold=5)) == []
        assert list(InventoryService.get_restock_report(threshold=100)) == [
            stock_levels["side"],
            stock_levels["entree"],
        ]
