from django.db.models import Count, Prefetch
import logging

from orders.models import MealDetail, Order

logger = logging.getLogger(__name__)

Status = Order.OrderStatus

ROLE_ORDER = {"entree": 0, "side": 1, "drink": 2}


class KitchenService:
    """Read projections for the kitchen monitor, cashier and manager dashboards."""

    @staticmethod
    def get_active_orders():
        """Every order that has not been cancelled, newest first, with its meal count."""
        return (
            Order.objects.exclude(order_status=Status.CANCELLED)
            .select_related("staff")
            .annotate(meal_count=Count("meals", distinct=True))
            .order_by("-datetime", "-id")
        )

    @staticmethod
    def get_kitchen_orders():
        """Orders still being prepared, oldest first, with meals and their items."""
        details = MealDetail.objects.select_related("menu_item")
        return (
            Order.objects.exclude(order_status__in=Order.TERMINAL_STATUSES)
            .select_related("staff")
            .prefetch_related("meals__meal_type", Prefetch("meals__details", queryset=details))
            .order_by("datetime", "id")
        )

    @staticmethod
    def get_prepared_orders():
        """Completed orders in the order they were finished."""
        return Order.objects.filter(order_status=Status.COMPLETED).order_by("completed_at", "id")

    @staticmethod
    def get_customer_orders(customer_id):
        """A customer's order history, newest first."""
        return (
            Order.objects.filter(customer_id=customer_id)
            .prefetch_related("meals__meal_type", "meals__details__menu_item")
            .order_by("-datetime", "-id")
        )

    @staticmethod
    def group_items_for_kitchen(details):
        """
        Sort a meal's details for the kitchen ticket: entrees, then sides, then
        the drink, alphabetical within each role.
        """
        return sorted(
            details,
            key=lambda detail: (ROLE_ORDER.get(detail.role, len(ROLE_ORDER)), detail.menu_item.name),
        )
