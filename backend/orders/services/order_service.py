from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, List, Optional
import logging

from django.db import transaction
from django.utils import timezone

from core_backend.utils.money import from_minor
from customers.exceptions import InvalidPointsError
from customers.models import Customer
from customers.services import AWARD_ON_CREATION, RewardsService
from menu.services import CatalogService
from orders.calculators import OrderItemSelection, PricingCalculator
from orders.exceptions import EmptyOrderError, UnknownMealTypeError, UnknownMenuItemError
from orders.models import Meal, MealDetail, Order
from orders.signals import order_created

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderResult:
    """Outcome of a committed order creation."""

    order: Order
    subtotal: Decimal
    discount: Decimal
    final_price: Decimal
    points_redeemed: int
    points_earned: int

    @property
    def order_id(self) -> int:
        return self.order.pk


class OrderService:
    """Order Transaction Coordinator: the only place an order is created."""

    @staticmethod
    def create_order(
        order_items: Iterable[OrderItemSelection],
        customer_name: Optional[str] = None,
        customer_id=None,
        points_applied: int = 0,
        rush_order: bool = False,
        staff=None,
    ) -> OrderResult:
        """
        Price, persist and (optionally) reward an order as one unit of work.

        Steps, all inside a single atomic block:
        1. validate the points redemption against the customer's balance
        2. load the catalog snapshot for every referenced meal type and item
        3. insert the Order with a zero placeholder price
        4. insert a Meal per order item and a MealDetail per entree/side/drink,
           accumulating the pre-discount total as rows are built
        5. apply the rewards discount and write the final price
        6. redeem the applied points, then award points for the final price
        Any exception rolls the whole block back: no order, meal, detail or
        balance change survives a failure.

        Raises:
            EmptyOrderError, InvalidPointsError: before any transaction opens
            CustomerNotFoundError, InsufficientPointsError,
            UnknownMealTypeError, UnknownMenuItemError: transaction rolled back
        """
        items: List[OrderItemSelection] = list(order_items or [])
        if not items:
            raise EmptyOrderError()
        points_applied = RewardsService.normalize_points(points_applied)
        if points_applied and not customer_id:
            raise InvalidPointsError(
                points_applied, message="Points can only be redeemed by a rewards customer"
            )

        with transaction.atomic():
            customer = OrderService._resolve_customer(customer_id, points_applied)

            snapshot = CatalogService.load_snapshot(
                meal_type_ids=[item.meal_type_id for item in items],
                menu_item_ids=[ref for item in items for _role, ref in item.menu_item_refs()],
            )
            calculator = PricingCalculator(snapshot)

            order = Order.objects.create(
                price=Decimal("0.00"),
                order_status=Order.OrderStatus.PENDING,
                staff=staff if getattr(staff, "is_authenticated", False) else None,
                customer=customer,
                customer_name=(customer_name or "").strip(),
                rush_order=bool(rush_order),
            )

            total_minor = 0
            for item in items:
                if not snapshot.has_meal_type(item.meal_type_id):
                    raise UnknownMealTypeError(item.meal_type_id)

                meal = Meal.objects.create(order=order, meal_type_id=item.meal_type_id)

                details = []
                for role, menu_item_id in item.menu_item_refs():
                    if not snapshot.has_menu_item(menu_item_id):
                        raise UnknownMenuItemError(menu_item_id, role)
                    details.append(MealDetail(meal=meal, menu_item_id=menu_item_id, role=role))
                MealDetail.objects.bulk_create(details)

                total_minor += calculator.item_total_minor(item)

            final_minor = RewardsService.apply_discount_minor(total_minor, points_applied)
            discount_minor = total_minor - final_minor

            order.subtotal = from_minor(total_minor)
            order.price = from_minor(final_minor)
            order.points_redeemed = points_applied
            order.save(update_fields=["subtotal", "price", "points_redeemed", "updated_at"])

            points_earned = 0
            if customer is not None:
                if points_applied:
                    RewardsService.apply_redemption(customer, points_applied)
                if RewardsService.award_trigger() == AWARD_ON_CREATION:
                    points_earned = RewardsService.award_points(customer, order.price)
                    order.points_earned = points_earned
                    order.points_awarded_at = timezone.now()
                    order.save(update_fields=["points_earned", "points_awarded_at", "updated_at"])

            transaction.on_commit(
                lambda: order_created.send(sender=Order, order=order, points_earned=points_earned)
            )

        logger.info(
            f"Created order {order.pk}: {len(items)} meal(s), subtotal {order.subtotal}, "
            f"final price {order.price}, points redeemed {points_applied}, earned {points_earned}"
        )

        return OrderResult(
            order=order,
            subtotal=order.subtotal,
            discount=from_minor(discount_minor),
            final_price=order.price,
            points_redeemed=points_applied,
            points_earned=points_earned,
        )

    @staticmethod
    def _resolve_customer(customer_id, points_applied: int) -> Optional[Customer]:
        """Lock and return the order's customer, validating any redemption."""
        if not customer_id:
            return None
        if points_applied > 0:
            return RewardsService.validate_redemption(customer_id, points_applied)
        return RewardsService.get_customer(customer_id, for_update=True)
