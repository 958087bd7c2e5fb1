from dataclasses import dataclass
from typing import Optional
import logging

from django.db import transaction
from django.utils import timezone

from customers.services import AWARD_ON_COMPLETION, RewardsService
from inventory.services import InventoryAdjustment, InventoryService
from orders.exceptions import (
    InvalidOrderStatusError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
)
from orders.models import Order
from orders.signals import order_status_changed

logger = logging.getLogger(__name__)

Status = Order.OrderStatus


@dataclass(frozen=True)
class StatusChangeResult:
    order: Order
    previous_status: str
    changed: bool
    inventory: Optional[InventoryAdjustment] = None
    points_earned: int = 0


class OrderStatusService:
    """Status Transition Engine for orders."""

    # Informational kitchen states may move between each other freely;
    # completed and cancelled are terminal.
    VALID_STATUS_TRANSITIONS = {
        Status.PENDING: [
            Status.PROCESSING,
            Status.PREPARING,
            Status.READY,
            Status.COMPLETED,
            Status.CANCELLED,
        ],
        Status.PROCESSING: [
            Status.PREPARING,
            Status.READY,
            Status.COMPLETED,
            Status.CANCELLED,
        ],
        Status.PREPARING: [
            Status.PROCESSING,
            Status.READY,
            Status.COMPLETED,
            Status.CANCELLED,
        ],
        Status.READY: [
            Status.PROCESSING,
            Status.PREPARING,
            Status.COMPLETED,
            Status.CANCELLED,
        ],
        Status.COMPLETED: [],
        Status.CANCELLED: [],
    }

    @staticmethod
    def parse_status(value) -> Status:
        if value not in Status.values:
            raise InvalidOrderStatusError(value)
        return Status(value)

    @staticmethod
    def can_transition(current_status, new_status) -> bool:
        if current_status == new_status:
            return True
        if current_status not in Status.values:
            return False
        return new_status in OrderStatusService.VALID_STATUS_TRANSITIONS[Status(current_status)]

    @staticmethod
    def validate_transition(current_status, new_status) -> None:
        if not OrderStatusService.can_transition(current_status, new_status):
            raise InvalidStatusTransitionError(current_status, new_status)

    @staticmethod
    def set_status(order_id, new_status) -> StatusChangeResult:
        """
        Move an order to ``new_status``.

        Setting an order to the status it already has is a no-op, which makes
        repeated completion calls safe: ``completed_at`` keeps its first value
        and inventory is decremented only once. Entering ``completed`` stamps
        ``completed_at`` and runs the inventory adjustment inside the same
        transaction as the status write.
        """
        new_status = OrderStatusService.parse_status(new_status)

        with transaction.atomic():
            try:
                order = Order.objects.select_for_update().get(pk=order_id)
            except (Order.DoesNotExist, ValueError, TypeError):
                raise OrderNotFoundError(order_id)

            previous_status = order.order_status
            if previous_status == new_status:
                logger.debug(f"Order {order.pk} already {new_status}; nothing to do")
                return StatusChangeResult(order=order, previous_status=previous_status, changed=False)

            OrderStatusService.validate_transition(previous_status, new_status)

            order.order_status = new_status
            update_fields = ["order_status", "updated_at"]

            inventory = None
            points_earned = 0
            if new_status == Status.COMPLETED:
                if order.completed_at is None:
                    order.completed_at = timezone.now()
                    update_fields.append("completed_at")
                order.save(update_fields=update_fields)

                inventory = InventoryService.adjust_for_completed_order(order)
                points_earned = OrderStatusService._award_on_completion(order)
            else:
                order.save(update_fields=update_fields)

            transaction.on_commit(
                lambda: order_status_changed.send(
                    sender=Order,
                    order=order,
                    previous_status=previous_status,
                    new_status=new_status,
                    inventory=inventory,
                )
            )

        logger.info(f"Order {order.pk} status changed {previous_status} -> {new_status}")
        return StatusChangeResult(
            order=order,
            previous_status=previous_status,
            changed=True,
            inventory=inventory,
            points_earned=points_earned,
        )

    @staticmethod
    def _award_on_completion(order: Order) -> int:
        """Award points at completion when that policy is active and not yet awarded."""
        if order.customer_id is None or order.points_awarded_at is not None:
            return 0
        if RewardsService.award_trigger() != AWARD_ON_COMPLETION:
            return 0

        customer = RewardsService.get_customer(order.customer_id, for_update=True)
        points = RewardsService.award_points(customer, order.price)
        order.points_earned = points
        order.points_awarded_at = timezone.now()
        order.save(update_fields=["points_earned", "points_awarded_at", "updated_at"])
        return points
