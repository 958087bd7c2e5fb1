"""
Rewards Ledger.

Validates and applies point redemption against a customer's balance and awards
points for money spent. Every mutator must run inside the order transaction
that owns it, so a failed order can never leave a balance change behind.
"""
from decimal import Decimal
import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db.models import F
from django.utils import timezone

from core_backend.utils.money import CENTS_PER_UNIT, from_minor, to_minor, whole_units
from core_backend.utils.transactions import require_atomic
from .exceptions import CustomerNotFoundError, InsufficientPointsError, InvalidPointsError
from .models import Customer

logger = logging.getLogger(__name__)

DEFAULT_POINTS_PER_DOLLAR = 25

AWARD_ON_CREATION = "creation"
AWARD_ON_COMPLETION = "completion"


class RewardsService:
    """Points redemption, discount computation and point awards."""

    @staticmethod
    def points_per_dollar() -> int:
        return int(getattr(settings, "REWARDS_POINTS_PER_DOLLAR", DEFAULT_POINTS_PER_DOLLAR))

    @staticmethod
    def award_trigger() -> str:
        """When points are earned: at order creation or on completion."""
        trigger = getattr(settings, "REWARDS_AWARD_TRIGGER", AWARD_ON_CREATION)
        if trigger not in (AWARD_ON_CREATION, AWARD_ON_COMPLETION):
            raise ValueError(f"Unknown REWARDS_AWARD_TRIGGER '{trigger}'")
        return trigger

    @staticmethod
    def normalize_points(points) -> int:
        """Coerce a points amount to a non-negative int (None counts as zero)."""
        if points is None:
            return 0
        if isinstance(points, bool) or not isinstance(points, int):
            raise InvalidPointsError(points)
        if points < 0:
            raise InvalidPointsError(points, "Points applied cannot be negative")
        return points

    @staticmethod
    def get_customer(customer_id, for_update: bool = False) -> Customer:
        queryset = Customer.objects.all()
        if for_update:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(pk=customer_id)
        except (Customer.DoesNotExist, ValidationError, ValueError):
            raise CustomerNotFoundError(customer_id)

    @staticmethod
    def validate_redemption(customer_id, points_applied) -> Customer:
        """
        Check that the customer exists and holds at least ``points_applied``.

        The customer row is locked for the rest of the transaction so the
        balance cannot change between validation and redemption.
        """
        require_atomic("validate_redemption")
        points_applied = RewardsService.normalize_points(points_applied)

        customer = RewardsService.get_customer(customer_id, for_update=True)
        if points_applied > customer.rewards_points:
            raise InsufficientPointsError(customer_id, points_applied, customer.rewards_points)
        return customer

    # ------------------------------------------------------------------
    # Pure discount arithmetic (minor units)
    # ------------------------------------------------------------------

    @staticmethod
    def discount_minor(points_applied: int) -> int:
        """Discount in cents: pointsApplied / POINTS_PER_DOLLAR currency units."""
        return points_applied * CENTS_PER_UNIT // RewardsService.points_per_dollar()

    @staticmethod
    def calculate_discount(points_applied: int) -> Decimal:
        return from_minor(RewardsService.discount_minor(points_applied))

    @staticmethod
    def apply_discount_minor(total_minor: int, points_applied: int) -> int:
        """Final price in cents, clamped at zero."""
        return max(0, total_minor - RewardsService.discount_minor(points_applied))

    @staticmethod
    def points_for_amount(final_price) -> int:
        """One point per whole currency unit spent."""
        return whole_units(to_minor(final_price))

    # ------------------------------------------------------------------
    # Mutators (transaction-bound)
    # ------------------------------------------------------------------

    @staticmethod
    def apply_redemption(customer: Customer, points_applied) -> int:
        """
        Decrement the balance by ``points_applied``. Returns the new balance.

        The decrement is a guarded UPDATE, so the balance never goes negative
        even if another transaction spent points after validation.
        """
        require_atomic("apply_redemption")
        points_applied = RewardsService.normalize_points(points_applied)
        if points_applied == 0:
            return customer.rewards_points

        updated = Customer.objects.filter(
            pk=customer.pk, rewards_points__gte=points_applied
        ).update(
            rewards_points=F("rewards_points") - points_applied,
            updated_at=timezone.now(),
        )
        customer.refresh_from_db(fields=["rewards_points"])
        if not updated:
            raise InsufficientPointsError(customer.pk, points_applied, customer.rewards_points)

        logger.info(
            f"Redeemed {points_applied} points for customer {customer.pk}; "
            f"balance now {customer.rewards_points}"
        )
        return customer.rewards_points

    @staticmethod
    def award_points(customer: Customer, final_price) -> int:
        """Credit floor(final_price) points. Returns the number of points awarded."""
        require_atomic("award_points")
        points = RewardsService.points_for_amount(final_price)
        if points == 0:
            return 0

        Customer.objects.filter(pk=customer.pk).update(
            rewards_points=F("rewards_points") + points,
            updated_at=timezone.now(),
        )
        customer.refresh_from_db(fields=["rewards_points"])

        logger.info(
            f"Awarded {points} points to customer {customer.pk}; "
            f"balance now {customer.rewards_points}"
        )
        return points
