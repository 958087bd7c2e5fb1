from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from customers.models import Customer
from menu.models import MealType, MenuItem


class Order(models.Model):
    """
    A customer order.

    Created together with its meals and meal details in a single transaction by
    ``OrderService.create_order``; afterwards only its status changes, through
    ``OrderStatusService.set_status``.
    """

    class OrderStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        PROCESSING = "processing", _("Processing")
        PREPARING = "preparing", _("Preparing")
        READY = "ready", _("Ready")
        COMPLETED = "completed", _("Completed")
        CANCELLED = "cancelled", _("Cancelled")

    TERMINAL_STATUSES = (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    # Final price: pricing total minus rewards discount, clamped at zero.
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    subtotal = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        help_text=_("Meal type prices plus item upcharges, before any rewards discount."),
    )
    order_status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )
    staff = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders_taken",
    )
    customer = models.ForeignKey(
        Customer,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )
    customer_name = models.CharField(max_length=150, blank=True)
    rush_order = models.BooleanField(default=False)

    points_redeemed = models.PositiveIntegerField(default=0)
    points_earned = models.PositiveIntegerField(default=0)
    points_awarded_at = models.DateTimeField(null=True, blank=True)

    datetime = models.DateTimeField(default=timezone.now, db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "Order"
        ordering = ["-datetime", "-id"]
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        indexes = [
            models.Index(fields=["order_status", "datetime"], name="order_status_datetime_idx"),
            models.Index(fields=["customer", "datetime"], name="order_customer_datetime_idx"),
        ]

    def __str__(self):
        return f"Order #{self.pk} ({self.order_status})"

    @property
    def is_terminal(self):
        return self.order_status in self.TERMINAL_STATUSES

    @property
    def completion_minutes(self):
        """Minutes between placement and completion, or None if not completed."""
        if not self.completed_at:
            return None
        return (self.completed_at - self.datetime).total_seconds() / 60


class Meal(models.Model):
    """One meal-type selection within an order."""

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="meals")
    meal_type = models.ForeignKey(MealType, on_delete=models.PROTECT, related_name="meals")

    class Meta:
        db_table = "meal"
        ordering = ["id"]

    def __str__(self):
        return f"Meal #{self.pk} ({self.meal_type_id}) on order #{self.order_id}"


class MealDetail(models.Model):
    """A menu item filling an entree, side or drink slot of a meal."""

    class Role(models.TextChoices):
        ENTREE = "entree", _("Entree")
        SIDE = "side", _("Side")
        DRINK = "drink", _("Drink")

    meal = models.ForeignKey(Meal, on_delete=models.CASCADE, related_name="details")
    menu_item = models.ForeignKey(MenuItem, on_delete=models.PROTECT, related_name="meal_details")
    role = models.CharField(max_length=10, choices=Role.choices)

    class Meta:
        db_table = "meal_detail"
        ordering = ["id"]

    def __str__(self):
        return f"{self.role}: {self.menu_item_id}"
