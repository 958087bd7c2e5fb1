from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class MealType(models.Model):
    """
    A catalog-defined combo shape (e.g. "Bowl", "Plate") with a base price
    and the number of entrees, sides and the drink size it includes.
    """

    name = models.CharField(max_length=100, unique=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Base price of the meal before item upcharges."),
    )
    entree_count = models.PositiveSmallIntegerField(default=1)
    side_count = models.PositiveSmallIntegerField(default=1)
    drink_size = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        db_table = "meal_types"
        ordering = ["id"]
        verbose_name = _("Meal Type")
        verbose_name_plural = _("Meal Types")

    def __str__(self):
        return self.name


class MenuItem(models.Model):
    """A single orderable item that can fill an entree, side or drink slot."""

    class ItemType(models.TextChoices):
        ENTREE = "entree", _("Entree")
        SIDE = "side", _("Side")
        DRINK = "drink", _("Drink")

    name = models.CharField(max_length=100)
    item_type = models.CharField(max_length=10, choices=ItemType.choices)
    upcharge = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text=_("Price added on top of the meal type's base price."),
    )
    is_available = models.BooleanField(default=True)

    class Meta:
        db_table = "menu_items"
        ordering = ["id"]
        verbose_name = _("Menu Item")
        verbose_name_plural = _("Menu Items")
        indexes = [
            models.Index(fields=["item_type", "is_available"], name="menu_items_type_avail_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.item_type})"
