from django.db import models
from django.utils.translation import gettext_lazy as _
from menu.models import MenuItem


class InventoryItem(models.Model):
    """
    Stock on hand for one menu item.

    ``stock`` is only ever decremented by the order completion flow in
    ``InventoryService.adjust_for_completed_order``; ``reorder`` is raised when
    the remaining stock drops under the reorder threshold.
    """

    menu_item = models.OneToOneField(
        MenuItem,
        on_delete=models.CASCADE,
        related_name="inventory",
    )
    stock = models.PositiveIntegerField(
        default=0, help_text=_("Units on hand.")
    )
    reorder = models.BooleanField(
        default=False, help_text=_("Set when stock falls under the reorder threshold.")
    )
    storage = models.CharField(
        max_length=50, blank=True, help_text=_("Where the item is stored, e.g. 'Walk-in Freezer'.")
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "inventory"
        ordering = ["menu_item_id"]
        verbose_name = _("Inventory Item")
        verbose_name_plural = _("Inventory Items")
        indexes = [
            models.Index(fields=["reorder"], name="inventory_reorder_idx"),
        ]

    def __str__(self):
        return f"{self.menu_item.name}: {self.stock}"
