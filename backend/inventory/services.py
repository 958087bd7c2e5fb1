from dataclasses import dataclass, field, asdict
from typing import Dict, List
import logging

from django.conf import settings
from django.db.models import Count, F
from django.utils import timezone

from core_backend.utils.transactions import require_atomic
from .exceptions import InsufficientStockError
from .models import InventoryItem

logger = logging.getLogger(__name__)

DEFAULT_REORDER_THRESHOLD = 10
DEFAULT_RESTOCK_REPORT_THRESHOLD = 20

INSUFFICIENT_STOCK_WARN = "warn"
INSUFFICIENT_STOCK_REJECT = "reject"


@dataclass(frozen=True)
class StockShortfall:
    menu_item_id: int
    required: int
    available: int


@dataclass
class InventoryAdjustment:
    """What a completion did to stock, reported back to the caller."""

    order_id: int
    decremented: Dict[int, int] = field(default_factory=dict)
    shortfalls: List[StockShortfall] = field(default_factory=list)
    untracked: List[int] = field(default_factory=list)
    flagged_for_reorder: List[int] = field(default_factory=list)

    @property
    def fully_applied(self) -> bool:
        return not self.shortfalls

    def to_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "decremented": {str(k): v for k, v in self.decremented.items()},
            "shortfalls": [asdict(s) for s in self.shortfalls],
            "untracked": list(self.untracked),
            "flagged_for_reorder": list(self.flagged_for_reorder),
        }


class InventoryService:

    @staticmethod
    def reorder_threshold() -> int:
        return int(getattr(settings, "INVENTORY_REORDER_THRESHOLD", DEFAULT_REORDER_THRESHOLD))

    @staticmethod
    def insufficient_stock_policy() -> str:
        policy = getattr(settings, "INVENTORY_INSUFFICIENT_STOCK_POLICY", INSUFFICIENT_STOCK_WARN)
        if policy not in (INSUFFICIENT_STOCK_WARN, INSUFFICIENT_STOCK_REJECT):
            raise ValueError(f"Unknown INVENTORY_INSUFFICIENT_STOCK_POLICY '{policy}'")
        return policy

    @staticmethod
    def consumed_quantities(order_id) -> Dict[int, int]:
        """Count of meal detail rows per menu item under an order."""
        from orders.models import MealDetail

        rows = (
            MealDetail.objects.filter(meal__order_id=order_id, menu_item__isnull=False)
            .values("menu_item_id")
            .annotate(quantity=Count("id"))
            .order_by("menu_item_id")
        )
        return {row["menu_item_id"]: row["quantity"] for row in rows}

    @staticmethod
    def adjust_for_completed_order(order) -> InventoryAdjustment:
        """
        Decrement stock for every menu item consumed by a completed order.

        Each decrement is a guarded UPDATE (``stock >= quantity``), so stock
        never goes negative. When the guard fails the row is left untouched
        and the shortfall is logged and reported, or raised as
        InsufficientStockError when the policy is "reject". Items without an
        inventory row are skipped. Any touched item left under the reorder
        threshold gets ``reorder = True``.

        Must run inside the transaction that writes the completed status.
        """
        require_atomic("adjust_for_completed_order")

        policy = InventoryService.insufficient_stock_policy()
        threshold = InventoryService.reorder_threshold()
        adjustment = InventoryAdjustment(order_id=order.pk)
        now = timezone.now()

        # Sorted by menu item id so concurrent completions lock rows in the same order.
        for menu_item_id, quantity in InventoryService.consumed_quantities(order.pk).items():
            updated = InventoryItem.objects.filter(
                menu_item_id=menu_item_id, stock__gte=quantity
            ).update(stock=F("stock") - quantity, updated_at=now)

            if updated:
                adjustment.decremented[menu_item_id] = quantity
            else:
                available = (
                    InventoryItem.objects.filter(menu_item_id=menu_item_id)
                    .values_list("stock", flat=True)
                    .first()
                )
                if available is None:
                    logger.debug(
                        f"Menu item {menu_item_id} has no inventory row; skipping for order {order.pk}"
                    )
                    adjustment.untracked.append(menu_item_id)
                    continue

                adjustment.shortfalls.append(
                    StockShortfall(menu_item_id=menu_item_id, required=quantity, available=available)
                )
                logger.warning(
                    f"Insufficient stock for menu item {menu_item_id} on order {order.pk}: "
                    f"required {quantity}, available {available}; stock left unchanged"
                )

            flagged = InventoryItem.objects.filter(
                menu_item_id=menu_item_id, stock__lt=threshold
            ).update(reorder=True)
            if flagged:
                adjustment.flagged_for_reorder.append(menu_item_id)

        if adjustment.shortfalls and policy == INSUFFICIENT_STOCK_REJECT:
            raise InsufficientStockError(adjustment.shortfalls)

        logger.info(
            f"Inventory adjusted for order {order.pk}: {len(adjustment.decremented)} decremented, "
            f"{len(adjustment.shortfalls)} short, {len(adjustment.flagged_for_reorder)} flagged for reorder"
        )
        return adjustment

    # ------------------------------------------------------------------
    # Read projections
    # ------------------------------------------------------------------

    @staticmethod
    def get_low_stock_items():
        """Inventory rows currently flagged for reorder."""
        return InventoryItem.objects.filter(reorder=True).select_related("menu_item")

    @staticmethod
    def get_restock_report(threshold: int = None):
        """Inventory rows with stock under the restock report threshold."""
        if threshold is None:
            threshold = int(
                getattr(settings, "RESTOCK_REPORT_THRESHOLD", DEFAULT_RESTOCK_REPORT_THRESHOLD)
            )
        return (
            InventoryItem.objects.filter(stock__lt=threshold)
            .select_related("menu_item")
            .order_by("stock", "menu_item_id")
        )
