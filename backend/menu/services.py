"""
Catalog Snapshot Reader.

Loads the current meal-type base prices and menu-item upcharges once per
order so pricing runs against a consistent, read-only view of the catalog.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional
import logging

from core_backend.utils.money import to_minor
from .models import MealType, MenuItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Prices keyed by catalog id, in minor units (cents)."""

    meal_type_prices: Dict[int, int] = field(default_factory=dict)
    item_upcharges: Dict[int, int] = field(default_factory=dict)

    def has_meal_type(self, meal_type_id) -> bool:
        return meal_type_id in self.meal_type_prices

    def has_menu_item(self, menu_item_id) -> bool:
        return menu_item_id in self.item_upcharges

    def meal_type_price(self, meal_type_id) -> int:
        """Base price of a meal type; unknown ids price at zero."""
        return self.meal_type_prices.get(meal_type_id, 0)

    def upcharge(self, menu_item_id) -> int:
        """Upcharge of a menu item; unknown ids price at zero."""
        return self.item_upcharges.get(menu_item_id, 0)


class CatalogService:

    @staticmethod
    def load_snapshot(
        meal_type_ids: Optional[Iterable[int]] = None,
        menu_item_ids: Optional[Iterable[int]] = None,
    ) -> CatalogSnapshot:
        """
        Read prices for the given ids (or the whole catalog when an id list is None).

        Must be called inside the order transaction so the snapshot and the
        rows written from it see the same catalog state.
        """
        meal_types = MealType.objects.all()
        if meal_type_ids is not None:
            meal_types = meal_types.filter(id__in=set(meal_type_ids))

        menu_items = MenuItem.objects.all()
        if menu_item_ids is not None:
            menu_items = menu_items.filter(id__in=set(menu_item_ids))

        snapshot = CatalogSnapshot(
            meal_type_prices={
                meal_type_id: to_minor(price)
                for meal_type_id, price in meal_types.values_list("id", "price")
            },
            item_upcharges={
                menu_item_id: to_minor(upcharge)
                for menu_item_id, upcharge in menu_items.values_list("id", "upcharge")
            },
        )
        logger.debug(
            f"Loaded catalog snapshot: {len(snapshot.meal_type_prices)} meal types, "
            f"{len(snapshot.item_upcharges)} menu items"
        )
        return snapshot
