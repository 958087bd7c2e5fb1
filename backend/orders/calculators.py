"""
Pricing Calculator.

Pure pricing of order items against a catalog snapshot:

    total = sum(meal type base price) + sum(upcharge of every referenced item)

Arithmetic is done in integer cents. A reference missing from the snapshot
prices at zero; rejecting unknown references is the caller's decision.

Usage:
    snapshot = CatalogService.load_snapshot()
    calculator = PricingCalculator(snapshot)
    total = calculator.calculate_total(items)

    # Re-derive the pre-discount price of a persisted order
    PricingCalculator(snapshot).calculate_total(OrderItemSelection.from_order(order))
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Iterator, List, Optional, Tuple

from core_backend.utils.money import from_minor
from menu.services import CatalogSnapshot


@dataclass(frozen=True)
class OrderItemSelection:
    """One meal-type selection and the menu items chosen for it."""

    meal_type_id: int
    entree_ids: Tuple[int, ...] = field(default_factory=tuple)
    side_ids: Tuple[int, ...] = field(default_factory=tuple)
    drink_id: Optional[int] = None

    def menu_item_refs(self) -> Iterator[Tuple[str, int]]:
        """Yield (role, menu_item_id) in insertion order: entrees, sides, drink."""
        for entree_id in self.entree_ids:
            yield "entree", entree_id
        for side_id in self.side_ids:
            yield "side", side_id
        if self.drink_id is not None:
            yield "drink", self.drink_id

    @classmethod
    def from_meal(cls, meal) -> "OrderItemSelection":
        entrees, sides, drink = [], [], None
        for detail in meal.details.all():
            if detail.role == "entree":
                entrees.append(detail.menu_item_id)
            elif detail.role == "side":
                sides.append(detail.menu_item_id)
            elif detail.role == "drink":
                drink = detail.menu_item_id
        return cls(
            meal_type_id=meal.meal_type_id,
            entree_ids=tuple(entrees),
            side_ids=tuple(sides),
            drink_id=drink,
        )

    @classmethod
    def from_order(cls, order) -> List["OrderItemSelection"]:
        meals = order.meals.prefetch_related("details").order_by("id")
        return [cls.from_meal(meal) for meal in meals]


class PricingCalculator:

    def __init__(self, snapshot: CatalogSnapshot):
        self.snapshot = snapshot

    def item_total_minor(self, item: OrderItemSelection) -> int:
        total = self.snapshot.meal_type_price(item.meal_type_id)
        for _role, menu_item_id in item.menu_item_refs():
            total += self.snapshot.upcharge(menu_item_id)
        return total

    def total_minor(self, items: Iterable[OrderItemSelection]) -> int:
        return sum((self.item_total_minor(item) for item in items), 0)

    def calculate_total(self, items: Iterable[OrderItemSelection]) -> Decimal:
        """Total price as a two-decimal Decimal."""
        return from_minor(self.total_minor(items))
