"""
Inventory exceptions.
"""


class InventoryError(Exception):
    """Base exception for inventory errors."""
    pass


class InsufficientStockError(InventoryError):
    """Raised when completing an order would need more stock than is on hand."""

    def __init__(self, shortfalls, message=None):
        self.shortfalls = shortfalls
        if message is None:
            details = ", ".join(
                f"menu item {s.menu_item_id} (required {s.required}, available {s.available})"
                for s in shortfalls
            )
            message = f"Insufficient stock for {details}"
        super().__init__(message)
