"""
Order engine exceptions.
"""


class OrderError(Exception):
    """Base exception for order errors."""
    pass


class EmptyOrderError(OrderError):
    """Raised when an order is submitted without any order items."""

    def __init__(self, message="Order items are required"):
        super().__init__(message)


class UnknownMealTypeError(OrderError):
    """Raised when an order item references a meal type missing from the catalog."""

    def __init__(self, meal_type_id, message=None):
        self.meal_type_id = meal_type_id
        if message is None:
            message = f"Unknown meal type '{meal_type_id}'"
        super().__init__(message)


class UnknownMenuItemError(OrderError):
    """Raised when an entree, side or drink references a menu item missing from the catalog."""

    def __init__(self, menu_item_id, role=None, message=None):
        self.menu_item_id = menu_item_id
        self.role = role
        if message is None:
            role_info = f" for {role}" if role else ""
            message = f"Unknown menu item '{menu_item_id}'{role_info}"
        super().__init__(message)


class OrderNotFoundError(OrderError):
    """Raised when an order id does not exist."""

    def __init__(self, order_id, message=None):
        self.order_id = order_id
        if message is None:
            message = f"Order '{order_id}' not found"
        super().__init__(message)


class InvalidOrderStatusError(OrderError):
    """Raised when a status value is not one of the known order statuses."""

    def __init__(self, status, message=None):
        self.status = status
        if message is None:
            message = f"'{status}' is not a valid order status"
        super().__init__(message)


class InvalidStatusTransitionError(OrderError):
    """Raised when a status change is not allowed from the order's current status."""

    def __init__(self, current_status, new_status, message=None):
        self.current_status = current_status
        self.new_status = new_status
        if message is None:
            message = f"Cannot transition order from {current_status} to {new_status}"
        super().__init__(message)
