"""
Rewards ledger exceptions.
"""


class RewardsError(Exception):
    """Base exception for rewards-related errors."""
    pass


class CustomerNotFoundError(RewardsError):
    """Raised when the customer referenced by an order does not exist."""

    def __init__(self, customer_id, message=None):
        self.customer_id = customer_id
        if message is None:
            message = f"Customer '{customer_id}' not found"
        super().__init__(message)


class InsufficientPointsError(RewardsError):
    """Raised when a redemption asks for more points than the balance holds."""

    def __init__(self, customer_id, requested, available, message=None):
        self.customer_id = customer_id
        self.requested = requested
        self.available = available
        if message is None:
            message = (
                f"Insufficient rewards points: requested {requested}, available {available}"
            )
        super().__init__(message)


class InvalidPointsError(RewardsError):
    """Raised when a points amount is negative or not an integer."""

    def __init__(self, points, message=None):
        self.points = points
        if message is None:
            message = f"Invalid points amount: {points!r}"
        super().__init__(message)
