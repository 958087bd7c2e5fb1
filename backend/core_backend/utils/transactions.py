"""
Transaction boundary helpers.

Balance and stock mutations must only ever happen inside the unit of work of
the order operation that owns them. Services that mutate shared rows call
``require_atomic`` first; only the order services open ``transaction.atomic``.
"""
from django.db import DEFAULT_DB_ALIAS, transaction


class TransactionRequiredError(RuntimeError):
    """Raised when a mutating operation is invoked outside an atomic block."""

    def __init__(self, operation, message=None):
        self.operation = operation
        if message is None:
            message = f"'{operation}' must run inside the owning order transaction"
        super().__init__(message)


def require_atomic(operation: str, using: str = DEFAULT_DB_ALIAS) -> None:
    """Raise TransactionRequiredError unless the connection is in an atomic block."""
    if not transaction.get_connection(using).in_atomic_block:
        raise TransactionRequiredError(operation)
