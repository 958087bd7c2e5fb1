"""
Order lifecycle signals.

Both are sent from ``transaction.on_commit`` so receivers (audit logging,
dashboards, notifications) only ever hear about committed state.

    order_created(sender=Order, order=Order, points_earned=int)
    order_status_changed(sender=Order, order=Order, previous_status=str,
                         new_status=str, inventory=InventoryAdjustment | None)
"""
from django.dispatch import Signal

order_created = Signal()
order_status_changed = Signal()
