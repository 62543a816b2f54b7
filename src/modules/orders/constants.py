"""Order domain constants.

There is no transition table: admins may write any status, and a seller
may only decide (approve or reject) an order that is still pending.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"
    PAID = "paid", "Paid"
    SHIPPED = "shipped", "Shipped"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"


SELLER_DECISIONS: frozenset[str] = frozenset({OrderStatus.APPROVED, OrderStatus.REJECTED})

# The only status a seller decision can be taken from.
SELLER_DECIDABLE_STATUS = OrderStatus.PENDING

OUTBOX_TOPIC = "orders"
