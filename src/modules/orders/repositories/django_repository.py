"""Django ORM implementation of the Order repository.

Concurrency control on status changes uses ``select_for_update()``;
the order row lock serializes concurrent transitions, so there is no
``version`` column.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.core.outbox import record_domain_events
from modules.orders.constants import OUTBOX_TOPIC
from modules.orders.models import Order, OrderItem, OrderStatusHistory
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _with_relations(self) -> models.QuerySet:
        return Order.objects.select_related("buyer").prefetch_related(
            "items__listing", "status_history"
        )

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, buyer_id: UUID, items: Sequence[Dict[str, Any]]) -> Order:
        order = Order(buyer_id=buyer_id)
        order.save()

        total = Decimal("0.00")
        for item_data in items:
            item = OrderItem.objects.create(
                order=order,
                listing_id=item_data["listing_id"],
                quantity=item_data["quantity"],
                price_at_purchase=item_data["price_at_purchase"],
            )
            total += item.subtotal

        order.total_price = total
        order.save(update_fields=["total_price"])

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            item_count=len(items),
            total_price=str(total),
        )
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: Any) -> Optional[Order]:
        """Order with buyer, items (with listing) and history eager-loaded.

        Returns ``None`` for non-existent or malformed IDs.
        """
        try:
            return self._with_relations().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: Any) -> Optional[Order]:
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def items(self, order_id: UUID) -> List[OrderItem]:
        return list(
            OrderItem.objects.filter(order_id=order_id).order_by("created_at", "id")
        )

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Order.objects.select_related("buyer").order_by("-created_at", "-id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_for_seller(self, seller_id: UUID) -> models.QuerySet:
        seller_items = (
            OrderItem.objects.filter(listing__seller_id=seller_id)
            .select_related("listing")
            .order_by("created_at", "id")
        )
        order_ids = OrderItem.objects.filter(listing__seller_id=seller_id).values(
            "order_id"
        )
        return (
            Order.objects.filter(id__in=order_ids)
            .select_related("buyer")
            .prefetch_related(
                models.Prefetch("items", queryset=seller_items, to_attr="seller_items")
            )
            .order_by("-created_at", "-id")
        )

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    @transaction.atomic
    def set_status(self, order: Order, new_status: str) -> Order:
        order.status = new_status
        order.save(update_fields=["status"])
        record_domain_events(order, topic=OUTBOX_TOPIC)
        return order

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist an order and move its pending events to the outbox."""
        entity.save()
        event_count = record_domain_events(entity, topic=OUTBOX_TOPIC)
        logger.info("order.saved", order_id=str(entity.id), event_count=event_count)
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        """Hard-delete an order; items and history cascade."""
        try:
            deleted, _ = Order.objects.filter(id=id).delete()
        except (ValueError, ValidationError):
            return False
        if deleted:
            logger.info("order.deleted", order_id=str(id))
        return bool(deleted)

    @transaction.atomic
    def add_history(
        self,
        order_id: UUID,
        new_status: str,
        old_status: Optional[str] = None,
        user_id: Optional[UUID] = None,
        notes: str = "",
    ) -> OrderStatusHistory:
        history = OrderStatusHistory.objects.create(
            order_id=order_id,
            old_status=old_status,
            new_status=new_status,
            user_id=user_id,
            notes=notes,
        )
        logger.info(
            "order.history_added",
            order_id=str(order_id),
            old_status=old_status,
            new_status=new_status,
        )
        return history
