"""Order repository interface.

Extends ``IRepository[Order]`` with what the Order aggregate needs:
atomic creation with items, a row-locked read for transitions, a raw
status write, the audit trail and the seller-side view.

``set_status`` performs no validation; the rules live in
``OrderService.transition_status``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence
from uuid import UUID

from django.db import models

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem, OrderStatusHistory


class IOrderRepository(IRepository["Order"]):
    @abstractmethod
    def create(self, buyer_id: UUID, items: Sequence[Dict[str, Any]]) -> Order:
        """Create an order and its items; ``total_price`` is set here, once.

        Each item dict carries ``listing_id``, ``quantity`` and
        ``price_at_purchase``.
        """

    @abstractmethod
    def get_for_update(self, id: Any) -> Optional[Order]:
        """Load an order under ``SELECT ... FOR UPDATE``."""

    @abstractmethod
    def items(self, order_id: UUID) -> List[OrderItem]:
        """Items of an order in creation order."""

    @abstractmethod
    def set_status(self, order: Order, new_status: str) -> Order:
        """Write ``status`` (plus pending domain events) without validation."""

    @abstractmethod
    def add_history(
        self,
        order_id: UUID,
        new_status: str,
        old_status: Optional[str] = None,
        user_id: Optional[UUID] = None,
        notes: str = "",
    ) -> OrderStatusHistory:
        """Append a status change to the audit trail."""

    @abstractmethod
    def list_for_seller(self, seller_id: UUID) -> models.QuerySet:
        """Orders holding at least one of the seller's listings.

        Each order exposes only that seller's items as ``seller_items``.
        """
