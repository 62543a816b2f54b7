"""Event handlers for Orders domain events."""

from __future__ import annotations

import structlog

from modules.orders.events import ListingsSold, OrderPlaced, OrderStatusChanged
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class OrderPlacedHandler(IEventHandler[OrderPlaced]):
    def handle(self, event: OrderPlaced) -> None:
        logger.info(
            "order.placed.handled",
            order_id=str(event.aggregate_id),
            buyer_id=event.buyer_id,
            total_price=event.total_price,
        )


class OrderStatusChangedHandler(IEventHandler[OrderStatusChanged]):
    def handle(self, event: OrderStatusChanged) -> None:
        logger.info(
            "order.status_changed.handled",
            order_id=str(event.aggregate_id),
            old_status=event.old_status,
            new_status=event.new_status,
            actor_role=event.actor_role,
        )


class ListingsSoldHandler(IEventHandler[ListingsSold]):
    def handle(self, event: ListingsSold) -> None:
        logger.info(
            "order.listings_sold.handled",
            order_id=str(event.aggregate_id),
            seller_id=event.seller_id,
            listing_count=len(event.listing_ids),
        )


order_placed_handler = OrderPlacedHandler()
order_status_changed_handler = OrderStatusChangedHandler()
listings_sold_handler = ListingsSoldHandler()
