"""Order service layer (Use Cases).

Order creation, reads scoped to the caller, and the single authority
over status changes (``transition_status``):

- admin: any status, written unconditionally;
- seller: only ``approved``/``rejected``, only from ``pending``, only on
  orders holding at least one of their listings. Approval marks exactly
  those listings as sold;
- buyer: never.

Every write of a transition runs in one transaction with the order row
locked, so a failure at any step leaves nothing behind.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Set
from uuid import UUID

import structlog
from django.db import models, transaction

from modules.orders.constants import (
    SELLER_DECIDABLE_STATUS,
    SELLER_DECISIONS,
    OrderStatus,
)
from modules.orders.events import ListingsSold, OrderPlaced, OrderStatusChanged
from modules.orders.exceptions import (
    CannotBuyOwnListing,
    InvalidOrderStatus,
    InvalidStatusValue,
    ListingUnavailable,
    OrderAccessDenied,
    OrderNotFound,
    TransitionForbidden,
    UnknownActorRole,
)
from modules.users.constants import UserRole

if TYPE_CHECKING:
    from modules.listings.repositories.interfaces import IListingRepository
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.users.actor import Actor
    from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


def seller_scoped_listing_ids(
    order_listing_ids: Iterable[UUID], seller_listing_ids: Iterable[UUID]
) -> Set[UUID]:
    """Listings of an order that belong to the seller.

    Only these are marked sold when the seller approves; other sellers'
    listings in the same order are untouched.
    """
    return set(order_listing_ids) & set(seller_listing_ids)


class OrderService:
    """Application service for Order use-cases.

    Receives repositories via constructor injection.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        listing_repository: IListingRepository,
    ) -> None:
        self._order_repo = order_repository
        self._listing_repo = listing_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Place an order in ``pending`` with price snapshots.

        Listings are row-locked while their prices are read.

        Raises:
            ListingUnavailable: a listing is missing, deleted or not active.
            CannotBuyOwnListing: the buyer is the seller of a listing.
        """
        log = logger.bind(buyer_id=str(dto.buyer_id), item_count=len(dto.items))
        log.info("order.creation_started")

        listings = self._listing_repo.get_active_by_ids(
            item.listing_id for item in dto.items
        )

        repo_items = []
        for item_dto in dto.items:
            listing = listings.get(item_dto.listing_id)
            if listing is None:
                log.warning(
                    "order.listing_unavailable", listing_id=str(item_dto.listing_id)
                )
                raise ListingUnavailable(
                    f"Listing {item_dto.listing_id} not found or not active."
                )
            if listing.seller_id == dto.buyer_id:
                raise CannotBuyOwnListing("You cannot order your own listing.")
            repo_items.append(
                {
                    "listing_id": listing.id,
                    "quantity": item_dto.quantity,
                    "price_at_purchase": listing.price,
                }
            )

        order = self._order_repo.create(buyer_id=dto.buyer_id, items=repo_items)
        order.add_domain_event(
            OrderPlaced(
                aggregate_id=order.id,
                buyer_id=str(dto.buyer_id),
                total_price=str(order.total_price),
            )
        )
        self._order_repo.save(order)
        self._order_repo.add_history(
            order_id=order.id,
            new_status=OrderStatus.PENDING,
            user_id=dto.buyer_id,
            notes="Order created",
        )

        log.info(
            "order.created",
            order_id=str(order.id),
            total_price=str(order.total_price),
        )
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def transition_status(
        self,
        order_id: Any,
        requested_status: str,
        actor: Actor,
        notes: str = "",
    ) -> Order:
        """Apply a status change on behalf of *actor*.

        Raises:
            InvalidStatusValue: ``requested_status`` is not an order status.
            OrderNotFound: the order does not exist.
            TransitionForbidden: the role, target or ownership forbids it.
            InvalidOrderStatus: a seller decision on a non-pending order.
            UnknownActorRole: the actor's role is not recognised.
        """
        if requested_status not in OrderStatus.values:
            raise InvalidStatusValue(
                f"status must be one of: {', '.join(OrderStatus.values)}"
            )

        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")

        log = logger.bind(
            order_id=str(order.id),
            actor_id=str(actor.id),
            actor_role=actor.role,
            current_status=order.status,
            requested_status=requested_status,
        )

        if actor.role == UserRole.ADMIN:
            self._write_transition(order, requested_status, actor, notes)
        elif actor.role == UserRole.SELLER:
            self._apply_seller_decision(order, requested_status, actor, notes, log)
        elif actor.role == UserRole.BUYER:
            log.warning("order.transition_forbidden", reason="buyer")
            raise TransitionForbidden("Buyers cannot change order status.")
        else:
            raise UnknownActorRole(f"Unknown role {actor.role!r}.")

        log.info("order.status_transitioned")
        return self._order_repo.get_by_id(order.id) or order

    @transaction.atomic
    def delete_order(self, order_id: Any) -> None:
        """Hard delete. Raises ``OrderNotFound``."""
        if not self._order_repo.delete(order_id):
            raise OrderNotFound(f"Order {order_id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: Any, actor: Actor) -> Order:
        """Raises ``OrderNotFound``, or ``OrderAccessDenied`` unless the
        caller is the buyer or an admin."""
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        if not actor.is_admin and order.buyer_id != actor.id:
            raise OrderAccessDenied("Forbidden")
        return order

    def list_orders(self, actor: Actor) -> models.QuerySet:
        """All orders for an admin, own orders for a buyer."""
        if actor.is_admin:
            return self._order_repo.list()
        if actor.is_buyer:
            return self._order_repo.list({"buyer_id": actor.id})
        raise OrderAccessDenied("Forbidden")

    def list_seller_orders(self, actor: Actor) -> models.QuerySet:
        """Orders containing the caller's listings, newest first."""
        return self._order_repo.list_for_seller(actor.id)

    # ------------------------------------------------------------------
    # Transition helpers
    # ------------------------------------------------------------------

    def _apply_seller_decision(
        self,
        order: Order,
        requested_status: str,
        actor: Actor,
        notes: str,
        log: Any,
    ) -> None:
        if requested_status not in SELLER_DECISIONS:
            log.warning("order.transition_forbidden", reason="seller_target")
            raise TransitionForbidden("Sellers may only approve or reject orders.")

        if order.status != SELLER_DECIDABLE_STATUS:
            log.warning("order.invalid_transition")
            raise InvalidOrderStatus(
                f"Order is {order.status}; only pending orders can be "
                "approved or rejected."
            )

        order_listing_ids = [
            item.listing_id for item in self._order_repo.items(order.id)
        ]
        owned = seller_scoped_listing_ids(
            order_listing_ids, self._listing_repo.get_ids_owned_by(actor.id)
        )
        if not owned:
            log.warning("order.transition_forbidden", reason="not_seller_of_order")
            raise TransitionForbidden("This order contains none of your listings.")

        extra_events = []
        if requested_status == OrderStatus.APPROVED:
            extra_events.append(
                ListingsSold(
                    aggregate_id=order.id,
                    seller_id=str(actor.id),
                    listing_ids=tuple(sorted(str(i) for i in owned)),
                )
            )

        self._write_transition(order, requested_status, actor, notes, extra_events)

        if requested_status == OrderStatus.APPROVED:
            sold = self._listing_repo.mark_sold(owned)
            log.info("order.listings_sold", listing_count=len(owned), updated=sold)

    def _write_transition(
        self,
        order: Order,
        new_status: str,
        actor: Actor,
        notes: str,
        extra_events: Iterable[DomainEvent] = (),
    ) -> None:
        old_status = order.status
        order.add_domain_event(
            OrderStatusChanged(
                aggregate_id=order.id,
                old_status=old_status,
                new_status=new_status,
                actor_id=str(actor.id),
                actor_role=str(actor.role),
            )
        )
        for event in extra_events:
            order.add_domain_event(event)

        self._order_repo.set_status(order, new_status)
        self._order_repo.add_history(
            order_id=order.id,
            new_status=new_status,
            old_status=old_status,
            user_id=actor.id,
            notes=notes,
        )
