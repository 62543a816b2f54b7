"""Domain events for the Orders bounded context.

Fields carry defaults because ``DomainEvent`` already declares
defaulted fields; values are plain strings so payloads stay JSON-safe.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from shared.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderPlaced(DomainEvent):
    """A buyer placed an order."""

    buyer_id: str = ""
    total_price: str = ""


@dataclass(frozen=True)
class OrderStatusChanged(DomainEvent):
    """An order status was written by a seller or an admin."""

    old_status: str = ""
    new_status: str = ""
    actor_id: str = ""
    actor_role: str = ""


@dataclass(frozen=True)
class ListingsSold(DomainEvent):
    """A seller approval moved the seller's listings in the order to sold."""

    seller_id: str = ""
    listing_ids: Tuple[str, ...] = ()
