"""Listing repository interface.

Besides the usual CRUD contract this is the only place allowed to move
listings to ``sold`` (``mark_sold``), which the order workflow calls
when a seller approves an order.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Iterable, Optional, Set
from uuid import UUID

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.listings.models import Listing


class IListingRepository(IRepository["Listing"]):
    @abstractmethod
    def get_active(self, id: Any) -> Optional[Listing]:
        """Non-deleted listing with status ``active``."""

    @abstractmethod
    def get_active_by_ids(self, ids: Iterable[UUID]) -> Dict[UUID, Listing]:
        """Active listings among *ids*, row-locked, keyed by id."""

    @abstractmethod
    def get_ids_owned_by(self, seller_id: UUID) -> Set[UUID]:
        """Ids of every listing whose seller is *seller_id*."""

    @abstractmethod
    def mark_sold(self, listing_ids: Iterable[UUID]) -> int:
        """Set status ``sold`` on *listing_ids*; returns rows changed.

        Idempotent: listings already sold are left alone.
        """
