"""Django ORM implementation of the Listing repository.

Read paths hide soft-deleted rows (``.alive()``).
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Set
from uuid import UUID

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.utils import timezone

from modules.listings.constants import ListingStatus
from modules.listings.models import Listing
from modules.listings.repositories.interfaces import IListingRepository

logger = structlog.get_logger(__name__)


class ListingDjangoRepository(IListingRepository):
    def _alive(self) -> models.QuerySet:
        return Listing.objects.alive().select_related("seller", "category")

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: Any) -> Optional[Listing]:
        """Returns ``None`` for missing, deleted or malformed IDs."""
        try:
            return self._alive().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_active(self, id: Any) -> Optional[Listing]:
        try:
            return self._alive().filter(id=id, status=ListingStatus.ACTIVE).first()
        except (ValueError, ValidationError):
            return None

    def get_active_by_ids(self, ids: Iterable[UUID]) -> Dict[UUID, Listing]:
        queryset = (
            Listing.objects.alive()
            .select_for_update()
            .filter(id__in=list(ids), status=ListingStatus.ACTIVE)
            .order_by("id")
        )
        return {listing.id: listing for listing in queryset}

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = self._alive()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Status store
    # ------------------------------------------------------------------

    def get_ids_owned_by(self, seller_id: UUID) -> Set[UUID]:
        return set(
            Listing.objects.filter(seller_id=seller_id).values_list("id", flat=True)
        )

    @transaction.atomic
    def mark_sold(self, listing_ids: Iterable[UUID]) -> int:
        ids = list(listing_ids)
        if not ids:
            return 0
        updated = (
            Listing.objects.filter(id__in=ids)
            .exclude(status=ListingStatus.SOLD)
            .update(status=ListingStatus.SOLD, updated_at=timezone.now())
        )
        logger.info(
            "listing.marked_sold",
            listing_ids=sorted(str(i) for i in ids),
            updated=updated,
        )
        return updated

    # ------------------------------------------------------------------
    # Save / Delete
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Listing) -> Listing:
        is_new = entity._state.adding
        entity.save()
        logger.info("listing.saved", listing_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        """Soft-delete a listing by ID."""
        listing = self.get_by_id(id)
        if not listing:
            return False
        listing.delete()
        logger.info("listing.soft_deleted", listing_id=str(id))
        return True
