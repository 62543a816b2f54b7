"""Listing service layer (Use Cases).

Rules enforced here:
- only sellers and admins publish; the caller becomes the seller;
- only the owning seller or an admin edits or deletes a listing;
- the price of a sold listing is frozen;
- public reads only see ``active`` listings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import structlog
from django.db import models, transaction

from modules.listings.exceptions import (
    ListingCategoryNotFound,
    ListingNotFound,
    ListingPermissionDenied,
    ListingPriceLocked,
)
from modules.listings.models import Listing

if TYPE_CHECKING:
    from uuid import UUID

    from modules.categories.repositories.interfaces import ICategoryRepository
    from modules.listings.dtos import CreateListingDTO, UpdateListingDTO
    from modules.listings.repositories.interfaces import IListingRepository
    from modules.users.actor import Actor

logger = structlog.get_logger(__name__)


class ListingService:
    def __init__(
        self,
        listing_repository: IListingRepository,
        category_repository: ICategoryRepository,
    ) -> None:
        self._repo = listing_repository
        self._category_repo = category_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_listing(self, dto: CreateListingDTO, actor: Actor) -> Listing:
        """Raises ``ListingCategoryNotFound`` for an unknown category."""
        self._ensure_category(dto.category_id)

        listing = Listing(
            title=dto.title,
            description=dto.description,
            price=dto.price,
            image_url=dto.image_url,
            category_id=dto.category_id,
            seller_id=actor.id,
        )
        listing = self._repo.save(listing)
        logger.info(
            "listing.created", listing_id=str(listing.id), seller_id=str(actor.id)
        )
        return listing

    @transaction.atomic
    def update_listing(self, id: Any, dto: UpdateListingDTO, actor: Actor) -> Listing:
        """Apply a partial update.

        Raises:
            ListingNotFound: listing missing or deleted.
            ListingPermissionDenied: caller neither owns it nor is admin.
            ListingPriceLocked: price change requested on a sold listing.
            ListingCategoryNotFound: unknown ``category_id``.
        """
        listing = self._get_owned(id, actor)
        log = logger.bind(listing_id=str(listing.id), actor_id=str(actor.id))

        if dto.price is not None and listing.is_sold and dto.price != listing.price:
            log.warning("listing.price_locked")
            raise ListingPriceLocked("Cannot change the price of a sold listing.")

        if "category_id" in dto.model_fields_set:
            self._ensure_category(dto.category_id)
            listing.category_id = dto.category_id
        if "image_url" in dto.model_fields_set:
            listing.image_url = dto.image_url
        for field in ("title", "description", "price", "status"):
            value = getattr(dto, field)
            if value is not None:
                setattr(listing, field, value)

        listing = self._repo.save(listing)
        log.info("listing.updated", fields=sorted(dto.model_fields_set))
        return listing

    @transaction.atomic
    def delete_listing(self, id: Any, actor: Actor) -> None:
        listing = self._get_owned(id, actor)
        self._repo.delete(listing.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_active_listing(self, id: Any) -> Listing:
        listing = self._repo.get_active(id)
        if not listing:
            raise ListingNotFound(f"Listing {id} not found.")
        return listing

    def list_listings(self) -> models.QuerySet:
        return self._repo.list()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned(self, id: Any, actor: Actor) -> Listing:
        listing = self._repo.get_by_id(id)
        if not listing:
            raise ListingNotFound(f"Listing {id} not found.")
        if not actor.is_admin and listing.seller_id != actor.id:
            logger.warning(
                "listing.permission_denied",
                listing_id=str(listing.id),
                actor_id=str(actor.id),
            )
            raise ListingPermissionDenied("Forbidden")
        return listing

    def _ensure_category(self, category_id: Optional[UUID]) -> None:
        if category_id is not None and not self._category_repo.get_by_id(category_id):
            raise ListingCategoryNotFound(f"Category {category_id} not found.")
