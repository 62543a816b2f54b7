"""Review service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import IntegrityError, models, transaction

from modules.reviews.exceptions import (
    ReviewAlreadyExists,
    ReviewListingNotFound,
    ReviewNotFound,
    ReviewPermissionDenied,
)
from modules.reviews.models import Review

if TYPE_CHECKING:
    from modules.listings.repositories.interfaces import IListingRepository
    from modules.reviews.dtos import CreateReviewDTO
    from modules.reviews.repositories.interfaces import IReviewRepository
    from modules.users.actor import Actor

logger = structlog.get_logger(__name__)


class ReviewService:
    def __init__(
        self,
        review_repository: IReviewRepository,
        listing_repository: IListingRepository,
    ) -> None:
        self._repo = review_repository
        self._listing_repo = listing_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_review(self, dto: CreateReviewDTO, actor: Actor) -> Review:
        """Raises ``ReviewListingNotFound`` or ``ReviewAlreadyExists``."""
        if not self._listing_repo.get_by_id(dto.listing_id):
            raise ReviewListingNotFound(f"Listing {dto.listing_id} not found.")
        if self._repo.exists_for(actor.id, dto.listing_id):
            raise ReviewAlreadyExists("You have already reviewed this listing.")

        review = Review(
            listing_id=dto.listing_id,
            reviewer_id=actor.id,
            rating=dto.rating,
            comment=dto.comment,
        )
        try:
            with transaction.atomic():
                review = self._repo.save(review)
        except IntegrityError as exc:
            # concurrent duplicate caught by the unique constraint
            raise ReviewAlreadyExists(
                "You have already reviewed this listing."
            ) from exc

        logger.info(
            "review.created",
            review_id=str(review.id),
            listing_id=str(dto.listing_id),
            rating=dto.rating,
        )
        return review

    @transaction.atomic
    def delete_review(self, id: Any, actor: Actor) -> None:
        review = self._repo.get_by_id(id)
        if not review:
            raise ReviewNotFound(f"Review {id} not found.")
        if not actor.is_admin and review.reviewer_id != actor.id:
            raise ReviewPermissionDenied("Forbidden")
        self._repo.delete(review.id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_reviews(self, listing_id: Any) -> models.QuerySet:
        if not self._listing_repo.get_by_id(listing_id):
            raise ReviewListingNotFound(f"Listing {listing_id} not found.")
        return self._repo.list_for_listing(listing_id)
