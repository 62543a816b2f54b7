"""Django ORM implementation of the Review repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.reviews.models import Review
from modules.reviews.repositories.interfaces import IReviewRepository

logger = structlog.get_logger(__name__)


class ReviewDjangoRepository(IReviewRepository):
    def get_by_id(self, id: Any) -> Optional[Review]:
        try:
            return Review.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def exists_for(self, reviewer_id: Any, listing_id: Any) -> bool:
        return Review.objects.filter(
            reviewer_id=reviewer_id, listing_id=listing_id
        ).exists()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Review.objects.select_related("reviewer")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def list_for_listing(self, listing_id: Any) -> models.QuerySet:
        return self.list({"listing_id": listing_id}).order_by("created_at", "id")

    @transaction.atomic
    def save(self, entity: Review) -> Review:
        entity.save()
        logger.info("review.saved", review_id=str(entity.id))
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        review = self.get_by_id(id)
        if not review:
            return False
        review.delete()
        logger.info("review.deleted", review_id=str(id))
        return True
