"""Review model. One review per reviewer per listing."""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.reviews.constants import MAX_RATING, MIN_RATING


class Review(BaseModel):
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)],
    )
    comment = models.TextField(blank=True, null=True)  # noqa: DJ01
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reviews",
    )
    listing = models.ForeignKey(
        "listings.Listing",
        on_delete=models.CASCADE,
        related_name="reviews",
    )

    class Meta:
        db_table = "reviews"
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["listing", "created_at"], name="reviews_listing_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=MIN_RATING, rating__lte=MAX_RATING),
                name="reviews_rating_range",
            ),
            models.UniqueConstraint(
                fields=["reviewer", "listing"],
                name="reviews_unique_reviewer_listing",
            ),
        ]

    def __str__(self) -> str:
        return f"Review {self.rating}/{MAX_RATING} on {self.listing_id}"
