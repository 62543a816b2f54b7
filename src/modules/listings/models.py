"""Listing model.

- ``status`` moves to ``sold`` only through an approved order (see
  ``ListingDjangoRepository.mark_sold``); sellers may otherwise toggle
  it freely with a regular update.
- ``price`` is frozen while the listing is sold.
- Soft delete via ``deleted_at`` keeps order items pointing at a row.
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import SoftDeleteModel
from modules.listings.constants import ListingStatus


class Listing(SoftDeleteModel):
    title = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    image_url = models.URLField(max_length=500, blank=True, null=True)  # noqa: DJ01
    status = models.CharField(
        max_length=10,
        choices=ListingStatus.choices,
        default=ListingStatus.ACTIVE,
    )
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="listings",
    )
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="listings",
    )

    class Meta:
        db_table = "listings"
        ordering = ["-created_at"]
        indexes = [
            models.Index(
                fields=["status", "-created_at"],
                name="listings_status_created_idx",
            ),
            models.Index(fields=["seller"], name="listings_seller_idx"),
            models.Index(fields=["price"], name="listings_price_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="listings_price_non_negative",
            ),
        ]

    @property
    def is_sold(self) -> bool:
        return self.status == ListingStatus.SOLD

    def __str__(self) -> str:
        return f"{self.title} ({self.status})"
