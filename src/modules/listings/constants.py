"""Listing domain constants."""

from django.db import models


class ListingStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    SOLD = "sold", "Sold"
    REMOVED = "removed", "Removed"


class ListingSort(models.TextChoices):
    NEWEST = "newest", "Newest first"
    OLDEST = "oldest", "Oldest first"
    PRICE_ASC = "price_asc", "Price, low to high"
    PRICE_DESC = "price_desc", "Price, high to low"


SORT_ORDERING: dict[str, tuple[str, ...]] = {
    ListingSort.NEWEST: ("-created_at", "-id"),
    ListingSort.OLDEST: ("created_at", "id"),
    ListingSort.PRICE_ASC: ("price", "-created_at"),
    ListingSort.PRICE_DESC: ("-price", "-created_at"),
}
