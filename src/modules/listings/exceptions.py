"""Listing domain exceptions."""

from __future__ import annotations


class ListingNotFound(Exception):
    """The listing does not exist, is deleted, or is not visible to the caller."""


class ListingPermissionDenied(Exception):
    """Only the seller who owns a listing, or an admin, may change it."""


class ListingPriceLocked(Exception):
    """The price of a sold listing cannot change."""


class ListingCategoryNotFound(Exception):
    """The category referenced by a listing does not exist."""
