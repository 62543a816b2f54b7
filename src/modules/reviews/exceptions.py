"""Review domain exceptions."""

from __future__ import annotations


class ReviewNotFound(Exception):
    pass


class ReviewListingNotFound(Exception):
    """The reviewed listing does not exist or was deleted."""


class ReviewAlreadyExists(Exception):
    """The reviewer has already reviewed this listing."""


class ReviewPermissionDenied(Exception):
    """Only the reviewer or an admin may delete a review."""
