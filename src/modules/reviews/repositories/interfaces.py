"""Review repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from django.db import models

    from modules.reviews.models import Review


class IReviewRepository(IRepository["Review"]):
    @abstractmethod
    def exists_for(self, reviewer_id: Any, listing_id: Any) -> bool: ...

    @abstractmethod
    def list_for_listing(self, listing_id: Any) -> models.QuerySet:
        """Reviews of a listing, oldest first."""
