"""Generic repository contract.

Every bounded context declares its own ``I<Aggregate>Repository`` on top
of ``IRepository[T]``. Services depend on those abstractions and receive
the Django implementation through their constructor, so unit tests can
swap in stubs without a database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar

from django.db import models

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base contract; ``T`` is the model the repository manages."""

    @abstractmethod
    def get_by_id(self, id: Any) -> Optional[T]:
        """Return the entity or ``None`` when it does not exist."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        """Lazy queryset so views can filter and paginate on top of it."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, id: Any) -> bool:
        """Remove an entity; ``False`` when nothing matched."""
