"""Django ORM implementation of the Category repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.categories.models import Category
from modules.categories.repositories.interfaces import ICategoryRepository

logger = structlog.get_logger(__name__)


class CategoryDjangoRepository(ICategoryRepository):
    def get_by_id(self, id: Any) -> Optional[Category]:
        try:
            return Category.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_slug(self, slug: str) -> Optional[Category]:
        return Category.objects.filter(slug=slug).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = Category.objects.order_by("name")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def save(self, entity: Category) -> Category:
        is_new = entity._state.adding
        entity.save()
        logger.info("category.saved", category_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        """Hard delete; listings in the category keep a NULL category."""
        category = self.get_by_id(id)
        if not category:
            return False
        category.delete()
        logger.info("category.deleted", category_id=str(id))
        return True
