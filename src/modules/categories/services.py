"""Category service layer. Slugs are unique across all categories."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import models, transaction

from modules.categories.exceptions import CategoryNotFound, CategorySlugConflict
from modules.categories.models import Category

if TYPE_CHECKING:
    from modules.categories.dtos import CreateCategoryDTO, UpdateCategoryDTO
    from modules.categories.repositories.interfaces import ICategoryRepository

logger = structlog.get_logger(__name__)


class CategoryService:
    def __init__(self, repository: ICategoryRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_category(self, dto: CreateCategoryDTO) -> Category:
        """Raises ``CategorySlugConflict`` when the slug is taken."""
        if self._repo.get_by_slug(dto.slug):
            logger.warning("category.duplicate_slug", slug=dto.slug)
            raise CategorySlugConflict("A category with that slug already exists.")

        category = Category(name=dto.name, slug=dto.slug, description=dto.description)
        category = self._repo.save(category)
        logger.info("category.created", category_id=str(category.id), slug=dto.slug)
        return category

    @transaction.atomic
    def update_category(self, id: Any, dto: UpdateCategoryDTO) -> Category:
        """Raises ``CategoryNotFound`` or ``CategorySlugConflict``."""
        category = self.get_category(id)
        log = logger.bind(category_id=str(category.id))

        if dto.slug is not None and dto.slug != category.slug:
            conflict = self._repo.get_by_slug(dto.slug)
            if conflict and conflict.id != category.id:
                log.warning("category.duplicate_slug", slug=dto.slug)
                raise CategorySlugConflict(
                    "A category with that slug already exists."
                )

        for field in ("name", "slug"):
            value = getattr(dto, field)
            if value is not None:
                setattr(category, field, value)
        if "description" in dto.model_fields_set:
            category.description = dto.description

        category = self._repo.save(category)
        log.info("category.updated")
        return category

    @transaction.atomic
    def delete_category(self, id: Any) -> None:
        if not self._repo.delete(id):
            raise CategoryNotFound(f"Category {id} not found.")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_category(self, id: Any) -> Category:
        category = self._repo.get_by_id(id)
        if not category:
            raise CategoryNotFound(f"Category {id} not found.")
        return category

    def list_categories(self) -> models.QuerySet:
        return self._repo.list()
