from __future__ import annotations

from django.db import models

from modules.core.models import BaseModel


class Category(BaseModel):
    """Listing category. Deleting one leaves its listings uncategorised."""

    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=100, unique=True)
    description = models.TextField(blank=True, null=True)  # noqa: DJ01

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name
