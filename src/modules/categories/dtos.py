"""Category DTOs (frozen Pydantic v2 contracts for ``CategoryService``)."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


def _non_blank(value: Optional[str], field: str) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError(f"{field} must be a non-empty string")
    return value.strip() if value is not None else value


class CreateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _non_blank(v, "name")

    @field_validator("slug")
    @classmethod
    def slug_not_blank(cls, v: str) -> str:
        return _non_blank(v, "slug")


class UpdateCategoryDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _non_blank(v, "name")

    @field_validator("slug")
    @classmethod
    def slug_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _non_blank(v, "slug")

    @model_validator(mode="after")
    def at_least_one_field(self) -> UpdateCategoryDTO:
        if not self.model_fields_set:
            raise ValueError("No updatable fields provided")
        return self
