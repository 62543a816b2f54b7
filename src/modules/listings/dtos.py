"""Listing DTOs for the Service Layer.

- ``CreateListingDTO``: seller publishes a listing.
- ``UpdateListingDTO``: partial update; fields left out are untouched.
  ``image_url`` and ``category_id`` may be cleared with ``null``, so
  their presence is read from ``model_fields_set``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional
from urllib.parse import urlparse
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from modules.listings.constants import ListingStatus


def _clean_text(value: Optional[str], field: str) -> Optional[str]:
    if value is None:
        return value
    if not value.strip():
        raise ValueError(f"{field} must be a non-empty string")
    return value.strip()


def _clean_price(value: Optional[Decimal]) -> Optional[Decimal]:
    if value is not None and value < 0:
        raise ValueError("price must be a non-negative number")
    return value


def _clean_image_url(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    parsed = urlparse(value.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("image_url must be a valid http or https URL")
    return value.strip()


class CreateListingDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    price: Decimal
    image_url: Optional[str] = None
    category_id: Optional[UUID] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _clean_text(v, "title")

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        return _clean_text(v, "description")

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: Decimal) -> Decimal:
        return _clean_price(v)

    @field_validator("image_url")
    @classmethod
    def image_url_http(cls, v: Optional[str]) -> Optional[str]:
        return _clean_image_url(v)


class UpdateListingDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = None
    image_url: Optional[str] = None
    category_id: Optional[UUID] = None
    status: Optional[ListingStatus] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _clean_text(v, "title")

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _clean_text(v, "description")

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        return _clean_price(v)

    @field_validator("image_url")
    @classmethod
    def image_url_http(cls, v: Optional[str]) -> Optional[str]:
        return _clean_image_url(v)

    @model_validator(mode="after")
    def at_least_one_field(self) -> UpdateListingDTO:
        if not self.model_fields_set:
            raise ValueError("No updatable fields provided")
        return self
