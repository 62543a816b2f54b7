"""Order DTOs for the Service Layer.

Frozen Pydantic v2 contracts between the API layer and
``OrderService``.

- ``CreateOrderItemDTO``: one listing and a quantity.
- ``CreateOrderDTO``: the buyer and a non-empty list of distinct items.

Prices are never accepted from the client; the service snapshots the
listing price at creation time.
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class CreateOrderItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    listing_id: UUID
    quantity: int = 1

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("quantity must be a positive integer")
        return v


class CreateOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    buyer_id: UUID
    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("items must be a non-empty array")
        return v

    @model_validator(mode="after")
    def no_duplicate_listings(self) -> CreateOrderDTO:
        listing_ids = [item.listing_id for item in self.items]
        if len(listing_ids) != len(set(listing_ids)):
            raise ValueError("Duplicate listing IDs are not allowed in the same order.")
        return self
