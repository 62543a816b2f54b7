"""Review DTOs for the Service Layer."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.reviews.constants import MAX_RATING, MIN_RATING


class CreateReviewDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    listing_id: UUID
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: Optional[str] = None

    @field_validator("comment")
    @classmethod
    def blank_comment_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()
