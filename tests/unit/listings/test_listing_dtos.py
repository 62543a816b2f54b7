"""Unit tests for Listing DTOs."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.listings.dtos import CreateListingDTO, UpdateListingDTO

pytestmark = pytest.mark.unit


class TestCreateListingDTO:
    def test_text_fields_trimmed(self):
        dto = CreateListingDTO(title="  Bike ", description=" Red ", price="10")
        assert dto.title == "Bike"
        assert dto.description == "Red"
        assert dto.price == Decimal("10")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            CreateListingDTO(title="Bike", description="Red", price="-1")

    def test_zero_price_allowed(self):
        assert CreateListingDTO(title="Free", description="x", price="0").price == 0

    @pytest.mark.parametrize("url", ["ftp://example.com/a.png", "not a url"])
    def test_image_url_must_be_http(self, url):
        with pytest.raises(ValidationError, match="http or https"):
            CreateListingDTO(title="Bike", description="Red", price="1", image_url=url)

    def test_blank_image_url_is_none(self):
        dto = CreateListingDTO(title="Bike", description="Red", price="1", image_url=" ")
        assert dto.image_url is None


class TestUpdateListingDTO:
    def test_empty_update_rejected(self):
        with pytest.raises(ValidationError, match="No updatable fields"):
            UpdateListingDTO()

    def test_explicit_null_category_tracked(self):
        dto = UpdateListingDTO(category_id=None)
        assert "category_id" in dto.model_fields_set

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError, match="non-empty"):
            UpdateListingDTO(title="   ")
