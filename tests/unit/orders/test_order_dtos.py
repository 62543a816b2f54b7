"""Unit tests for Order DTOs (Pydantic v2)."""

from __future__ import annotations

from uuid import uuid4

import pytest
from pydantic import ValidationError

from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO

pytestmark = pytest.mark.unit


class TestCreateOrderItemDTO:
    def test_quantity_defaults_to_one(self):
        assert CreateOrderItemDTO(listing_id=uuid4()).quantity == 1

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_rejected(self, quantity):
        with pytest.raises(ValidationError, match="positive integer"):
            CreateOrderItemDTO(listing_id=uuid4(), quantity=quantity)

    def test_is_frozen(self):
        dto = CreateOrderItemDTO(listing_id=uuid4())
        with pytest.raises(ValidationError):
            dto.quantity = 5


class TestCreateOrderDTO:
    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="non-empty"):
            CreateOrderDTO(buyer_id=uuid4(), items=[])

    def test_duplicate_listing_rejected(self):
        listing_id = uuid4()
        with pytest.raises(ValidationError, match="Duplicate listing"):
            CreateOrderDTO(
                buyer_id=uuid4(),
                items=[
                    CreateOrderItemDTO(listing_id=listing_id),
                    CreateOrderItemDTO(listing_id=listing_id, quantity=2),
                ],
            )

    def test_valid(self):
        dto = CreateOrderDTO(
            buyer_id=uuid4(),
            items=[CreateOrderItemDTO(listing_id=uuid4())],
        )
        assert len(dto.items) == 1
