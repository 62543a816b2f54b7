"""Listing DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.listings.constants import ListingStatus
from modules.listings.models import Listing

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateListingSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    image_url = serializers.URLField(
        max_length=500, required=False, allow_null=True, allow_blank=True
    )
    category_id = serializers.UUIDField(required=False, allow_null=True)


class UpdateListingSerializer(CreateListingSerializer):
    status = serializers.ChoiceField(choices=ListingStatus.choices, required=False)

    def __init__(self, *args, **kwargs) -> None:
        kwargs.setdefault("partial", True)
        super().__init__(*args, **kwargs)


# ---------------------------------------------------------------------------
# Output Serializers
# ---------------------------------------------------------------------------


class ListingSerializer(serializers.ModelSerializer):
    seller_name = serializers.CharField(source="seller.name", read_only=True)
    category_name = serializers.CharField(
        source="category.name", read_only=True, default=None
    )

    class Meta:
        model = Listing
        fields = [
            "id",
            "title",
            "description",
            "price",
            "image_url",
            "status",
            "seller_id",
            "seller_name",
            "category_id",
            "category_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
