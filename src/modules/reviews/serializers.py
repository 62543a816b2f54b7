"""Review DRF serializers."""

from __future__ import annotations

from rest_framework import serializers

from modules.reviews.constants import MAX_RATING, MIN_RATING
from modules.reviews.models import Review


class CreateReviewSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=MIN_RATING, max_value=MAX_RATING)
    comment = serializers.CharField(
        required=False, allow_null=True, allow_blank=True, trim_whitespace=False
    )


class ReviewSerializer(serializers.ModelSerializer):
    reviewer_name = serializers.CharField(source="reviewer.name", read_only=True)

    class Meta:
        model = Review
        fields = [
            "id",
            "listing_id",
            "reviewer_id",
            "reviewer_name",
            "rating",
            "comment",
            "created_at",
        ]
        read_only_fields = fields
