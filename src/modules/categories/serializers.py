from __future__ import annotations

from rest_framework import serializers

from modules.categories.models import Category


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False)
    slug = serializers.SlugField(max_length=100, required=False)
    description = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "created_at", "updated_at"]
        read_only_fields = fields
