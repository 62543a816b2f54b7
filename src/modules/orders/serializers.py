"""Order DRF serializers for API input/output.

Business rules live in ``OrderService``; ``status`` is accepted as a
plain string here so an unknown value reaches the service and fails
with the same error shape as every other rejected transition.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderItem, OrderStatusHistory

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    listing_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class CreateOrderSerializer(serializers.Serializer):
    items = CreateOrderItemSerializer(many=True, allow_empty=False)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
    notes = serializers.CharField(required=False, default="", allow_blank=True)


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderItemSerializer(serializers.ModelSerializer):
    listing_title = serializers.CharField(source="listing.title", read_only=True)
    subtotal = serializers.DecimalField(
        max_digits=12, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "listing_id",
            "listing_title",
            "quantity",
            "price_at_purchase",
            "subtotal",
        ]
        read_only_fields = fields


class SellerOrderItemSerializer(OrderItemSerializer):
    listing_image_url = serializers.CharField(
        source="listing.image_url", read_only=True, allow_null=True
    )

    class Meta(OrderItemSerializer.Meta):
        fields = OrderItemSerializer.Meta.fields + ["listing_image_url"]
        read_only_fields = fields


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "user_id",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Order with nested items and status history."""

    items = OrderItemSerializer(many=True, read_only=True)
    status_history = StatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "buyer_id",
            "status",
            "total_price",
            "created_at",
            "updated_at",
            "items",
            "status_history",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists (no nested relations)."""

    class Meta:
        model = Order
        fields = [
            "id",
            "buyer_id",
            "status",
            "total_price",
            "created_at",
        ]
        read_only_fields = fields


class SellerOrderSerializer(serializers.ModelSerializer):
    """Order as a seller sees it: buyer contact and only their own items."""

    buyer_name = serializers.CharField(source="buyer.name", read_only=True)
    buyer_email = serializers.EmailField(source="buyer.email", read_only=True)
    items = SellerOrderItemSerializer(source="seller_items", many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "buyer_id",
            "buyer_name",
            "buyer_email",
            "total_price",
            "status",
            "created_at",
            "items",
        ]
        read_only_fields = fields
