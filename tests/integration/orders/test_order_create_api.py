"""Integration tests for POST /api/v1/orders/."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.core.models import OutboxEvent
from modules.listings.constants import ListingStatus
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderStatusHistory

pytestmark = pytest.mark.integration

URL = "/api/v1/orders/"


@pytest.fixture()
def buyer_client(client_for, buyer):
    return client_for(buyer)


class TestCreateOrder:
    def test_creates_pending_order_with_snapshots(
        self, buyer_client, seller, make_listing
    ):
        phone = make_listing(seller, title="Phone", price=Decimal("200.00"))
        case = make_listing(seller, title="Case", price=Decimal("15.50"))

        response = buyer_client.post(
            URL,
            {
                "items": [
                    {"listing_id": str(phone.id)},
                    {"listing_id": str(case.id), "quantity": 2},
                ]
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == OrderStatus.PENDING
        assert data["total_price"] == "231.00"
        assert {i["listing_title"] for i in data["items"]} == {"Phone", "Case"}
        assert data["status_history"][0]["new_status"] == OrderStatus.PENDING
        assert data["status_history"][0]["old_status"] is None

    def test_price_snapshot_survives_listing_price_change(
        self, buyer_client, seller, make_listing
    ):
        listing = make_listing(seller, price=Decimal("80.00"))
        order_id = buyer_client.post(
            URL, {"items": [{"listing_id": str(listing.id)}]}, format="json"
        ).json()["id"]

        listing.price = Decimal("999.00")
        listing.save()

        order = Order.objects.get(id=order_id)
        assert order.total_price == Decimal("80.00")
        assert order.items.get().price_at_purchase == Decimal("80.00")

    def test_writes_order_placed_to_outbox(self, buyer_client, seller, make_listing):
        listing = make_listing(seller)
        buyer_client.post(
            URL, {"items": [{"listing_id": str(listing.id)}]}, format="json"
        )
        assert OutboxEvent.objects.filter(event_type="OrderPlaced").count() == 1

    def test_empty_items_returns_400(self, buyer_client):
        assert buyer_client.post(URL, {"items": []}, format="json").status_code == 400

    def test_duplicate_listing_returns_400(self, buyer_client, seller, make_listing):
        listing = make_listing(seller)
        response = buyer_client.post(
            URL,
            {
                "items": [
                    {"listing_id": str(listing.id)},
                    {"listing_id": str(listing.id)},
                ]
            },
            format="json",
        )
        assert response.status_code == 400

    def test_zero_quantity_returns_400(self, buyer_client, seller, make_listing):
        listing = make_listing(seller)
        response = buyer_client.post(
            URL,
            {"items": [{"listing_id": str(listing.id), "quantity": 0}]},
            format="json",
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("status", [ListingStatus.SOLD, ListingStatus.REMOVED])
    def test_inactive_listing_returns_404(
        self, buyer_client, seller, make_listing, status
    ):
        listing = make_listing(seller, status=status)
        response = buyer_client.post(
            URL, {"items": [{"listing_id": str(listing.id)}]}, format="json"
        )
        assert response.status_code == 404
        assert Order.objects.count() == 0

    def test_missing_listing_rolls_back_everything(
        self, buyer_client, seller, make_listing
    ):
        listing = make_listing(seller)
        response = buyer_client.post(
            URL,
            {
                "items": [
                    {"listing_id": str(listing.id)},
                    {"listing_id": str(uuid4())},
                ]
            },
            format="json",
        )
        assert response.status_code == 404
        assert Order.objects.count() == 0
        assert OrderStatusHistory.objects.count() == 0

    def test_seller_cannot_place_orders(
        self, client_for, seller, other_seller, make_listing
    ):
        listing = make_listing(other_seller)
        response = client_for(seller).post(
            URL, {"items": [{"listing_id": str(listing.id)}]}, format="json"
        )
        assert response.status_code == 403

    def test_anonymous_unauthorized(self, api_client):
        assert api_client.post(URL, {"items": []}, format="json").status_code == 401
