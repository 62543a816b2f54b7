"""Integration tests for /api/v1/listings/."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.listings.constants import ListingStatus
from modules.listings.models import Listing

pytestmark = pytest.mark.integration

URL = "/api/v1/listings/"


# ---------------------------------------------------------------------------
# Browse
# ---------------------------------------------------------------------------


class TestBrowseListings:
    def test_public_list_hides_inactive_and_deleted(
        self, api_client, seller, make_listing
    ):
        visible = make_listing(seller, title="Visible")
        make_listing(seller, title="Sold", status=ListingStatus.SOLD)
        make_listing(seller, title="Gone").delete()

        response = api_client.get(URL)

        assert response.status_code == 200
        ids = [row["id"] for row in response.json()["results"]]
        assert ids == [str(visible.id)]

    def test_seller_filter_shows_all_statuses(self, api_client, seller, make_listing):
        make_listing(seller, title="Active")
        make_listing(seller, title="Sold", status=ListingStatus.SOLD)

        response = api_client.get(URL, {"seller": str(seller.id)})

        assert response.json()["count"] == 2

    def test_filters_and_sort(self, api_client, seller, category, make_listing):
        make_listing(seller, title="Cheap phone", price=Decimal("10"), category=category)
        make_listing(seller, title="Dear phone", price=Decimal("500"), category=category)
        make_listing(seller, title="Lamp", price=Decimal("50"))

        response = api_client.get(
            URL,
            {
                "category": str(category.id),
                "search": "PHONE",
                "min_price": "5",
                "max_price": "600",
                "sort": "price_desc",
            },
        )

        titles = [row["title"] for row in response.json()["results"]]
        assert titles == ["Dear phone", "Cheap phone"]

    def test_default_sort_newest_first(self, api_client, seller, make_listing):
        first = make_listing(seller, title="First")
        second = make_listing(seller, title="Second")
        Listing.objects.filter(id=first.id).update(
            created_at=second.created_at.replace(year=second.created_at.year - 1)
        )

        titles = [r["title"] for r in api_client.get(URL).json()["results"]]
        assert titles == ["Second", "First"]

    def test_retrieve_includes_names(self, api_client, seller, category, make_listing):
        listing = make_listing(seller, category=category)

        data = api_client.get(f"{URL}{listing.id}/").json()

        assert data["seller_name"] == "Bob Seller"
        assert data["category_name"] == "Electronics"
        assert data["price"] == "100.00"

    def test_retrieve_sold_returns_404(self, api_client, seller, make_listing):
        listing = make_listing(seller, status=ListingStatus.SOLD)
        assert api_client.get(f"{URL}{listing.id}/").status_code == 404

    def test_retrieve_missing_returns_404(self, api_client):
        assert api_client.get(f"{URL}{uuid4()}/").status_code == 404


# ---------------------------------------------------------------------------
# Publish / edit / remove
# ---------------------------------------------------------------------------


class TestWriteListings:
    def test_seller_creates(self, client_for, seller, category):
        response = client_for(seller).post(
            URL,
            {
                "title": "Bike",
                "description": "Red",
                "price": "120.00",
                "category_id": str(category.id),
                "image_url": "https://img.example.com/bike.png",
            },
            format="json",
        )

        assert response.status_code == 201
        data = response.json()
        assert data["seller_id"] == str(seller.id)
        assert data["status"] == "active"

    def test_buyer_cannot_create(self, client_for, buyer):
        response = client_for(buyer).post(
            URL, {"title": "x", "description": "y", "price": "1"}, format="json"
        )
        assert response.status_code == 403

    def test_negative_price_returns_400(self, client_for, seller):
        response = client_for(seller).post(
            URL, {"title": "x", "description": "y", "price": "-1"}, format="json"
        )
        assert response.status_code == 400

    def test_unknown_category_returns_400(self, client_for, seller):
        response = client_for(seller).post(
            URL,
            {
                "title": "x",
                "description": "y",
                "price": "1",
                "category_id": str(uuid4()),
            },
            format="json",
        )
        assert response.status_code == 400

    def test_owner_patches(self, client_for, seller, make_listing):
        listing = make_listing(seller)
        response = client_for(seller).patch(
            f"{URL}{listing.id}/", {"status": "removed"}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["status"] == "removed"

    def test_other_seller_forbidden(self, client_for, seller, other_seller, make_listing):
        listing = make_listing(seller)
        response = client_for(other_seller).patch(
            f"{URL}{listing.id}/", {"title": "Mine now"}, format="json"
        )
        assert response.status_code == 403

    def test_sold_price_change_returns_400(self, client_for, seller, make_listing):
        listing = make_listing(seller, status=ListingStatus.SOLD)
        response = client_for(seller).patch(
            f"{URL}{listing.id}/", {"price": "1.00"}, format="json"
        )
        assert response.status_code == 400

    def test_delete_is_soft(self, client_for, seller, make_listing):
        listing = make_listing(seller)
        response = client_for(seller).delete(f"{URL}{listing.id}/")
        assert response.status_code == 204
        assert Listing.objects.get(id=listing.id).deleted_at is not None

    def test_admin_deletes_any(self, client_for, admin, seller, make_listing):
        listing = make_listing(seller)
        assert client_for(admin).delete(f"{URL}{listing.id}/").status_code == 204
