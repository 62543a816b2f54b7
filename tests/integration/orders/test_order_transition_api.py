"""Integration tests for PATCH /api/v1/orders/{id}/ (status transitions).

Covers:
- Seller approval marks only that seller's listings as sold.
- Multi-seller orders: each seller decides for their own items.
- Seller rejections (wrong target, non-pending, foreign order) change nothing.
- Admin override, buyer rejection, unknown status, missing order.
- History and outbox rows written with the transition.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.core.models import OutboxEvent
from modules.listings.constants import ListingStatus
from modules.listings.models import Listing
from modules.orders.constants import OrderStatus
from modules.orders.models import Order, OrderStatusHistory
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.integration


def _url(order) -> str:
    return f"/api/v1/orders/{order.id}/"


def _status(listing) -> str:
    return Listing.objects.get(id=listing.id).status


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mine(seller, make_listing):
    return make_listing(seller, title="Mine A", price=Decimal("40.00"))


@pytest.fixture()
def mine_too(seller, make_listing):
    return make_listing(seller, title="Mine B", price=Decimal("60.00"))


@pytest.fixture()
def theirs(other_seller, make_listing):
    return make_listing(other_seller, title="Theirs", price=Decimal("25.00"))


@pytest.fixture()
def order(buyer, mine, mine_too, theirs):
    return OrderDjangoRepository().create(
        buyer_id=buyer.id,
        items=[
            {
                "listing_id": listing.id,
                "quantity": 1,
                "price_at_purchase": listing.price,
            }
            for listing in (mine, mine_too, theirs)
        ],
    )


# ---------------------------------------------------------------------------
# Seller decisions
# ---------------------------------------------------------------------------


class TestSellerApproval:
    def test_approval_marks_only_sellers_listings(
        self, client_for, seller, order, mine, mine_too, theirs
    ):
        response = client_for(seller).patch(
            _url(order), {"status": "approved"}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert _status(mine) == ListingStatus.SOLD
        assert _status(mine_too) == ListingStatus.SOLD
        assert _status(theirs) == ListingStatus.ACTIVE

    def test_total_price_unchanged(self, client_for, seller, order):
        client_for(seller).patch(_url(order), {"status": "approved"}, format="json")
        assert Order.objects.get(id=order.id).total_price == Decimal("125.00")

    def test_history_and_outbox_written(self, client_for, seller, order):
        client_for(seller).patch(
            _url(order), {"status": "approved", "notes": "Ships Monday"}, format="json"
        )

        history = OrderStatusHistory.objects.get(order=order)
        assert history.old_status == OrderStatus.PENDING
        assert history.new_status == OrderStatus.APPROVED
        assert history.user_id == seller.id
        assert history.notes == "Ships Monday"
        event_types = set(
            OutboxEvent.objects.filter(aggregate_id=str(order.id)).values_list(
                "event_type", flat=True
            )
        )
        assert event_types == {"OrderStatusChanged", "ListingsSold"}

    def test_rejection_leaves_listings_active(
        self, client_for, seller, order, mine, mine_too
    ):
        response = client_for(seller).patch(
            _url(order), {"status": "rejected"}, format="json"
        )

        assert response.status_code == 200
        assert _status(mine) == ListingStatus.ACTIVE
        assert _status(mine_too) == ListingStatus.ACTIVE

    def test_second_seller_blocked_after_first_decision(
        self, client_for, seller, other_seller, order, theirs
    ):
        client_for(seller).patch(_url(order), {"status": "approved"}, format="json")

        response = client_for(other_seller).patch(
            _url(order), {"status": "approved"}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_transition"
        assert _status(theirs) == ListingStatus.ACTIVE

    def test_already_sold_listing_stays_sold(
        self, client_for, seller, order, mine
    ):
        Listing.objects.filter(id=mine.id).update(status=ListingStatus.SOLD)

        response = client_for(seller).patch(
            _url(order), {"status": "approved"}, format="json"
        )

        assert response.status_code == 200
        assert _status(mine) == ListingStatus.SOLD


class TestSellerRejected:
    @pytest.mark.parametrize("target", ["paid", "shipped", "completed", "cancelled"])
    def test_forbidden_targets(self, client_for, seller, order, mine, target):
        response = client_for(seller).patch(
            _url(order), {"status": target}, format="json"
        )

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"
        assert Order.objects.get(id=order.id).status == OrderStatus.PENDING
        assert _status(mine) == ListingStatus.ACTIVE

    def test_non_pending_order(self, client_for, seller, order, mine):
        Order.objects.filter(id=order.id).update(status=OrderStatus.PAID)

        response = client_for(seller).patch(
            _url(order), {"status": "approved"}, format="json"
        )

        assert response.status_code == 400
        assert _status(mine) == ListingStatus.ACTIVE
        assert not OrderStatusHistory.objects.filter(order=order).exists()

    def test_non_pending_order_with_non_decision_target(
        self, client_for, seller, order
    ):
        Order.objects.filter(id=order.id).update(status=OrderStatus.COMPLETED)

        response = client_for(seller).patch(
            _url(order), {"status": "paid"}, format="json"
        )

        assert response.status_code == 403
        assert response.json()["code"] == "forbidden"
        assert Order.objects.get(id=order.id).status == OrderStatus.COMPLETED

    def test_seller_with_no_items_in_order(self, client_for, make_user, order):
        stranger = make_user("seller")

        response = client_for(stranger).patch(
            _url(order), {"status": "approved"}, format="json"
        )

        assert response.status_code == 403
        assert Order.objects.get(id=order.id).status == OrderStatus.PENDING

    def test_deleted_listing_still_counts_as_owned(
        self, client_for, seller, order, mine, mine_too
    ):
        Listing.objects.filter(id__in=[mine.id, mine_too.id]).delete()

        response = client_for(seller).patch(
            _url(order), {"status": "rejected"}, format="json"
        )

        assert response.status_code == 200


# ---------------------------------------------------------------------------
# Admin / buyer / validation
# ---------------------------------------------------------------------------


class TestAdminOverride:
    def test_admin_sets_any_status_without_side_effects(
        self, client_for, admin, order, mine, theirs
    ):
        client = client_for(admin)
        for target in ("approved", "shipped", "pending", "completed"):
            response = client.patch(_url(order), {"status": target}, format="json")
            assert response.status_code == 200
            assert response.json()["status"] == target

        assert _status(mine) == ListingStatus.ACTIVE
        assert _status(theirs) == ListingStatus.ACTIVE
        assert OrderStatusHistory.objects.filter(order=order).count() == 4

    def test_put_behaves_like_patch(self, client_for, admin, order):
        response = client_for(admin).put(
            _url(order), {"status": "cancelled"}, format="json"
        )
        assert response.status_code == 200


class TestRejectedRequests:
    def test_buyer_forbidden(self, client_for, buyer, order):
        response = client_for(buyer).patch(
            _url(order), {"status": "cancelled"}, format="json"
        )
        assert response.status_code == 403
        assert Order.objects.get(id=order.id).status == OrderStatus.PENDING

    def test_unknown_status_returns_400(self, client_for, admin, order):
        response = client_for(admin).patch(
            _url(order), {"status": "delivered"}, format="json"
        )
        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    def test_missing_status_returns_400(self, client_for, admin, order):
        response = client_for(admin).patch(_url(order), {}, format="json")
        assert response.status_code == 400

    def test_missing_order_returns_404(self, client_for, admin):
        response = client_for(admin).patch(
            f"/api/v1/orders/{uuid4()}/", {"status": "approved"}, format="json"
        )
        assert response.status_code == 404
        assert response.json()["code"] == "not_found"

    def test_anonymous_unauthorized(self, api_client, order):
        response = api_client.patch(_url(order), {"status": "approved"}, format="json")
        assert response.status_code == 401


class TestDeleteOrder:
    def test_admin_hard_deletes(self, client_for, admin, order):
        response = client_for(admin).delete(_url(order))
        assert response.status_code == 204
        assert not Order.objects.filter(id=order.id).exists()

    def test_buyer_cannot_delete(self, client_for, buyer, order):
        assert client_for(buyer).delete(_url(order)).status_code == 403
