"""Unit tests for ListingService and the listing status store."""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest

from modules.categories.repositories.django_repository import CategoryDjangoRepository
from modules.listings.constants import ListingStatus
from modules.listings.dtos import CreateListingDTO, UpdateListingDTO
from modules.listings.exceptions import (
    ListingCategoryNotFound,
    ListingNotFound,
    ListingPermissionDenied,
    ListingPriceLocked,
)
from modules.listings.models import Listing
from modules.listings.repositories.django_repository import ListingDjangoRepository
from modules.listings.services import ListingService
from modules.users.actor import Actor

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ListingDjangoRepository()


@pytest.fixture()
def service(repo):
    return ListingService(
        listing_repository=repo, category_repository=CategoryDjangoRepository()
    )


class TestCreateListing:
    def test_caller_becomes_seller(self, service, seller, category):
        listing = service.create_listing(
            CreateListingDTO(
                title="Bike", description="Red", price="99.90", category_id=category.id
            ),
            Actor.from_user(seller),
        )
        assert listing.seller_id == seller.id
        assert listing.status == ListingStatus.ACTIVE
        assert listing.category_id == category.id

    def test_unknown_category(self, service, seller):
        with pytest.raises(ListingCategoryNotFound):
            service.create_listing(
                CreateListingDTO(
                    title="Bike", description="Red", price="1", category_id=uuid4()
                ),
                Actor.from_user(seller),
            )


class TestUpdateListing:
    def test_owner_updates(self, service, seller, make_listing):
        listing = make_listing(seller)
        updated = service.update_listing(
            listing.id, UpdateListingDTO(title="New title"), Actor.from_user(seller)
        )
        assert updated.title == "New title"

    def test_other_seller_denied(self, service, seller, other_seller, make_listing):
        listing = make_listing(seller)
        with pytest.raises(ListingPermissionDenied):
            service.update_listing(
                listing.id, UpdateListingDTO(title="x"), Actor.from_user(other_seller)
            )

    def test_admin_may_update_any(self, service, seller, admin, make_listing):
        listing = make_listing(seller)
        updated = service.update_listing(
            listing.id, UpdateListingDTO(price="5.00"), Actor.from_user(admin)
        )
        assert updated.price == Decimal("5.00")

    def test_sold_price_locked(self, service, seller, make_listing):
        listing = make_listing(seller, status=ListingStatus.SOLD)
        with pytest.raises(ListingPriceLocked):
            service.update_listing(
                listing.id, UpdateListingDTO(price="1.00"), Actor.from_user(seller)
            )

    def test_sold_same_price_allowed(self, service, seller, make_listing):
        listing = make_listing(seller, status=ListingStatus.SOLD)
        updated = service.update_listing(
            listing.id,
            UpdateListingDTO(price="100.00", title="Still sold"),
            Actor.from_user(seller),
        )
        assert updated.title == "Still sold"

    def test_category_can_be_cleared(self, service, seller, category, make_listing):
        listing = make_listing(seller, category=category)
        updated = service.update_listing(
            listing.id, UpdateListingDTO(category_id=None), Actor.from_user(seller)
        )
        assert updated.category_id is None


class TestDeleteAndRead:
    def test_delete_is_soft(self, service, seller, make_listing):
        listing = make_listing(seller)
        service.delete_listing(listing.id, Actor.from_user(seller))
        assert Listing.objects.get(id=listing.id).deleted_at is not None
        with pytest.raises(ListingNotFound):
            service.get_active_listing(listing.id)

    def test_sold_listing_hidden_from_public_read(self, service, seller, make_listing):
        listing = make_listing(seller, status=ListingStatus.SOLD)
        with pytest.raises(ListingNotFound):
            service.get_active_listing(listing.id)

    def test_malformed_id_is_not_found(self, service):
        with pytest.raises(ListingNotFound):
            service.get_active_listing("not-a-uuid")


class TestStatusStore:
    def test_mark_sold_only_given_ids(self, repo, seller, make_listing):
        first = make_listing(seller)
        second = make_listing(seller, title="Other")

        assert repo.mark_sold({first.id}) == 1

        first.refresh_from_db()
        second.refresh_from_db()
        assert first.status == ListingStatus.SOLD
        assert second.status == ListingStatus.ACTIVE

    def test_mark_sold_is_idempotent(self, repo, seller, make_listing):
        listing = make_listing(seller)
        repo.mark_sold([listing.id])
        assert repo.mark_sold([listing.id]) == 0
        listing.refresh_from_db()
        assert listing.status == ListingStatus.SOLD

    def test_mark_sold_empty(self, repo):
        assert repo.mark_sold([]) == 0

    def test_owned_ids_include_deleted(self, repo, seller, other_seller, make_listing):
        kept = make_listing(seller)
        deleted = make_listing(seller, title="Gone")
        deleted.delete()
        make_listing(other_seller)

        assert repo.get_ids_owned_by(seller.id) == {kept.id, deleted.id}

    def test_active_by_ids_skips_inactive(self, repo, seller, make_listing):
        active = make_listing(seller)
        sold = make_listing(seller, title="Sold", status=ListingStatus.SOLD)
        found = repo.get_active_by_ids([active.id, sold.id, uuid4()])
        assert list(found) == [active.id]
