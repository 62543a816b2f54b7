"""Unit tests for the abstract base models (via concrete subclasses)."""

from __future__ import annotations

import pytest

from modules.categories.models import Category
from modules.listings.models import Listing

pytestmark = pytest.mark.unit


class TestBaseModel:
    def test_uuid7_primary_key(self):
        category = Category.objects.create(name="Books", slug="books")
        assert category.id.version == 7

    def test_update_fields_also_writes_updated_at(self, django_assert_num_queries):
        category = Category.objects.create(name="Books", slug="books")
        category.name = "Old Books"
        with django_assert_num_queries(1) as ctx:
            category.save(update_fields=["name"])
        assert "updated_at" in ctx.captured_queries[0]["sql"]


class TestSoftDeleteModel:
    def test_delete_sets_deleted_at(self, seller, make_listing):
        listing = make_listing(seller)
        listing.delete()
        listing.refresh_from_db()
        assert listing.is_deleted
        assert not Listing.objects.alive().filter(id=listing.id).exists()
        assert Listing.objects.filter(id=listing.id).exists()

    def test_delete_twice_is_noop(self, seller, make_listing):
        listing = make_listing(seller)
        listing.delete()
        assert listing.delete() == (0, {})

    def test_queryset_delete_is_soft(self, seller, make_listing):
        make_listing(seller)
        make_listing(seller, title="Second")
        count, _ = Listing.objects.filter(seller=seller).delete()
        assert count == 2
        assert Listing.objects.alive().count() == 0
        assert Listing.objects.count() == 2
