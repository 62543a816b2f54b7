from __future__ import annotations

from decimal import Decimal

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.categories.models import Category
from modules.listings.models import Listing
from modules.users.constants import UserRole
from modules.users.models import User

DEFAULT_PASSWORD = "testpass123"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_cache():
    """Throttle counters live in the cache; start every test clean."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@pytest.fixture()
def make_user():
    counter = {"n": 0}

    def _make(role: str = UserRole.BUYER, **kwargs) -> User:
        counter["n"] += 1
        kwargs.setdefault("email", f"{role}{counter['n']}@example.com")
        kwargs.setdefault("name", f"{role.title()} {counter['n']}")
        return User.objects.create_user(
            password=kwargs.pop("password", DEFAULT_PASSWORD), role=role, **kwargs
        )

    return _make


@pytest.fixture()
def buyer(make_user):
    return make_user(UserRole.BUYER, email="buyer@example.com", name="Alice Buyer")


@pytest.fixture()
def seller(make_user):
    return make_user(UserRole.SELLER, email="seller@example.com", name="Bob Seller")


@pytest.fixture()
def other_seller(make_user):
    return make_user(UserRole.SELLER, email="seller2@example.com", name="Dana Seller")


@pytest.fixture()
def admin(make_user):
    return make_user(UserRole.ADMIN, email="admin@example.com", name="Charlie Admin")


@pytest.fixture()
def client_for():
    """Build an APIClient authenticated as the given user."""

    def _client(user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------


@pytest.fixture()
def category():
    return Category.objects.create(name="Electronics", slug="electronics")


@pytest.fixture()
def make_listing():
    def _make(seller: User, **kwargs) -> Listing:
        kwargs.setdefault("title", "Used Laptop")
        kwargs.setdefault("description", "Works fine.")
        kwargs.setdefault("price", Decimal("100.00"))
        return Listing.objects.create(seller=seller, **kwargs)

    return _make
