"""Integration tests for the ``seed_data`` management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command

from modules.categories.models import Category
from modules.listings.models import Listing
from modules.users.models import User

pytestmark = pytest.mark.integration


def test_seed_creates_one_user_per_role():
    call_command("seed_data", stdout=StringIO())

    assert sorted(User.objects.values_list("role", flat=True)) == [
        "admin",
        "buyer",
        "seller",
    ]
    assert Category.objects.count() == 5
    assert Listing.objects.filter(seller__email="seller@example.com").count() == 6
    assert User.objects.get(email="admin@example.com").check_password("password123")


def test_seed_is_idempotent():
    call_command("seed_data", stdout=StringIO())
    out = StringIO()
    call_command("seed_data", stdout=out)

    assert User.objects.count() == 3
    assert Category.objects.count() == 5
    assert Listing.objects.count() == 6
    assert "listings_created=0" in out.getvalue()
