"""Unit tests for role permissions and token claims."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from modules.users.actor import Actor
from modules.users.constants import UserRole
from modules.users.permissions import HasRole, IsAdmin, IsSellerOrAdmin
from modules.users.tokens import issue_tokens

pytestmark = pytest.mark.unit


def _request(user):
    return SimpleNamespace(user=user)


class TestHasRole:
    def test_of_builds_named_class(self):
        perm_class = HasRole.of(UserRole.BUYER, UserRole.ADMIN)
        assert perm_class.__name__ == "HasBuyerOrAdminRole"
        assert perm_class.roles == frozenset({"buyer", "admin"})

    def test_matching_role_allowed(self, admin):
        assert IsAdmin().has_permission(_request(admin), None)

    def test_other_role_denied(self, buyer):
        assert not IsSellerOrAdmin().has_permission(_request(buyer), None)

    def test_anonymous_denied(self):
        anonymous = SimpleNamespace(is_authenticated=False)
        assert not IsAdmin().has_permission(_request(anonymous), None)


class TestActor:
    def test_from_user(self, seller):
        actor = Actor.from_user(seller)
        assert actor.id == seller.id
        assert actor.is_seller
        assert not actor.is_admin
        assert not actor.is_buyer


class TestIssueTokens:
    def test_access_token_carries_role_and_email(self, seller):
        tokens = issue_tokens(seller)
        access = AccessToken(tokens["access"])
        assert access["role"] == UserRole.SELLER
        assert access["email"] == "seller@example.com"
        assert access["user_id"] == str(seller.id)
