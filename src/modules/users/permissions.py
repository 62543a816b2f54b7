"""Role-based DRF permission classes."""

from __future__ import annotations

from typing import Any

from rest_framework.permissions import BasePermission
from rest_framework.request import Request

from modules.users.constants import UserRole


class HasRole(BasePermission):
    """Grant access when the authenticated user holds one of ``roles``.

    Use ``HasRole.of(...)`` to build a concrete class for
    ``permission_classes``.
    """

    roles: frozenset[str] = frozenset()
    message = "Forbidden"

    def has_permission(self, request: Request, view: Any) -> bool:
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in self.roles
        )

    @classmethod
    def of(cls, *roles: str) -> type[HasRole]:
        name = "Has" + "Or".join(role.capitalize() for role in roles) + "Role"
        return type(name, (cls,), {"roles": frozenset(roles)})


IsAdmin = HasRole.of(UserRole.ADMIN)
IsBuyer = HasRole.of(UserRole.BUYER)
IsSellerOrAdmin = HasRole.of(UserRole.SELLER, UserRole.ADMIN)
