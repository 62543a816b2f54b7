"""User domain constants."""

from django.db import models


class UserRole(models.TextChoices):
    BUYER = "buyer", "Buyer"
    SELLER = "seller", "Seller"
    ADMIN = "admin", "Admin"


# Roles a visitor may pick for themselves at registration.
SELF_ASSIGNABLE_ROLES: frozenset[str] = frozenset({UserRole.BUYER, UserRole.SELLER})

MIN_PASSWORD_LENGTH = 8
