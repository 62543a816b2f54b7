"""JWT issuance on top of SimpleJWT."""

from __future__ import annotations

from typing import Dict

from rest_framework_simplejwt.tokens import RefreshToken

from modules.users.models import User


def issue_tokens(user: User) -> Dict[str, str]:
    """Return an ``access``/``refresh`` pair carrying ``role`` and ``email``."""
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    refresh["email"] = user.email
    # Claims set on the refresh token are copied into the access token.
    return {"access": str(refresh.access_token), "refresh": str(refresh)}
