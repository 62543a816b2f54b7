"""The authenticated caller as seen by the service layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from modules.users.constants import UserRole


@dataclass(frozen=True)
class Actor:
    """Immutable ``(id, role)`` pair.

    Services take an ``Actor`` rather than a ``User`` so authorization
    rules can be exercised without a request or a database row.
    """

    id: UUID
    role: str

    @classmethod
    def from_user(cls, user: Any) -> Actor:
        return cls(id=user.id, role=user.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_seller(self) -> bool:
        return self.role == UserRole.SELLER

    @property
    def is_buyer(self) -> bool:
        return self.role == UserRole.BUYER
