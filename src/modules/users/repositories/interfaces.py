"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.users.models import User


class IUserRepository(IRepository["User"]):
    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive look-up by e-mail."""

    @abstractmethod
    def create(self, email: str, password: str, **fields) -> User:
        """Create an account with a hashed password."""
