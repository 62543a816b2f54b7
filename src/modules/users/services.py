"""User service layer (Use Cases).

Registration, credential checks and profile management. Access rules:
- a user may read and edit their own profile, an admin any profile;
- only an admin may change ``role``;
- deleting an account deactivates it so historic orders keep their buyer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional
from uuid import UUID

import structlog
from django.contrib.auth.models import update_last_login
from django.db import models, transaction

from modules.users.exceptions import (
    InvalidCredentials,
    UserAlreadyExists,
    UserNotFound,
    UserPermissionDenied,
)
from modules.users.models import User

if TYPE_CHECKING:
    from modules.users.actor import Actor
    from modules.users.dtos import LoginDTO, RegisterUserDTO, UpdateUserDTO
    from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def register(self, dto: RegisterUserDTO) -> User:
        """Create a buyer or seller account.

        Raises:
            UserAlreadyExists: the e-mail is already registered.
        """
        log = logger.bind(email=dto.email, role=dto.role)
        if self._repo.get_by_email(dto.email):
            log.warning("user.duplicate_email")
            raise UserAlreadyExists("An account with that email already exists.")

        user = self._repo.create(
            email=dto.email, password=dto.password, name=dto.name, role=dto.role
        )
        log.info("user.registered", user_id=str(user.id))
        return user

    def authenticate(self, dto: LoginDTO) -> User:
        """Return the active account matching the credentials.

        Raises:
            InvalidCredentials: same error for unknown e-mail, wrong
                password and deactivated accounts.
        """
        user = self._repo.get_by_email(dto.email)
        if user is None:
            # Hash anyway so response timing does not reveal unknown e-mails.
            User().set_password(dto.password)
            raise InvalidCredentials("Invalid email or password.")
        if not user.check_password(dto.password) or not user.is_active:
            logger.warning("user.login_failed", user_id=str(user.id))
            raise InvalidCredentials("Invalid email or password.")

        update_last_login(None, user)
        logger.info("user.logged_in", user_id=str(user.id))
        return user

    @transaction.atomic
    def update_user(self, user_id: Any, dto: UpdateUserDTO, actor: Actor) -> User:
        """Apply the supplied fields to a profile.

        Raises:
            UserPermissionDenied: caller is neither the owner nor an admin,
                or a non-admin tried to change ``role``.
            UserNotFound: the account does not exist.
        """
        self._ensure_self_or_admin(user_id, actor)
        user = self._repo.get_by_id(user_id)
        if not user:
            raise UserNotFound(f"User {user_id} not found.")

        log = logger.bind(user_id=str(user.id), actor_id=str(actor.id))

        if dto.role is not None and not actor.is_admin:
            log.warning("user.role_change_denied")
            raise UserPermissionDenied("Only admins may change roles.")

        if dto.name is not None:
            user.name = dto.name
        if "phone_number" in dto.model_fields_set:
            user.phone_number = dto.phone_number or None
        if dto.password is not None:
            user.set_password(dto.password)
        if dto.role is not None:
            user.role = dto.role

        user = self._repo.save(user)
        log.info("user.updated", fields=sorted(dto.model_fields_set))
        return user

    @transaction.atomic
    def deactivate_user(self, user_id: Any) -> None:
        """Raises ``UserNotFound`` when the account does not exist."""
        if not self._repo.get_by_id(user_id):
            raise UserNotFound(f"User {user_id} not found.")
        self._repo.delete(user_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_user(self, user_id: Any, actor: Actor) -> User:
        self._ensure_self_or_admin(user_id, actor)
        user = self._repo.get_by_id(user_id)
        if not user:
            raise UserNotFound(f"User {user_id} not found.")
        return user

    def list_users(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        return self._repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _ensure_self_or_admin(user_id: Any, actor: Actor) -> None:
        if actor.is_admin:
            return
        try:
            target_id = UUID(str(user_id))
        except ValueError:
            raise UserNotFound(f"User {user_id} not found.") from None
        if target_id == actor.id:
            return
        raise UserPermissionDenied("Forbidden")
