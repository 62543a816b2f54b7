"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.users.models import User
from modules.users.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    def get_by_id(self, id: Any) -> Optional[User]:
        """Returns ``None`` for non-existent or malformed IDs."""
        try:
            return User.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_by_email(self, email: str) -> Optional[User]:
        return User.objects.filter(email__iexact=email).first()

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        queryset = User.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def create(self, email: str, password: str, **fields: Any) -> User:
        user = User.objects.create_user(email=email, password=password, **fields)
        logger.info("user.saved", user_id=str(user.id), is_new=True)
        return user

    @transaction.atomic
    def save(self, entity: User) -> User:
        is_new = entity._state.adding
        entity.save()
        logger.info("user.saved", user_id=str(entity.id), is_new=is_new)
        return entity

    @transaction.atomic
    def delete(self, id: Any) -> bool:
        """Deactivate the account; the row is kept for order history."""
        updated = User.objects.filter(id=id, is_active=True).update(is_active=False)
        if updated:
            logger.info("user.deactivated", user_id=str(id))
        return bool(updated)
