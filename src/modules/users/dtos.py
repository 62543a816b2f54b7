"""User DTOs for the Service Layer.

Frozen Pydantic v2 models used as contracts between the views and
``UserService``.

- ``RegisterUserDTO``: self-service sign-up.
- ``LoginDTO``: credential check.
- ``UpdateUserDTO``: partial profile update (only supplied fields apply).
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator, model_validator

from modules.users.constants import MIN_PASSWORD_LENGTH, SELF_ASSIGNABLE_ROLES, UserRole


def _check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    return value


class RegisterUserDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: EmailStr
    password: str
    name: str
    role: str = UserRole.BUYER

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_password(v)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name is required")
        return v.strip()

    @field_validator("role")
    @classmethod
    def role_self_assignable(cls, v: str) -> str:
        if v not in SELF_ASSIGNABLE_ROLES:
            raise ValueError("role must be 'buyer' or 'seller'")
        return v


class LoginDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.strip().lower()


class UpdateUserDTO(BaseModel):
    """Partial update; ``None`` means "leave unchanged".

    ``phone_number`` can be cleared, so its presence is tracked through
    ``model_fields_set`` rather than ``None``.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("name must be a non-empty string")
        return v.strip() if v is not None else v

    @field_validator("phone_number")
    @classmethod
    def strip_phone(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("password")
    @classmethod
    def password_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_password(v) if v is not None else v

    @field_validator("role")
    @classmethod
    def role_known(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in UserRole.values:
            raise ValueError("role must be one of: buyer, seller, admin")
        return v

    @model_validator(mode="after")
    def at_least_one_field(self) -> UpdateUserDTO:
        if not self.model_fields_set:
            raise ValueError("No updatable fields provided")
        return self
