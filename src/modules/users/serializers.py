"""User DRF serializers.

Request bodies are parsed here; business validation happens in the
Pydantic DTOs handed to ``UserService``. No serializer ever exposes the
password hash.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.users.constants import MIN_PASSWORD_LENGTH, UserRole
from modules.users.models import User

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(
        min_length=MIN_PASSWORD_LENGTH, write_only=True, trim_whitespace=False
    )
    name = serializers.CharField()
    role = serializers.ChoiceField(
        choices=[UserRole.BUYER, UserRole.SELLER], default=UserRole.BUYER
    )


class LoginSerializer(serializers.Serializer):
    email = serializers.CharField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UpdateUserSerializer(serializers.Serializer):
    name = serializers.CharField(required=False)
    phone_number = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )
    password = serializers.CharField(
        required=False, min_length=MIN_PASSWORD_LENGTH, trim_whitespace=False
    )
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)


# ---------------------------------------------------------------------------
# Output Serializers
# ---------------------------------------------------------------------------


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "name",
            "phone_number",
            "role",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
