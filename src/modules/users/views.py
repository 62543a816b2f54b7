"""Auth and user API views.

Domain exceptions raised by ``UserService`` are translated into HTTP
responses here; nothing else is caught.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.users.actor import Actor
from modules.users.dtos import LoginDTO, RegisterUserDTO, UpdateUserDTO
from modules.users.exceptions import (
    InvalidCredentials,
    UserAlreadyExists,
    UserNotFound,
    UserPermissionDenied,
)
from modules.users.filters import UserFilter
from modules.users.models import User
from modules.users.permissions import IsAdmin
from modules.users.repositories.django_repository import UserDjangoRepository
from modules.users.serializers import (
    LoginSerializer,
    RegisterSerializer,
    UpdateUserSerializer,
    UserSerializer,
)
from modules.users.services import UserService
from modules.users.tokens import issue_tokens


def _auth_payload(user: User) -> dict:
    return {"user": UserSerializer(user).data, **issue_tokens(user)}


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class RegisterView(APIView):
    """POST /api/v1/auth/register/"""

    authentication_classes: list = []
    permission_classes = [AllowAny]
    throttle_scope = "auth"
    serializer_class = RegisterSerializer

    def post(self, request: Request) -> Response:
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = RegisterUserDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = UserService(UserDjangoRepository()).register(dto)
        except UserAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(_auth_payload(user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/v1/auth/login/"""

    authentication_classes: list = []
    permission_classes = [AllowAny]
    throttle_scope = "auth"
    serializer_class = LoginSerializer

    def post(self, request: Request) -> Response:
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = UserService(UserDjangoRepository()).authenticate(
                LoginDTO(**serializer.validated_data)
            )
        except InvalidCredentials as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_401_UNAUTHORIZED)

        return Response(_auth_payload(user))


class LogoutView(APIView):
    """POST /api/v1/auth/logout/

    Tokens are stateless; the client discards them.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request: Request) -> Response:
        return Response({"detail": "Logged out successfully."})


class MeView(APIView):
    """GET /api/v1/auth/me/"""

    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    def get(self, request: Request) -> Response:
        return Response(UserSerializer(request.user).data)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserViewSet(ListModelMixin, GenericViewSet):
    """Account management.

    Listing and deactivation are admin-only; reading and editing a
    profile is allowed to its owner and to admins (checked by the
    service).
    """

    queryset = User.objects.all()
    serializer_class = UserSerializer
    filterset_class = UserFilter
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    ordering_fields = ["created_at", "name", "email"]
    ordering = ["created_at", "id"]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = UserService(repository=UserDjangoRepository())

    def get_permissions(self):
        if self.action in {"list", "destroy"}:
            return [IsAdmin()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return self._service.list_users()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/users/{pk}/"""
        try:
            user = self._service.get_user(pk, Actor.from_user(request.user))
        except UserPermissionDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except UserNotFound:
            return Response(
                {"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(UserSerializer(user).data)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/users/{pk}/"""
        serializer = UpdateUserSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateUserDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            user = self._service.update_user(pk, dto, Actor.from_user(request.user))
        except UserPermissionDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except UserNotFound:
            return Response(
                {"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(UserSerializer(user).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/users/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/users/{pk}/ (deactivates the account)"""
        try:
            self._service.deactivate_user(pk)
        except UserNotFound:
            return Response(
                {"detail": "User not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
