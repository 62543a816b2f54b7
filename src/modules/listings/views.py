"""Listing API views.

Browsing is public; publishing needs a seller or admin account, and
edits are further restricted to the owner (checked by the service).
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.repositories.django_repository import (
    CategoryDjangoRepository,
)
from modules.listings.dtos import CreateListingDTO, UpdateListingDTO
from modules.listings.exceptions import (
    ListingCategoryNotFound,
    ListingNotFound,
    ListingPermissionDenied,
    ListingPriceLocked,
)
from modules.listings.filters import ListingFilter
from modules.listings.models import Listing
from modules.listings.repositories.django_repository import ListingDjangoRepository
from modules.listings.serializers import (
    CreateListingSerializer,
    ListingSerializer,
    UpdateListingSerializer,
)
from modules.listings.services import ListingService
from modules.users.actor import Actor
from modules.users.permissions import IsSellerOrAdmin


class ListingViewSet(ListModelMixin, GenericViewSet):
    queryset = Listing.objects.all()
    serializer_class = ListingSerializer
    filterset_class = ListingFilter
    filter_backends = [DjangoFilterBackend]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ListingService(
            listing_repository=ListingDjangoRepository(),
            category_repository=CategoryDjangoRepository(),
        )

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        return [IsSellerOrAdmin()]

    def get_queryset(self):
        return self._service.list_listings()

    # ------------------------------------------------------------------
    # Retrieve
    # ------------------------------------------------------------------

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/listings/{pk}/ (active listings only)"""
        try:
            listing = self._service.get_active_listing(pk)
        except ListingNotFound:
            return Response(
                {"detail": "Listing not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(ListingSerializer(listing).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/listings/"""
        serializer = CreateListingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = CreateListingDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            listing = self._service.create_listing(dto, Actor.from_user(request.user))
        except ListingCategoryNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ListingSerializer(listing).data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/listings/{pk}/"""
        serializer = UpdateListingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateListingDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            listing = self._service.update_listing(
                pk, dto, Actor.from_user(request.user)
            )
        except ListingNotFound:
            return Response(
                {"detail": "Listing not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except ListingPermissionDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        except (ListingPriceLocked, ListingCategoryNotFound) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ListingSerializer(listing).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/listings/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/listings/{pk}/ (soft delete)"""
        try:
            self._service.delete_listing(pk, Actor.from_user(request.user))
        except ListingNotFound:
            return Response(
                {"detail": "Listing not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except ListingPermissionDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)
