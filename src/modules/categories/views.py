"""Category API views. Reads are public, writes admin-only."""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.mixins import ListModelMixin
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.categories.dtos import CreateCategoryDTO, UpdateCategoryDTO
from modules.categories.exceptions import CategoryNotFound, CategorySlugConflict
from modules.categories.models import Category
from modules.categories.repositories.django_repository import (
    CategoryDjangoRepository,
)
from modules.categories.serializers import (
    CategoryInputSerializer,
    CategorySerializer,
)
from modules.categories.services import CategoryService
from modules.users.permissions import IsAdmin


class CategoryViewSet(ListModelMixin, GenericViewSet):
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CategoryService(repository=CategoryDjangoRepository())

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        return [IsAdmin()]

    def get_queryset(self):
        return self._service.list_categories()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/categories/{pk}/"""
        try:
            category = self._service.get_category(pk)
        except CategoryNotFound:
            return Response(
                {"detail": "Category not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(CategorySerializer(category).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/categories/"""
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = CreateCategoryDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            category = self._service.create_category(dto)
        except CategorySlugConflict as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(
            CategorySerializer(category).data, status=status.HTTP_201_CREATED
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/categories/{pk}/"""
        serializer = CategoryInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = UpdateCategoryDTO(**serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            category = self._service.update_category(pk, dto)
        except CategoryNotFound:
            return Response(
                {"detail": "Category not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except CategorySlugConflict as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(CategorySerializer(category).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/categories/{pk}/"""
        try:
            self._service.delete_category(pk)
        except CategoryNotFound:
            return Response(
                {"detail": "Category not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
