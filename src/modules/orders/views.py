"""Order API views.

Exposes ``OrderService`` over HTTP. Domain exceptions are translated
into status codes here; rejected transitions are mapped by their
``FailureKind`` in one place.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.listings.repositories.django_repository import ListingDjangoRepository
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.exceptions import (
    CannotBuyOwnListing,
    FailureKind,
    ListingUnavailable,
    OrderAccessDenied,
    OrderNotFound,
    OrderTransitionError,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderListSerializer,
    OrderSerializer,
    SellerOrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService
from modules.users.actor import Actor
from modules.users.constants import UserRole
from modules.users.permissions import HasRole, IsAdmin, IsBuyer, IsSellerOrAdmin

FAILURE_STATUS: dict[FailureKind, int] = {
    FailureKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    FailureKind.INVALID_TRANSITION: status.HTTP_400_BAD_REQUEST,
    FailureKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
}

IsBuyerOrAdmin = HasRole.of(UserRole.BUYER, UserRole.ADMIN)


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Does **not** extend ``ModelViewSet``; all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.all()
    serializer_class = OrderListSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "total_price", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            listing_repository=ListingDjangoRepository(),
        )

    def get_permissions(self):
        if self.action == "create":
            return [IsBuyer()]
        if self.action in {"list", "retrieve"}:
            return [IsBuyerOrAdmin()]
        if self.action == "seller":
            return [IsSellerOrAdmin()]
        if self.action == "destroy":
            return [IsAdmin()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve", "seller"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def get_queryset(self):
        return self._service.list_orders(Actor.from_user(self.request.user))

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        try:
            dto = CreateOrderDTO(
                buyer_id=request.user.id,
                items=[
                    CreateOrderItemDTO(
                        listing_id=item["listing_id"],
                        quantity=item["quantity"],
                    )
                    for item in create_serializer.validated_data["items"]
                ],
            )
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = self._service.create_order(dto)
        except ListingUnavailable as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except CannotBuyOwnListing as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/ (buyer: own orders, admin: all)"""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)
        serializer = OrderListSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk, Actor.from_user(request.user))
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except OrderAccessDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(OrderSerializer(order).data)

    @action(detail=False, methods=["get"])
    def seller(self, request: Request) -> Response:
        """GET /api/v1/orders/seller/

        Orders containing the caller's listings, each limited to the
        caller's own items.
        """
        queryset = self._service.list_seller_orders(Actor.from_user(request.user))
        page = self.paginate_queryset(queryset)
        serializer = SellerOrderSerializer(page, many=True)
        return self.get_paginated_response(serializer.data)

    # ------------------------------------------------------------------
    # Status transition
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/orders/{pk}/

        Body: ``{"status": ..., "notes": optional}``.
        """
        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self._service.transition_status(
                order_id=pk,
                requested_status=serializer.validated_data["status"],
                actor=Actor.from_user(request.user),
                notes=serializer.validated_data["notes"],
            )
        except OrderTransitionError as exc:
            return Response(
                {"detail": str(exc), "code": exc.kind.value},
                status=FAILURE_STATUS[exc.kind],
            )

        return Response(OrderSerializer(order).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/"""
        return self.update(request, pk)

    # ------------------------------------------------------------------
    # Destroy
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/ (admin only, hard delete)"""
        try:
            self._service.delete_order(pk)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(status=status.HTTP_204_NO_CONTENT)
