"""Review API views.

Reviews hang off a listing (``listings/{id}/reviews/``) for reading and
writing; deletion addresses the review directly.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.listings.repositories.django_repository import ListingDjangoRepository
from modules.reviews.dtos import CreateReviewDTO
from modules.reviews.exceptions import (
    ReviewAlreadyExists,
    ReviewListingNotFound,
    ReviewNotFound,
    ReviewPermissionDenied,
)
from modules.reviews.repositories.django_repository import ReviewDjangoRepository
from modules.reviews.serializers import CreateReviewSerializer, ReviewSerializer
from modules.reviews.services import ReviewService
from modules.users.actor import Actor
from modules.users.permissions import IsBuyer


def _review_service() -> ReviewService:
    return ReviewService(
        review_repository=ReviewDjangoRepository(),
        listing_repository=ListingDjangoRepository(),
    )


class ListingReviewsView(APIView):
    """GET/POST /api/v1/listings/{listing_id}/reviews/"""

    serializer_class = ReviewSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsBuyer()]
        return [AllowAny()]

    def get(self, request: Request, listing_id: str) -> Response:
        try:
            reviews = _review_service().list_reviews(listing_id)
        except ReviewListingNotFound:
            return Response(
                {"detail": "Listing not found."}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(ReviewSerializer(reviews, many=True).data)

    def post(self, request: Request, listing_id: str) -> Response:
        serializer = CreateReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            dto = CreateReviewDTO(listing_id=listing_id, **serializer.validated_data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            review = _review_service().create_review(dto, Actor.from_user(request.user))
        except ReviewListingNotFound:
            return Response(
                {"detail": "Listing not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except ReviewAlreadyExists as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)

        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDetailView(APIView):
    """DELETE /api/v1/reviews/{pk}/"""

    permission_classes = [IsAuthenticated]

    def delete(self, request: Request, pk: str) -> Response:
        try:
            _review_service().delete_review(pk, Actor.from_user(request.user))
        except ReviewNotFound:
            return Response(
                {"detail": "Review not found."}, status=status.HTTP_404_NOT_FOUND
            )
        except ReviewPermissionDenied as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_403_FORBIDDEN)
        return Response(status=status.HTTP_204_NO_CONTENT)
