"""Review URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.reviews.views import ListingReviewsView, ReviewDetailView

urlpatterns = [
    path(
        "listings/<uuid:listing_id>/reviews/",
        ListingReviewsView.as_view(),
        name="listing_reviews",
    ),
    path("reviews/<uuid:pk>/", ReviewDetailView.as_view(), name="review_detail"),
]
