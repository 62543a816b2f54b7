"""Order domain exceptions.

Status transitions fail with a subclass of ``OrderTransitionError``;
each subclass carries a ``FailureKind`` so the API layer can map the
whole family to HTTP codes in one place.
"""

from __future__ import annotations

from enum import Enum


class FailureKind(str, Enum):
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    INVALID_TRANSITION = "invalid_transition"
    VALIDATION_ERROR = "validation_error"


class OrderTransitionError(Exception):
    """Base class for every rejected status transition."""

    kind: FailureKind = FailureKind.VALIDATION_ERROR


class OrderNotFound(OrderTransitionError):
    """The requested order does not exist."""

    kind = FailureKind.NOT_FOUND


class TransitionForbidden(OrderTransitionError):
    """The actor's role or ownership does not allow this transition."""

    kind = FailureKind.FORBIDDEN


class InvalidOrderStatus(OrderTransitionError):
    """The order's current status does not allow the requested change."""

    kind = FailureKind.INVALID_TRANSITION


class InvalidStatusValue(OrderTransitionError):
    """The requested status is not an ``OrderStatus`` member."""

    kind = FailureKind.VALIDATION_ERROR


class UnknownActorRole(OrderTransitionError):
    """The actor carries a role the transition rules do not know."""

    kind = FailureKind.VALIDATION_ERROR


class OrderAccessDenied(Exception):
    """The caller may not read this order."""


class ListingUnavailable(Exception):
    """A listing in the order does not exist or is not active."""


class CannotBuyOwnListing(Exception):
    """A buyer tried to order one of their own listings."""
