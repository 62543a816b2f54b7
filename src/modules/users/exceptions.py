"""User domain exceptions.

Raised by ``UserService``; the views translate them into HTTP
responses.
"""

from __future__ import annotations


class UserAlreadyExists(Exception):
    """An account with the same e-mail already exists."""


class UserNotFound(Exception):
    """The requested account does not exist."""


class InvalidCredentials(Exception):
    """E-mail/password pair did not match an active account."""


class UserPermissionDenied(Exception):
    """The caller may not read or change this account."""
