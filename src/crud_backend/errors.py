from __future__ import annotations

from typing import Optional


# PUBLIC_INTERFACE
class DomainError(Exception):
    """
    Base class for business-meaningful failures raised by repositories and services.

    Subclasses carry a default message; a custom message may be passed when raising.
    """

    default_message = "domain error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


# Repository errors
class NotFoundError(DomainError):
    """Requested resource does not exist."""

    default_message = "resource not found"


class DuplicateError(DomainError):
    """Resource with the same unique key already exists."""

    default_message = "resource already exists"


# Todo business rule errors
class InvalidTitleError(DomainError):
    """Todo title is empty or whitespace-only."""

    default_message = "todo title cannot be empty"


class TodoAlreadyCompletedError(DomainError):
    """Attempt to complete a todo that is already completed."""

    default_message = "todo is already completed"


# User business rule errors
class InvalidUsernameError(DomainError):
    """Username is empty or whitespace-only."""

    default_message = "username cannot be empty"


class UsernameDuplicateError(DuplicateError):
    """Another user already holds the username."""

    default_message = "username already exists"


class InvalidEmailError(DomainError):
    """Email address is not of the form local@domain."""

    default_message = "invalid email format"
