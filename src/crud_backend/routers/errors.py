from __future__ import annotations

import logging
from typing import List, Tuple, Type

from fastapi import HTTPException, status

from ..errors import (
    DomainError,
    DuplicateError,
    InvalidEmailError,
    InvalidTitleError,
    InvalidUsernameError,
    NotFoundError,
    TodoAlreadyCompletedError,
    UsernameDuplicateError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Checked in order, so subclasses come before their bases.
_ERROR_STATUS: List[Tuple[Type[DomainError], int, str]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND, "{resource} not found"),
    (InvalidTitleError, status.HTTP_400_BAD_REQUEST, "Invalid todo title"),
    (InvalidUsernameError, status.HTTP_400_BAD_REQUEST, "Invalid username"),
    (InvalidEmailError, status.HTTP_400_BAD_REQUEST, "Invalid email format"),
    (TodoAlreadyCompletedError, status.HTTP_409_CONFLICT, "Todo is already completed"),
    (UsernameDuplicateError, status.HTTP_409_CONFLICT, "Username already exists"),
    (DuplicateError, status.HTTP_409_CONFLICT, "Resource already exists"),
]


# PUBLIC_INTERFACE
def to_http_exception(exc: DomainError, resource: str = "Resource") -> HTTPException:
    """
    Map a domain error to an HTTPException carrying a public status and message.

    Unrecognized domain errors become an opaque 500; the original error is
    logged but never exposed to the client.
    """
    for error_type, status_code, message in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=message.format(resource=resource))

    logger.error("Unmapped domain error: %r", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR_MESSAGE,
    )
