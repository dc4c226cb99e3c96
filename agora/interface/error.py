"""Translation of domain errors into HTTP responses."""

import logfire
from fastapi import HTTPException, status

from agora.domain.error import (
    DepthExceededError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)

# Checked in order; subclasses must precede their bases
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DepthExceededError, 422),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error onto the HTTP status clients expect.

    Args:
        error: Error raised by a use case

    Returns:
        HTTPException carrying the error message as detail
    """
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            if status_code >= 500:
                logfire.error("Request failed", error=str(error))
            else:
                logfire.warn("Request rejected", status=status_code, error=str(error))
            return HTTPException(status_code=status_code, detail=str(error))

    logfire.error("Unhandled domain error", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error)
    )


def authentication_required(action: str) -> HTTPException:
    """401 for a write attempted without a valid ``auth_token`` cookie."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=f"Authentication required to {action}",
    )
