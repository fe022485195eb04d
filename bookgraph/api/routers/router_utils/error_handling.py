"""
Domain error handling for API endpoints.

Provides a decorator that maps book graph exceptions to HTTPExceptions so
every endpoint reports errors with the same status codes and payload.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from bookgraph.core.exceptions import (
    BookGraphException,
    DependencyConflict,
    DuplicateKey,
    NotFound,
    ReferenceNotFound,
    ValidationError,
)
from bookgraph.models.common import ErrorResponse

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

STATUS_BY_EXCEPTION: dict[type[BookGraphException], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    ReferenceNotFound: 422,
    DuplicateKey: status.HTTP_409_CONFLICT,
    DependencyConflict: status.HTTP_409_CONFLICT,
}


def to_http_exception(error: BookGraphException) -> HTTPException:
    """
    Build the HTTPException for a domain error.

    Args:
        error: Raised domain exception

    Returns:
        HTTPException: Status from STATUS_BY_EXCEPTION (400 for unknown
        subclasses) and an ErrorResponse detail
    """
    status_code = STATUS_BY_EXCEPTION.get(type(error), status.HTTP_400_BAD_REQUEST)
    payload = ErrorResponse(error=error.code, message=error.message, details=error.details)
    return HTTPException(status_code=status_code, detail=payload.model_dump())


def handle_domain_errors(func: F) -> F:
    """
    Decorator to handle book graph errors and transform them into HTTPExceptions.

    This centralizes:
    - Logging of rejected requests with the error details
    - Mapping domain exceptions to HTTP status codes
    - Ensuring uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except BookGraphException as e:
            logger.warning(
                "Request rejected",
                extra={"error_code": e.code, "error": e.message, "details": e.details},
            )
            raise to_http_exception(e)

        except Exception as e:
            logger.exception(
                "Unexpected failure in book graph operation",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=ErrorResponse(
                    error="internal_error",
                    message="An internal error occurred",
                ).model_dump(),
            )

    return wrapper  # type: ignore
