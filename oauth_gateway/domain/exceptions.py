# oauth_gateway/domain/exceptions.py

"""
Custom exceptions for the gateway.

Every exception carries an OAuth2-style error identifier in ``error`` and a
human readable ``detail``; the API layer renders them as
``{"message": error, "description": detail}``.
"""

from fastapi import HTTPException, status
from typing import Any, Dict, Optional

from oauth_gateway.domain.oauth_errors import (
    FORBIDDEN,
    RATE_LIMIT_EXCEEDED,
    OAuthError,
)


class GatewayException(HTTPException):
    """
    Base exception for all gateway errors.
    Extends FastAPI's HTTPException with the error identifier.
    """

    def __init__(
            self,
            status_code: int,
            detail: Any = None,
            headers: Optional[Dict[str, Any]] = None,
            error: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error = error


class ForbiddenException(GatewayException):
    """Access token invalid, expired or missing a scope."""

    def __init__(self, detail: str = "Access token is not valid", headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            headers=headers,
            error=FORBIDDEN
        )


class RateLimitExceededException(GatewayException):
    """The identified client used up the requests of its current window."""

    def __init__(self, detail: str = "Request limit reached. Try again later.",
                 headers: Optional[Dict[str, str]] = None):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            headers=headers,
            error=RATE_LIMIT_EXCEEDED
        )


class ResourceNotFoundException(GatewayException):
    """Resource not found."""

    def __init__(self, detail: str = "Resource not found", resource_id: Any = None):
        resource_info = f" (ID: {resource_id})" if resource_id is not None else ""
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{detail}{resource_info}",
            error="not_found"
        )


class InvalidRequestException(GatewayException):
    """Malformed request input."""

    def __init__(self, detail: str = "The request is malformed"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error=OAuthError.INVALID_REQUEST.value
        )


class DatabaseOperationException(GatewayException):
    """Error in a database operation."""

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        error_info = f": {str(original_error)}" if original_error else ""
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{detail}{error_info}",
            error=OAuthError.SERVER_ERROR.value
        )
