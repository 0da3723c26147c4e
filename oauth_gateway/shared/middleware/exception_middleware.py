# oauth_gateway/shared/middleware/exception_middleware.py (async version)

"""
Middleware for centralized exception handling.

Exceptions that escape the endpoints and the gateway exception handler
are answered with the gateway's error body: ``{"message", "description"}``.
"""

import time
import logging
import traceback
from typing import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.base import BaseHTTPMiddleware

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.adapters.inbound.api.responses import identified_client_headers
from oauth_gateway.domain.oauth_errors import UNDEFINED_ERROR, OAuthError

# Configure logger
logger = logging.getLogger(__name__)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Database errors become 'server_error', anything else 'undefined_error'.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except SQLAlchemyError as exc:
            if settings.ENVIRONMENT == "production":
                description = "Internal database error"
                logger.error(
                    f"Database error: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | "
                    f"Client: {request.client.host if request.client else 'N/A'}"
                )
            else:
                description = str(exc)
                logger.error(
                    f"Database error: {str(exc)} | "
                    f"Path: {request.url.path} | "
                    f"Client: {request.client.host if request.client else 'N/A'}"
                )

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "message": OAuthError.SERVER_ERROR.value,
                    "description": description
                },
                headers=identified_client_headers(request),
            )

        except Exception as exc:
            # Unhandled exceptions
            if settings.ENVIRONMENT == "production":
                description = "Internal server error"
                logger.exception(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | "
                    f"Client: {request.client.host if request.client else 'N/A'}"
                )
            else:
                description = str(exc)
                stack_trace = traceback.format_exc()
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path} | "
                    f"Client: {request.client.host if request.client else 'N/A'}\n"
                    f"Traceback: {stack_trace}"
                )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "message": UNDEFINED_ERROR,
                    "description": description
                },
                headers=identified_client_headers(request),
            )
