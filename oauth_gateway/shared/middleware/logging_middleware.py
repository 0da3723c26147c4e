# oauth_gateway/shared/middleware/logging_middleware.py (async version)

"""
Middleware for HTTP request logging.

Logs every request and its response, with the client identified for the
request when there is one.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from oauth_gateway.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)


def _client_label(request: Request) -> str:
    context = getattr(request.state, "oauth_context", None)
    if context is None or context.client is None:
        return "anonymous"
    return context.client.id


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request logging.
    """

    async def dispatch(self, request: Request, call_next):
        if settings.ENVIRONMENT == "production":
            logger.info(f"Request: {request.method} {request.url.path}")
        else:
            # Query params may carry credentials; only their names are logged
            query_keys = list(request.query_params.keys())
            logger.info(
                f"Request: {request.method} {request.url.path} | "
                f"Query: {query_keys if query_keys else 'N/A'} | "
                f"Client: {request.client.host if request.client else 'N/A'}"
            )

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if settings.ENVIRONMENT == "production":
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} | "
                f"API client: {_client_label(request)}"
            )
        else:
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} | "
                f"API client: {_client_label(request)} | "
                f"Time: {process_time:.4f}s"
            )

        return response
