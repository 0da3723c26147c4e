# oauth_gateway/shared/middleware/__init__.py (async version)

from oauth_gateway.shared.middleware.exception_middleware import AsyncExceptionMiddleware
from oauth_gateway.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
]
