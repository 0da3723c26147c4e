# oauth_gateway/domain/oauth_errors.py

"""
OAuth2 error identifiers understood by the gateway.

RFC 6749, section 4.1.2.1: no 503 status code for 'temporarily_unavailable',
because a 503 Service Unavailable HTTP status code cannot be returned to the
client via an HTTP redirect.
"""

from enum import Enum


class OAuthError(str, Enum):
    INVALID_REQUEST = "invalid_request"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    ACCESS_DENIED = "access_denied"
    UNSUPPORTED_RESPONSE_TYPE = "unsupported_response_type"
    INVALID_SCOPE = "invalid_scope"
    SERVER_ERROR = "server_error"
    TEMPORARILY_UNAVAILABLE = "temporarily_unavailable"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_REFRESH = "invalid_refresh"


EXCEPTION_HTTP_STATUS_CODES = {
    OAuthError.INVALID_REQUEST: 400,
    OAuthError.UNAUTHORIZED_CLIENT: 400,
    OAuthError.ACCESS_DENIED: 401,
    OAuthError.UNSUPPORTED_RESPONSE_TYPE: 400,
    OAuthError.INVALID_SCOPE: 400,
    OAuthError.SERVER_ERROR: 500,
    OAuthError.TEMPORARILY_UNAVAILABLE: 400,
    OAuthError.UNSUPPORTED_GRANT_TYPE: 501,
    OAuthError.INVALID_CLIENT: 401,
    OAuthError.INVALID_GRANT: 400,
    OAuthError.INVALID_CREDENTIALS: 400,
    OAuthError.INVALID_REFRESH: 400,
}

UNDEFINED_ERROR = "undefined_error"
FORBIDDEN = "forbidden"
RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
