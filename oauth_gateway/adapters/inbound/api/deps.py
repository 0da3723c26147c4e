# oauth_gateway/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module builds the per-request context and gateway, and turns the
gateway's decisions (quota reached, token refused) into HTTP errors via
FastAPI Depends().
"""

import logging
from typing import Callable, Optional, Sequence, Union
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.adapters.outbound.oauth import ClientCredentialsAuthServer, DatabaseResourceServer
from oauth_gateway.adapters.outbound.persistence.database import get_db
from oauth_gateway.adapters.outbound.persistence.repositories.client_store import SqlAlchemyClientStore
from oauth_gateway.application.use_cases.client_identifier import ClientIdentifier
from oauth_gateway.application.use_cases.rate_limiter import RateLimiter
from oauth_gateway.application.use_cases.request_gateway import RequestGateway
from oauth_gateway.domain.exceptions import (
    ForbiddenException,
    InvalidRequestException,
    RateLimitExceededException,
)
from oauth_gateway.domain.models.request_context import RequestContext

# Configure logger
logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _json_scalar(value):
    # JSON numbers are read as the text a form would have carried
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


########################################################################
# Request Context
########################################################################

async def get_request_context(request: Request) -> RequestContext:
    """
    Build the RequestContext from the query string, the JSON or form body
    and the Authorization header. Body values override query values.

    Raises:
        InvalidRequestException: If a JSON body cannot be decoded
    """
    context = getattr(request.state, "oauth_context", None)
    if context is not None:
        return context

    data = dict(request.query_params)
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "application/json":
        body = await request.body()
        if body:
            try:
                payload = await request.json()
            except ValueError:
                logger.warning(f"Malformed JSON body on {request.url.path}")
                raise InvalidRequestException("The request body is not valid JSON")
            if not isinstance(payload, dict):
                raise InvalidRequestException("The request body must be a JSON object")
            data.update({key: _json_scalar(value) for key, value in payload.items()})
    elif content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        data.update({key: value for key, value in form.items() if isinstance(value, str)})

    context = RequestContext(input=data, bearer_token=_bearer_token(request.headers.get("Authorization")))
    request.state.oauth_context = context
    return context


async def get_request_gateway(
        context: RequestContext = Depends(get_request_context),
        db: AsyncSession = Depends(get_db),
) -> RequestGateway:
    """
    Wire the governance components for the current request.
    """
    client_store = SqlAlchemyClientStore(db)
    return RequestGateway(
        context,
        ClientIdentifier(client_store, headers_only=settings.headers_only),
        RateLimiter(
            client_store,
            window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
            max_retries=settings.RATE_LIMIT_MAX_RETRIES,
        ),
        auth_server=ClientCredentialsAuthServer(db),
        resource_server=DatabaseResourceServer(db, context),
        headers_only=settings.headers_only,
    )


########################################################################
# Governance Gates
########################################################################

async def enforce_request_limit(
        gateway: RequestGateway = Depends(get_request_gateway),
) -> RequestGateway:
    """
    Count the request against the client's quota.

    Raises:
        RateLimitExceededException: If the client used up its window
    """
    if await gateway.check_request_limit():
        client = await gateway.get_client()
        logger.warning(f"Rate limit exceeded for client {client.id if client else 'N/A'}")
        raise RateLimitExceededException(headers=await gateway.rate_limit_headers())
    return gateway


def require_scope(scope: Optional[Union[str, Sequence[str]]] = None) -> Callable:
    """
    Dependency factory: the request must carry a valid access token holding
    every scope given (a comma separated string or a list).
    """

    async def dependency(gateway: RequestGateway = Depends(enforce_request_limit)) -> RequestGateway:
        denied = await gateway.validate_access_token(scope)
        if denied is not None:
            raise ForbiddenException(detail=denied.content["description"], headers=denied.headers)
        return gateway

    return dependency
