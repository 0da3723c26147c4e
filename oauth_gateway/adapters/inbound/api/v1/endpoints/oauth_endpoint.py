# oauth_gateway/adapters/inbound/api/v1/endpoints/oauth_endpoint.py (async version)

"""
Token endpoint of the authorization server.
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from oauth_gateway.adapters.inbound.api.deps import enforce_request_limit
from oauth_gateway.adapters.inbound.api.responses import to_json_response
from oauth_gateway.application.dtos.oauth_dto import AccessTokenResponse, ErrorResponse
from oauth_gateway.application.use_cases.request_gateway import RequestGateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["OAuth2"])


@router.post(
    "/access_token",
    response_model=AccessTokenResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        501: {"model": ErrorResponse},
    },
)
async def issue_access_token(gateway: RequestGateway = Depends(enforce_request_limit)) -> JSONResponse:
    """
    Issue an access token.

    Accepts form or JSON fields: grant_type, client_id, client_secret,
    scope (comma or space separated) and redirect_uri.
    """
    return to_json_response(await gateway.perform_access_token_flow())
