# oauth_gateway/adapters/inbound/api/v1/endpoints/client_endpoint.py (async version)

"""
Endpoints about the client that makes the request.
"""

import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from oauth_gateway.adapters.inbound.api.deps import require_scope
from oauth_gateway.adapters.inbound.api.responses import to_json_response
from oauth_gateway.application.dtos.client_dto import ClientOutput
from oauth_gateway.application.dtos.oauth_dto import ErrorResponse
from oauth_gateway.application.use_cases.request_gateway import RequestGateway
from oauth_gateway.domain.exceptions import ResourceNotFoundException

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Client"])


@router.get(
    "",
    response_model=ClientOutput,
    responses={403: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def read_current_client(gateway: RequestGateway = Depends(require_scope("basic"))) -> JSONResponse:
    """
    Return the public data of the client owning the access token.

    Requires scope 'basic'.
    """
    client = await gateway.get_client()
    if client is None:
        raise ResourceNotFoundException("Client not found")

    output = ClientOutput.model_validate(client)
    return to_json_response(await gateway.resource_json(output.model_dump()))
