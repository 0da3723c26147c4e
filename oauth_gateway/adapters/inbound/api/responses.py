# oauth_gateway/adapters/inbound/api/responses.py

from typing import Dict

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from oauth_gateway.application.use_cases.rate_limiter import rate_limit_headers
from oauth_gateway.application.use_cases.request_gateway import GatewayResponse


def to_json_response(response: GatewayResponse) -> JSONResponse:
    """Render a GatewayResponse, rate-limit headers included."""
    return JSONResponse(
        status_code=response.status_code,
        content=jsonable_encoder(response.content),
        headers=response.headers,
    )


def identified_client_headers(request: Request) -> Dict[str, str]:
    """
    X-Rate-Limit-* headers of the client already identified for this
    request, or nothing when no client was identified.
    """
    context = getattr(request.state, "oauth_context", None)
    if context is None:
        return {}
    return rate_limit_headers(context.client)
