# oauth_gateway/application/use_cases/request_gateway.py

"""
Orchestration of one governed request.

The gateway ties together client identification, the request quota, the
token/scope guard and the issuance engine, and builds every JSON response
with the rate-limit headers of the identified client.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Union

from oauth_gateway.application.ports.inbound import IRequestGateway
from oauth_gateway.application.ports.outbound import IAuthServer, IResourceServer
from oauth_gateway.application.use_cases.client_identifier import ClientIdentifier
from oauth_gateway.application.use_cases.exception_translator import ExceptionTranslator
from oauth_gateway.application.use_cases.rate_limiter import RateLimiter
from oauth_gateway.application.use_cases.scope_guard import ScopeGuard
from oauth_gateway.domain.models.client_domain_model import Client
from oauth_gateway.domain.models.request_context import RequestContext
from oauth_gateway.domain.models.results import Issued, ProtocolFailure

logger = logging.getLogger(__name__)


@dataclass
class GatewayResponse:
    content: Any
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


class RequestGateway(IRequestGateway):
    """
    Per-request facade over the governance components.

    Instances are built for a single request and hold no state beyond its
    RequestContext.
    """

    def __init__(
            self,
            context: RequestContext,
            client_identifier: ClientIdentifier,
            rate_limiter: RateLimiter,
            auth_server: Optional[IAuthServer] = None,
            resource_server: Optional[IResourceServer] = None,
            headers_only: bool = False,
    ):
        self.context = context
        self.client_identifier = client_identifier
        self.rate_limiter = rate_limiter
        self.auth_server = auth_server
        self.resource_server = resource_server
        self.headers_only = headers_only
        self.translator = ExceptionTranslator(
            auth_server.exception_http_headers if auth_server is not None else None
        )

    async def get_client(self) -> Optional[Client]:
        return await self.client_identifier.resolve(self.context)

    async def check_request_limit(self) -> bool:
        client = await self.get_client()
        return await self.rate_limiter.check_and_consume(client)

    async def rate_limit_headers(self) -> Dict[str, str]:
        client = await self.get_client()
        return self.rate_limiter.headers_for(client)

    async def resource_json(self, data: Any = None, status_code: int = 200,
                            headers: Optional[Dict[str, str]] = None) -> GatewayResponse:
        merged = dict(headers or {})
        merged.update(await self.rate_limit_headers())
        return GatewayResponse(content={} if data is None else data, status_code=status_code, headers=merged)

    async def collection_json(self, items: Optional[Sequence[Any]] = None, status_code: int = 200,
                              headers: Optional[Dict[str, str]] = None) -> GatewayResponse:
        return await self.resource_json(list(items or []), status_code, headers)

    async def perform_access_token_flow(self) -> GatewayResponse:
        """
        Hand the request input to the issuance engine and shape its answer.

        Unexpected engine errors become 500 'undefined_error' responses.
        """
        if self.auth_server is None:
            raise RuntimeError("No issuance engine configured for this request")

        input_data = self.context.all()

        try:
            result = await self.auth_server.issue_access_token(input_data)
        except Exception as e:
            logger.exception(f"Issuance engine failed: {e}")
            translation = self.translator.undefined(str(e))
            return await self.resource_json(translation.body, translation.status_code)

        if isinstance(result, Issued):
            return await self.resource_json(result.payload)

        if isinstance(result, ProtocolFailure):
            logger.info(f"Token request rejected: {result.error} ({result.description})")
            translation = self.translator.translate_failure(result)
            return await self.resource_json(translation.body, translation.status_code, translation.headers)

        logger.error(f"Issuance engine returned an unexpected value: {result!r}")
        translation = self.translator.undefined("Unexpected response from the authorization server")
        return await self.resource_json(translation.body, translation.status_code)

    async def validate_access_token(
            self, scope: Optional[Union[str, Sequence[str]]] = None
    ) -> Optional[GatewayResponse]:
        """
        None when the access token (and scope, if given) is acceptable,
        otherwise a ready 403 response.
        """
        if self.resource_server is None:
            raise RuntimeError("No resource server configured for this request")

        forbidden = await ScopeGuard(self.resource_server).validate(scope, self.headers_only)
        if forbidden is None:
            return None

        logger.info(f"Access token rejected: {forbidden.description}")
        return await self.resource_json(
            {"message": forbidden.message, "description": forbidden.description},
            403,
        )
