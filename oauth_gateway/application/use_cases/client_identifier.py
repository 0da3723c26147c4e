# oauth_gateway/application/use_cases/client_identifier.py

"""
Identification of the client behind an inbound request.

A request names its client either through an access token (whose session
points at the client) or directly through client credentials. The token
wins when both are present. The token is taken from the same places the
resource server validates it from, with the validate_access_token input as
the last fallback.
"""

import logging
from typing import Any, Dict, Optional

from oauth_gateway.application.ports.outbound import IClientStore
from oauth_gateway.domain.models.client_domain_model import Client
from oauth_gateway.domain.models.request_context import RequestContext
from oauth_gateway.shared.utils.clock import ensure_utc

logger = logging.getLogger(__name__)

TOKEN_VALIDATION_FIELD = "validate_access_token"

# Attributes only used to look the client up; never exposed on the Client
LOOKUP_ONLY_FIELDS = ("client_id", "client_secret", "redirect_uri", "metadata")


class ClientIdentifier:
    """Resolves, and memoizes per request, the client of a request."""

    def __init__(self, client_store: IClientStore, headers_only: bool = False):
        self.client_store = client_store
        self.headers_only = headers_only

    async def resolve(self, context: RequestContext) -> Optional[Client]:
        """
        Return the client that issued the request, or None when the request
        cannot be tied to a registered client.

        The outcome (None included) is stored on the context, so the store
        is queried at most once per request.
        """
        if context.client_resolved:
            return context.client

        client = await self._identify(context)
        context.remember_client(client)
        return client

    async def _identify(self, context: RequestContext) -> Optional[Client]:
        client_id = context.get("client_id")
        client_secret = context.get("client_secret")
        redirect_uri = context.get("redirect_uri")
        access_token = context.access_token(self.headers_only) or context.get(TOKEN_VALIDATION_FIELD)

        if access_token:
            session = await self.client_store.find_session_by_token(access_token)
            if session is not None:
                client_id = session["client_id"]

        if not client_id:
            return None

        attributes = await self.client_store.find_client(client_id, client_secret, redirect_uri)
        if attributes is None:
            logger.debug(f"Request could not be tied to client '{client_id}'")
            return None

        return self._build_client(client_id, attributes)

    @staticmethod
    def _build_client(client_id: str, attributes: Dict[str, Any]) -> Client:
        data = dict(attributes)
        secret = data.get("client_secret")
        for key in LOOKUP_ONLY_FIELDS:
            data.pop(key, None)

        return Client(
            id=client_id,
            secret=secret,
            name=data.get("name"),
            request_limit=int(data.get("request_limit") or 0),
            current_total_request=int(data.get("current_total_request") or 0),
            request_limit_until=ensure_utc(data.get("request_limit_until")),
            last_request_at=ensure_utc(data.get("last_request_at")),
        )
