# oauth_gateway/adapters/outbound/oauth/auth_server.py (async version)

"""
Issuance engine for the client credentials grant.

The engine authenticates the client, checks the requested scopes, opens a
session owned by the client and stores a signed access token for it.
Failures are returned as ProtocolFailure values.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.adapters.outbound.persistence.repositories.client_repository import client_repository
from oauth_gateway.adapters.outbound.persistence.repositories.session_repository import (
    scope_repository,
    session_repository,
)
from oauth_gateway.adapters.outbound.security.auth_client_manager import ClientAuthManager
from oauth_gateway.application.ports.outbound import IAuthServer
from oauth_gateway.domain.models.results import Issued, IssueResult, ProtocolFailure
from oauth_gateway.domain.oauth_errors import OAuthError
from oauth_gateway.shared.utils.clock import to_epoch, utcnow

logger = logging.getLogger(__name__)

CLIENT_CREDENTIALS = "client_credentials"


def _missing_parameter(name: str) -> ProtocolFailure:
    return ProtocolFailure(
        error=OAuthError.INVALID_REQUEST.value,
        description=(
            "The request is missing a required parameter, includes an invalid parameter value, "
            f'includes a parameter more than once, or is otherwise malformed. Check the "{name}" parameter.'
        ),
    )


def parse_requested_scopes(raw: Optional[str]) -> List[str]:
    """Scopes may be separated by commas or whitespace; duplicates are dropped."""
    if not raw:
        return []
    scopes: List[str] = []
    for item in re.split(r"[,\s]+", raw):
        if item and item not in scopes:
            scopes.append(item)
    return scopes


class ClientCredentialsAuthServer(IAuthServer):
    """IAuthServer that knows the client_credentials grant only."""

    def __init__(
            self,
            db: AsyncSession,
            expires_in: int = settings.ACCESS_TOKEN_EXPIRE_SECONDS,
            clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.expires_in = expires_in
        self.clock = clock

    async def issue_access_token(self, input_data: Dict[str, Any]) -> IssueResult:
        grant_type = input_data.get("grant_type")
        if not grant_type:
            return _missing_parameter("grant_type")

        if grant_type != CLIENT_CREDENTIALS:
            return ProtocolFailure(
                error=OAuthError.UNSUPPORTED_GRANT_TYPE.value,
                description=(
                    f'The authorization grant type "{grant_type}" '
                    "is not supported by the authorization server."
                ),
            )

        client_id = input_data.get("client_id")
        if not client_id:
            return _missing_parameter("client_id")

        client_secret = input_data.get("client_secret")
        if not client_secret:
            return _missing_parameter("client_secret")

        client = await client_repository.find_client(self.db, client_id, client_secret)
        if client is None:
            logger.warning(f"Client authentication failed for client_id: {client_id}")
            return ProtocolFailure(
                error=OAuthError.INVALID_CLIENT.value,
                description="Client authentication failed",
            )

        requested = parse_requested_scopes(input_data.get("scope"))
        scopes = []
        for name in requested:
            scope = await scope_repository.get_by_scope(self.db, name)
            if scope is None:
                return ProtocolFailure(
                    error=OAuthError.INVALID_SCOPE.value,
                    description=(
                        "The requested scope is invalid, unknown, or malformed. "
                        f'Check the "{name}" scope.'
                    ),
                )
            scopes.append(scope)

        now = self.clock()
        session = await session_repository.create_session(self.db, client_id, "client", client_id)
        token, expires_at = await ClientAuthManager.create_access_token(
            client_id,
            requested,
            expires_delta=timedelta(seconds=self.expires_in),
            issued_at=now,
        )
        await session_repository.add_access_token(self.db, session, token, expires_at, scopes)

        return Issued({
            "access_token": token,
            "token_type": "Bearer",
            "expires": to_epoch(expires_at),
            "expires_in": self.expires_in,
            "scope": " ".join(requested),
        })

    def exception_http_headers(self, error: str) -> Dict[str, str]:
        if error == OAuthError.INVALID_CLIENT.value:
            return {"WWW-Authenticate": 'Basic realm="OAuth"'}
        return {}
