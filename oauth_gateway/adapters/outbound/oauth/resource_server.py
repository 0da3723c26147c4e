# oauth_gateway/adapters/outbound/oauth/resource_server.py (async version)

from datetime import datetime
from typing import Callable, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from oauth_gateway.adapters.outbound.persistence.repositories.session_repository import session_repository
from oauth_gateway.adapters.outbound.security.auth_client_manager import ClientAuthManager
from oauth_gateway.application.ports.outbound import IResourceServer
from oauth_gateway.domain.models.request_context import RequestContext
from oauth_gateway.domain.models.results import TokenCheck
from oauth_gateway.shared.utils.clock import utcnow


class DatabaseResourceServer(IResourceServer):
    """
    Validates the access token of the current request against the issued
    tokens table. The token is taken from the Authorization header or, when
    parameters are allowed, from the ``access_token`` input field.
    """

    def __init__(self, db: AsyncSession, context: RequestContext, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.context = context
        self.clock = clock
        self._check: Optional[TokenCheck] = None

    async def is_valid(self, headers_only: bool = False) -> TokenCheck:
        token = self.context.access_token(headers_only)
        if not token:
            self._check = TokenCheck(valid=False, message="Access token is missing")
            return self._check

        if await ClientAuthManager.verify_access_token(token) is None:
            self._check = TokenCheck(valid=False, message="Access token is not valid")
            return self._check

        session = await session_repository.find_session_by_token(self.db, token, self.clock())
        if session is None:
            self._check = TokenCheck(valid=False, message="Access token is not valid")
            return self._check

        scopes = await session_repository.get_token_scopes(self.db, session["access_token_id"])
        self._check = TokenCheck(
            valid=True,
            client_id=session["client_id"],
            scopes=frozenset(scopes),
        )
        return self._check

    async def has_scope(self, scope: str) -> bool:
        if self._check is None or not self._check.valid:
            return False
        return scope in self._check.scopes
