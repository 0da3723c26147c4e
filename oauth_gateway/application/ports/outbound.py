# oauth_gateway/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from oauth_gateway.domain.models.client_domain_model import Client, QuotaUpdate
from oauth_gateway.domain.models.results import IssueResult, TokenCheck


class IClientStore(ABC):
    """Client and session lookups plus quota persistence, bound to one request."""

    @abstractmethod
    async def find_client(
            self, client_id: str, client_secret: Optional[str] = None, redirect_uri: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Get the raw client attributes, or None when the client does not exist
        or the secret / redirect URI do not match.
        """
        pass

    @abstractmethod
    async def find_session_by_token(self, access_token: str) -> Optional[Dict[str, Any]]:
        """Get the session owning an unexpired access token (contains 'client_id')."""
        pass

    @abstractmethod
    async def save_quota(self, client: Client, update: QuotaUpdate) -> Optional[Client]:
        """
        Apply the update atomically, conditioned on the stored window still
        admitting it. Returns the stored quota state after the update, or None
        when the stored state no longer admits the request.
        """
        pass

    @abstractmethod
    async def reload_quota(self, client: Client) -> Optional[Client]:
        """Refresh the client's quota fields from storage."""
        pass


class IAuthServer(ABC):
    """OAuth2 issuance engine."""

    @abstractmethod
    async def issue_access_token(self, input_data: Dict[str, Any]) -> IssueResult:
        """Run the requested grant with the full request input."""
        pass

    @abstractmethod
    def exception_http_headers(self, error: str) -> Dict[str, str]:
        """Headers recommended for an error response with the given code."""
        pass


class IResourceServer(ABC):
    """Validator for the access token presented on a resource request."""

    @abstractmethod
    async def is_valid(self, headers_only: bool = False) -> TokenCheck:
        """Check the token; ``headers_only`` ignores tokens sent as parameters."""
        pass

    @abstractmethod
    async def has_scope(self, scope: str) -> bool:
        """Whether the validated token carries the scope."""
        pass
