# oauth_gateway/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence, Union

from oauth_gateway.domain.models.client_domain_model import Client


class IRequestGateway(ABC):
    """Interface for the per-request governance use cases."""

    @abstractmethod
    async def get_client(self) -> Optional[Client]:
        """Client that issued the current request, if any."""
        pass

    @abstractmethod
    async def check_request_limit(self) -> bool:
        """Consume one request from the client's quota; True when the limit is reached."""
        pass

    @abstractmethod
    async def perform_access_token_flow(self):
        """Delegate the token request to the issuance engine."""
        pass

    @abstractmethod
    async def validate_access_token(self, scope: Optional[Union[str, Sequence[str]]] = None):
        """Return a 403 response when the token or its scopes are not acceptable."""
        pass

    @abstractmethod
    async def resource_json(self, data: Any = None, status_code: int = 200,
                            headers: Optional[Dict[str, str]] = None):
        """JSON response for a single resource with rate-limit headers."""
        pass
