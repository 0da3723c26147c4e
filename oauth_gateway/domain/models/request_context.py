# oauth_gateway/domain/models/request_context.py

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from oauth_gateway.domain.models.client_domain_model import Client

# Input field that may carry the access token when parameters are allowed
TOKEN_PARAMETER = "access_token"


@dataclass
class RequestContext:
    """
    State that lives for exactly one inbound request.

    Holds the merged request input (query string and body), the bearer
    token from the Authorization header and the client resolution, which
    is computed once and then reused for the rest of the request.
    """
    input: Dict[str, Any] = field(default_factory=dict)
    bearer_token: Optional[str] = None
    client: Optional[Client] = None
    client_resolved: bool = False

    def get(self, key: str, default: Any = None) -> Any:
        """Return an input value, treating empty strings as missing."""
        value = self.input.get(key)
        if value is None or value == "":
            return default
        return value

    def all(self) -> Dict[str, Any]:
        return dict(self.input)

    def access_token(self, headers_only: bool = False) -> Optional[str]:
        """
        The access token presented with the request: the bearer header
        first, then the ``access_token`` input unless ``headers_only``.
        """
        if self.bearer_token:
            return self.bearer_token
        if headers_only:
            return None
        return self.get(TOKEN_PARAMETER)

    def remember_client(self, client: Optional[Client]) -> None:
        self.client = client
        self.client_resolved = True
