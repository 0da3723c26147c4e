# oauth_gateway/application/use_cases/scope_guard.py

from typing import List, Optional, Sequence, Union

from oauth_gateway.application.ports.outbound import IResourceServer
from oauth_gateway.domain.models.results import Forbidden


def split_scopes(scope: Optional[Union[str, Sequence[str]]]) -> List[str]:
    """Accepts 'a,b' as well as ['a', 'b']; blanks are dropped, order kept."""
    if scope is None:
        return []
    items = scope.split(",") if isinstance(scope, str) else scope
    return [item.strip() for item in items if item and item.strip()]


class ScopeGuard:
    """Checks the access token of a resource request and its scopes."""

    def __init__(self, resource_server: IResourceServer):
        self.resource_server = resource_server

    async def validate(
            self,
            scope: Optional[Union[str, Sequence[str]]] = None,
            headers_only: bool = False,
    ) -> Optional[Forbidden]:
        """
        Returns None when the request may proceed, otherwise a Forbidden
        describing the first problem found.
        """
        check = await self.resource_server.is_valid(headers_only)
        if not check.valid:
            return Forbidden(description=check.message or "Access token is not valid")

        for item in split_scopes(scope):
            if not await self.resource_server.has_scope(item):
                return Forbidden(description=f"Only access token with scope {item} can use this endpoint")

        return None
