# oauth_gateway/adapters/outbound/persistence/models/__init__.py

"""
Data models.

Exports every SQLAlchemy model so that importing this package registers
the whole schema on ``Base.metadata``.
"""

from oauth_gateway.adapters.outbound.persistence.models.base_model import Base
from oauth_gateway.adapters.outbound.persistence.models.client_model import Client, ClientEndpoint
from oauth_gateway.adapters.outbound.persistence.models.session_model import (
    AccessToken,
    Scope,
    Session,
    access_token_scopes,
)

__all__ = [
    "Base",
    "Client",
    "ClientEndpoint",
    "Session",
    "AccessToken",
    "Scope",
    "access_token_scopes",
]
