# oauth_gateway/adapters/outbound/persistence/repositories/__init__.py (async version)

"""
Repository module.

Exports the repository classes and their shared instances for the OAuth2
entities, plus the request-bound client store built on top of them.
"""

from oauth_gateway.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from oauth_gateway.adapters.outbound.persistence.repositories.client_repository import (
    AsyncClientCRUD,
    client_repository,
)
from oauth_gateway.adapters.outbound.persistence.repositories.session_repository import (
    AsyncScopeRepository,
    AsyncSessionRepository,
    scope_repository,
    session_repository,
)
from oauth_gateway.adapters.outbound.persistence.repositories.client_store import SqlAlchemyClientStore

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncClientCRUD",
    "AsyncSessionRepository",
    "AsyncScopeRepository",
    "SqlAlchemyClientStore",

    # Instances
    "client_repository",
    "session_repository",
    "scope_repository",
]
