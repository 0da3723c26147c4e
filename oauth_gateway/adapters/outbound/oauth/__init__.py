# oauth_gateway/adapters/outbound/oauth/__init__.py

from oauth_gateway.adapters.outbound.oauth.auth_server import ClientCredentialsAuthServer
from oauth_gateway.adapters.outbound.oauth.resource_server import DatabaseResourceServer

__all__ = ["ClientCredentialsAuthServer", "DatabaseResourceServer"]
