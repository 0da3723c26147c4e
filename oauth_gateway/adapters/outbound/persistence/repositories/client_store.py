# oauth_gateway/adapters/outbound/persistence/repositories/client_store.py (async version)

from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from oauth_gateway.adapters.outbound.persistence.repositories.client_repository import client_repository
from oauth_gateway.adapters.outbound.persistence.repositories.session_repository import session_repository
from oauth_gateway.application.ports.outbound import IClientStore
from oauth_gateway.domain.models.client_domain_model import Client, QuotaUpdate


class SqlAlchemyClientStore(IClientStore):
    """IClientStore backed by the client and session repositories, bound to one database session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_client(
            self, client_id: str, client_secret: Optional[str] = None, redirect_uri: Optional[str] = None
    ) -> Optional[Dict[str, Any]]:
        return await client_repository.find_client(self.db, client_id, client_secret, redirect_uri)

    async def find_session_by_token(self, access_token: str) -> Optional[Dict[str, Any]]:
        return await session_repository.find_session_by_token(self.db, access_token)

    async def save_quota(self, client: Client, update: QuotaUpdate) -> Optional[Client]:
        if not await client_repository.update_quota(self.db, client, update):
            return None
        return await self.reload_quota(client)

    async def reload_quota(self, client: Client) -> Optional[Client]:
        db_client = await client_repository.get_fresh(self.db, client.id)
        if db_client is None:
            return None
        return client_repository.to_domain(db_client)
