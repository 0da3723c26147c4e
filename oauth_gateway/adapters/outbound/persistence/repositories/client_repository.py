# oauth_gateway/adapters/outbound/persistence/repositories/client_repository.py (async version)

"""
Repository for client operations.

This module implements the database operations related to OAuth2 clients:
credential lookup, registration and the conditional quota update.
"""

import secrets
from typing import Any, Dict, Iterable, Optional
from sqlalchemy import and_, case, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from oauth_gateway.adapters.outbound.persistence.models import Client, ClientEndpoint
from oauth_gateway.adapters.outbound.security.auth_client_manager import ClientAuthManager
from oauth_gateway.domain.models.client_domain_model import Client as DomainClient, QuotaUpdate
from oauth_gateway.domain.exceptions import DatabaseOperationException
from oauth_gateway.shared.utils.clock import EPOCH, ensure_utc


class AsyncClientCRUD(AsyncCRUDBase[Client]):
    """
    Async repository for the Client entity.

    Extends AsyncCRUDBase with client-specific operations,
    such as credential lookup and quota persistence.
    """

    async def find_client(
            self,
            db: AsyncSession,
            client_id: str,
            client_secret: Optional[str] = None,
            redirect_uri: Optional[str] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Find a client by its credentials.

        The secret and the redirect URI are only checked when given.

        Args:
            db: Async database session
            client_id: Client identifier
            client_secret: Plain text secret
            redirect_uri: Redirect URI that must be registered for the client

        Returns:
            Raw client attributes or None when nothing matches

        Raises:
            DatabaseOperationException: In case of database error
        """
        client = await self.get(db, client_id)
        if client is None:
            self.logger.info(f"Lookup of unknown client_id: {client_id}")
            return None

        if client_secret is not None and not await ClientAuthManager.verify_password(client_secret, client.secret):
            self.logger.warning(f"Client lookup with incorrect secret: {client_id}")
            return None

        if redirect_uri is not None:
            try:
                query = select(ClientEndpoint.id).where(
                    ClientEndpoint.client_id == client_id,
                    ClientEndpoint.redirect_uri == redirect_uri,
                )
                result = await db.execute(query)
                endpoint_id = result.scalars().first()
            except SQLAlchemyError as e:
                self.logger.error(f"Error fetching endpoints of client '{client_id}': {str(e)}")
                raise DatabaseOperationException(
                    detail="Error fetching client endpoints",
                    original_error=e
                )
            if endpoint_id is None:
                self.logger.warning(f"Client lookup with unregistered redirect_uri: {client_id}")
                return None

        return {
            "client_id": client.id,
            "client_secret": client.secret,
            "redirect_uri": redirect_uri,
            "metadata": None,
            "name": client.name,
            "request_limit": client.request_limit,
            "current_total_request": client.current_total_request,
            "request_limit_until": client.request_limit_until,
            "last_request_at": client.last_request_at,
        }

    async def get_fresh(self, db: AsyncSession, client_id: str) -> Optional[Client]:
        """Load the client bypassing the values cached in the session."""
        try:
            query = (
                select(Client)
                .where(Client.id == client_id)
                .execution_options(populate_existing=True)
            )
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error reloading client '{client_id}': {str(e)}")
            raise DatabaseOperationException(
                detail="Error reloading client",
                original_error=e
            )

    async def update_quota(self, db: AsyncSession, client: DomainClient, quota: QuotaUpdate) -> bool:
        """
        Count one request against the client's window in a single statement.

        A request that opens a window only writes when the stored window has
        ended (or never existed). A request inside the window increments the
        stored counter only while the stored window is still open and the
        stored counter is below the limit, so concurrent requests can never
        push the counter past the limit.

        Returns:
            True if the row was updated, False if the stored state no longer admits the request

        Raises:
            DatabaseOperationException: In case of database error
        """
        now = quota.last_request_at
        window_unset = Client.request_limit_until.is_(None)
        window_negative = Client.request_limit_until < EPOCH

        if quota.opens_window:
            condition = or_(window_unset, Client.request_limit_until < now)
            values = {
                "current_total_request": 1,
                "request_limit_until": quota.request_limit_until,
                "last_request_at": now,
            }
        else:
            condition = and_(
                or_(Client.request_limit_until >= now, window_negative),
                Client.current_total_request < Client.request_limit,
            )
            values = {
                "current_total_request": Client.current_total_request + 1,
                "request_limit_until": case((window_negative, now), else_=Client.request_limit_until),
                "last_request_at": now,
            }

        try:
            stmt = (
                update(Client)
                .where(Client.id == client.id, condition)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            result = await db.execute(stmt)
            await db.commit()
            return result.rowcount == 1

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error updating quota of client '{client.id}': {str(e)}")
            raise DatabaseOperationException(
                detail="Error updating client quota",
                original_error=e
            )

    async def create_with_credentials(
            self,
            db: AsyncSession,
            name: str,
            request_limit: Optional[int] = None,
            redirect_uris: Iterable[str] = (),
    ) -> Dict[str, str]:
        """
        Register a new client with automatically generated credentials.

        Args:
            db: Async database session
            name: Display name of the client
            request_limit: Requests per window, defaults to DEFAULT_REQUEST_LIMIT
            redirect_uris: Redirect URIs to register

        Returns:
            Dictionary with client_id and client_secret

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            client_id = secrets.token_urlsafe(16)
            client_secret_plain = secrets.token_urlsafe(32)
            client_secret_hash = await ClientAuthManager.hash_password(client_secret_plain)

            client = Client(
                id=client_id,
                secret=client_secret_hash,
                name=name,
                request_limit=request_limit if request_limit is not None else settings.DEFAULT_REQUEST_LIMIT,
                current_total_request=0,
            )
            db.add(client)
            for redirect_uri in redirect_uris:
                db.add(ClientEndpoint(client_id=client_id, redirect_uri=redirect_uri))

            await db.commit()

            self.logger.info(f"Client created: {client_id}")

            # The secret is only exposed here; the database keeps the hash
            return {
                "client_id": client_id,
                "client_secret": client_secret_plain
            }

        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error creating client: {str(e)}")
            raise DatabaseOperationException(
                detail="Error creating client",
                original_error=e
            )

    def to_domain(self, db_model: Client) -> DomainClient:
        """
        Convert database model to domain model.
        """
        return DomainClient(
            id=db_model.id,
            secret=db_model.secret,
            name=db_model.name,
            request_limit=db_model.request_limit,
            current_total_request=db_model.current_total_request,
            request_limit_until=ensure_utc(db_model.request_limit_until),
            last_request_at=ensure_utc(db_model.last_request_at),
        )


# Public instance to be used by the stores
client_repository = AsyncClientCRUD(Client)
