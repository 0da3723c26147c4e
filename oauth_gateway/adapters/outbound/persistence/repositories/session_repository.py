# oauth_gateway/adapters/outbound/persistence/repositories/session_repository.py (async version)

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from oauth_gateway.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from oauth_gateway.adapters.outbound.persistence.models import (
    AccessToken,
    Scope,
    Session,
    access_token_scopes,
)
from oauth_gateway.domain.exceptions import DatabaseOperationException
from oauth_gateway.shared.utils.clock import ensure_utc, utcnow


class AsyncSessionRepository(AsyncCRUDBase[Session]):
    """Repository for OAuth2 sessions and their access tokens."""

    async def find_session_by_token(
            self, db: AsyncSession, access_token: str, now: Optional[datetime] = None
    ) -> Optional[Dict[str, Any]]:
        """
        Find the session owning an access token that has not expired yet.

        Args:
            db: Async database session
            access_token: Raw access token
            now: Reference time for the expiry check

        Returns:
            Session data (session_id, client_id, owner_type, owner_id,
            access_token_id, access_token_expires) or None
        """
        now = now or utcnow()
        try:
            query = (
                select(
                    Session.id,
                    Session.client_id,
                    Session.owner_type,
                    Session.owner_id,
                    AccessToken.id,
                    AccessToken.access_token_expires,
                )
                .join(AccessToken, AccessToken.session_id == Session.id)
                .where(
                    AccessToken.access_token == access_token,
                    AccessToken.access_token_expires >= now,
                )
            )
            result = await db.execute(query)
            row = result.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching session by access token: {str(e)}")
            raise DatabaseOperationException(
                detail="Error fetching session by access token",
                original_error=e
            )

        if row is None:
            return None

        return {
            "session_id": row[0],
            "client_id": row[1],
            "owner_type": row[2],
            "owner_id": row[3],
            "access_token_id": row[4],
            "access_token_expires": ensure_utc(row[5]),
        }

    async def get_token_scopes(self, db: AsyncSession, access_token_id: Any) -> List[str]:
        """
        List the scope identifiers granted to an access token.
        """
        try:
            query = (
                select(Scope.scope)
                .join(access_token_scopes, access_token_scopes.c.scope_id == Scope.id)
                .where(access_token_scopes.c.access_token_id == access_token_id)
                .order_by(Scope.scope)
            )
            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching scopes of access token {access_token_id}: {str(e)}")
            raise DatabaseOperationException(
                detail="Error fetching access token scopes",
                original_error=e
            )

    async def create_session(self, db: AsyncSession, client_id: str, owner_type: str, owner_id: str) -> Session:
        return await self.create(
            db,
            obj_in={"client_id": client_id, "owner_type": owner_type, "owner_id": owner_id},
            commit=False,
        )

    async def add_access_token(
            self,
            db: AsyncSession,
            session: Session,
            access_token: str,
            expires_at: datetime,
            scopes: Iterable[Scope] = (),
    ) -> AccessToken:
        """
        Store an access token with its scopes and commit the session that owns it.

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            token = AccessToken(
                session_id=session.id,
                access_token=access_token,
                access_token_expires=expires_at,
                scopes=list(scopes),
            )
            db.add(token)
            await db.commit()
            self.logger.info(f"Access token issued for client {session.client_id} (session {session.id})")
            return token
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error storing access token: {str(e)}")
            raise DatabaseOperationException(
                detail="Error storing access token",
                original_error=e
            )


class AsyncScopeRepository(AsyncCRUDBase[Scope]):
    """Repository for scope definitions."""

    async def get_by_scope(self, db: AsyncSession, scope: str) -> Optional[Scope]:
        return await self.get_by_field(db, "scope", scope)

    async def ensure_scopes(self, db: AsyncSession, scopes: Iterable[str]) -> int:
        """
        Create the scopes that do not exist yet.

        Returns:
            Number of scopes created
        """
        created = 0
        for scope in scopes:
            if await self.get_by_scope(db, scope) is None:
                await self.create(db, obj_in={"scope": scope, "name": scope}, commit=False)
                created += 1
        if created:
            try:
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                self.logger.error(f"Error creating scopes: {str(e)}")
                raise DatabaseOperationException(detail="Error creating scopes", original_error=e)
        return created


# Public instances
session_repository = AsyncSessionRepository(Session)
scope_repository = AsyncScopeRepository(Scope)
