# oauth_gateway/adapters/outbound/persistence/seeds/scopes.py

"""
Seed for the scopes listed in DEFAULT_SCOPES.
"""

import logging
from typing import Iterable, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.adapters.outbound.persistence.repositories.session_repository import scope_repository

logger = logging.getLogger(__name__)


async def run_scopes_seed(db: AsyncSession, scopes: Optional[Iterable[str]] = None) -> int:
    scopes = list(scopes) if scopes is not None else settings.default_scopes
    created = await scope_repository.ensure_scopes(db, scopes)
    if created:
        logger.info(f"Scope seed created {created} scope(s)")
    else:
        logger.info("Scope seed: all scopes already exist")
    return created
