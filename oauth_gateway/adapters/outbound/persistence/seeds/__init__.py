# oauth_gateway/adapters/outbound/persistence/seeds/__init__.py

"""
Seeds for database initialization.

Populates the database with the data the service needs to run.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession

from oauth_gateway.adapters.outbound.persistence.seeds.scopes import run_scopes_seed

logger = logging.getLogger(__name__)


async def run_all_seeds(db: AsyncSession) -> None:
    """
    Run every seed in order.

    Args:
        db: Async database session
    """
    logger.info("Running all seeds")

    await run_scopes_seed(db)

    logger.info("All seeds executed")


async def _main() -> None:
    from oauth_gateway.adapters.outbound.persistence.database import get_db_context

    async with get_db_context() as db:
        await run_all_seeds(db)

