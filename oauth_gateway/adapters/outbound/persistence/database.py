# oauth_gateway/adapters/outbound/persistence/database.py (async version)

import logging
from typing import Any, AsyncGenerator, Dict
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError

from oauth_gateway.adapters.configuration.config import settings
from oauth_gateway.adapters.outbound.persistence.models.base_model import Base

# Configure logger
logger = logging.getLogger(__name__)

database_url = str(settings.DATABASE_URL)
logger.info(f"Connecting to database: {database_url.split('@')[-1]}")


def _engine_options(url: str) -> Dict[str, Any]:
    # SQLite engines use single connection pools without sizing options
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": 20,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
        "pool_pre_ping": True,
    }


try:
    # Create async engine
    engine = create_async_engine(
        database_url,
        echo=False,
        **_engine_options(database_url),
    )

    # Create async session factory
    AsyncSessionLocal = async_sessionmaker(
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )

    logger.info("Async database connection configured successfully")

except SQLAlchemyError as e:
    logger.error(f"Error connecting to database: {str(e)}")
    raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Provides an async context for database operations,
    ensuring the session is closed at the end.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    session = AsyncSessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency injection for use with FastAPI.

    Yields:
        AsyncSession: SQLAlchemy async session
    """
    async with get_db_context() as session:
        yield session


__all__ = ["Base", "engine", "AsyncSessionLocal", "get_db", "get_db_context"]
