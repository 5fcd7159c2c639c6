"""
Database session management with SQLAlchemy async
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from core.config import settings
import logging

logger = logging.getLogger(__name__)


def create_engine(database_url: str = None) -> AsyncEngine:
    """Create an async engine for the given URL (defaults to settings)"""
    url = database_url or settings.DATABASE_URL
    logger.debug(f"Creating database engine for {url.split('@')[-1]}")
    return create_async_engine(
        url,
        echo=False,
        poolclass=NullPool,  # One connection per checkout; nothing left holding the store file
        future=True
    )


def create_session_maker(bind: AsyncEngine) -> async_sessionmaker:
    """Create a session factory bound to an engine"""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )


# Shared engine for the read API
engine = create_engine()
async_session_maker = create_session_maker(engine)
