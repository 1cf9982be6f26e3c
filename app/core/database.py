# app/core/database.py
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from .config import settings
import logging
from typing import AsyncGenerator

logger = logging.getLogger(__name__)

# Engine configuration for a pooled server database
engine_kwargs = {
    "echo": False,
    "future": True,
    "pool_size": 5,
    "max_overflow": 5,
    "pool_timeout": 30,       # Seconds to wait for a free connection
    "pool_pre_ping": True,    # Check connection before using
    "pool_recycle": 300,      # Recycle connections after 5 minutes
}

# SQLite has no server-side pool; open a connection per session instead
if settings.is_sqlite:
    engine_kwargs = {
        "echo": False,
        "future": True,
        "poolclass": NullPool,
    }
    logger.info("🔧 Configured engine for SQLite (no connection pool)")

engine = create_async_engine(
    settings.DATABASE_URL,
    **engine_kwargs
)

# AsyncSession factory using async_sessionmaker
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
)

# Base class for all models
Base = declarative_base()

async def create_db_and_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def drop_db_and_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

# Dependency to get DB session with proper exception handling
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    session = AsyncSessionLocal()
    try:
        yield session
    except Exception as e:
        # Log the error and rollback
        logger.error(f"Database session error: {str(e)}")
        await session.rollback()
        raise
    finally:
        await session.close()
        logger.debug("Database session closed")
