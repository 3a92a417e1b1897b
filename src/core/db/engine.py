# src/core/db/engine.py

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def create_db_engine(dsn: str, pool_size: int = 3) -> AsyncEngine:
    """
    Bounded connection pool shared by the whole run.

    pool_size connections at most, no overflow and no recycling.
    """
    return create_async_engine(
        dsn,
        pool_size=pool_size,
        max_overflow=0,
        pool_recycle=-1,
    )
