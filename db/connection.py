"""
Global asyncpg connection pool.

Usage:
    from db.connection import get_pool

    pool = await get_pool()
    async with pool.acquire() as conn:
        ...
"""

from typing import Optional

import asyncpg

from config import get_logger, DATABASE_URL, DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE

logger = get_logger(__name__)

_pool: Optional[asyncpg.Pool] = None


async def init_pool(dsn: Optional[str] = None) -> asyncpg.Pool:
    """Create the global pool (no-op if it already exists)."""
    global _pool
    if _pool is None:
        _pool = await asyncpg.create_pool(
            dsn or DATABASE_URL,
            min_size=DB_POOL_MIN_SIZE,
            max_size=DB_POOL_MAX_SIZE,
        )
        logger.info(f"Database pool created (min={DB_POOL_MIN_SIZE}, max={DB_POOL_MAX_SIZE})")
    return _pool


async def get_pool() -> asyncpg.Pool:
    """Global pool, created on first use."""
    if _pool is None:
        return await init_pool()
    return _pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Database pool closed")
