"""
Database access (PostgreSQL via asyncpg).

- connection.py: global pool
- models.py: CREATE TABLE statements
- queries/: plain async query functions per table
- store.py: DataStore interface + PostgresStore used by the session
"""

from .connection import init_pool, get_pool, close_pool
from .models import create_tables


async def init_db(dsn: str = None):
    """Create the pool and make sure all tables exist."""
    pool = await init_pool(dsn)
    await create_tables(pool)
    return pool


async def close_db():
    await close_pool()


__all__ = [
    'init_db',
    'close_db',
    'init_pool',
    'get_pool',
    'close_pool',
    'create_tables',
]
