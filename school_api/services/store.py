import logging
from typing import Any, Dict, List

import asyncpg

from school_api.core.config import Settings
from school_api.core.errors import StoreError


"""PostgreSQL-backed school store.

The pool is created once per process (see school_api.main lifespan) and
handed to SchoolStore, which exposes the two queries the API needs. Driver
and connection errors are re-raised as StoreError with the original message.
- store
"""

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schools (
  id SERIAL PRIMARY KEY,
  name VARCHAR(255) NOT NULL,
  address VARCHAR(500) NOT NULL,
  latitude DOUBLE PRECISION NOT NULL,
  longitude DOUBLE PRECISION NOT NULL,
  created_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""

INSERT_SQL = """
INSERT INTO schools (name, address, latitude, longitude)
VALUES ($1, $2, $3, $4)
RETURNING id, name, address, latitude, longitude, created_at
"""

SELECT_ALL_SQL = """
SELECT id, name, address, latitude, longitude, created_at
FROM schools
ORDER BY id
"""

_DRIVER_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


async def create_pool(settings: Settings) -> asyncpg.Pool:
    """Open a bounded connection pool; acquire() waits when all connections are busy. - create_pool"""
    logger.info(
        "Connecting to postgres at %s:%s/%s (pool size %s)",
        settings.db_host,
        settings.db_port,
        settings.db_name,
        settings.db_conn_limit,
    )
    return await asyncpg.create_pool(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.db_user,
        password=settings.db_password or None,
        database=settings.db_name,
        min_size=1,
        max_size=settings.db_conn_limit,
    )


async def init_schema(pool: asyncpg.Pool) -> None:
    """Create the schools table if it does not exist yet. - init_schema"""
    async with pool.acquire() as conn:
        await conn.execute(CREATE_TABLE_SQL)
    logger.info("schools table ready")


class SchoolStore:
    """Insert and fetch schools through an asyncpg pool. - school_store"""

    def __init__(self, pool: Any):
        self.pool = pool

    async def insert(self, name: str, address: str, latitude: float, longitude: float) -> Dict[str, Any]:
        """Persist one school and return the stored row, including id and created_at."""
        try:
            async with self.pool.acquire() as conn:
                row = await conn.fetchrow(INSERT_SQL, name, address, latitude, longitude)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc) or exc.__class__.__name__) from exc
        return dict(row)

    async def fetch_all(self) -> List[Dict[str, Any]]:
        """Return every stored school in primary-key order."""
        try:
            async with self.pool.acquire() as conn:
                rows = await conn.fetch(SELECT_ALL_SQL)
        except _DRIVER_ERRORS as exc:
            raise StoreError(str(exc) or exc.__class__.__name__) from exc
        return [dict(r) for r in rows]
