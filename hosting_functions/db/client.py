from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2.pool import ThreadedConnectionPool

from hosting_functions.config import Settings

_pools: dict[str, ThreadedConnectionPool] = {}
_pools_lock = threading.Lock()


def get_pool(settings: Settings) -> ThreadedConnectionPool:
    dsn = settings.db_dsn
    with _pools_lock:
        pool = _pools.get(dsn)
        if pool is None:
            pool = ThreadedConnectionPool(1, 5, dsn=dsn)
            _pools[dsn] = pool
    return pool


@contextmanager
def get_conn(settings: Settings) -> Iterator[psycopg2.extensions.connection]:
    """Yield a pooled connection; commit on success, roll back on error."""
    pool = get_pool(settings)
    conn = pool.getconn()
    try:
        if settings.db_schema:
            with conn.cursor() as cur:
                cur.execute("SET search_path TO %s", (settings.db_schema,))
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        pool.putconn(conn)
