"""Block until the booking store accepts connections (imported by start_api.py)."""
import os, time
from urllib.parse import urlparse

import psycopg2

from app.core.config import settings


def _conn_kwargs(database_url: str) -> dict:
    # SQLAlchemy URL may carry a driver suffix (postgresql+psycopg2://)
    p = urlparse(database_url.replace("+psycopg2", "").replace("+asyncpg", ""))
    return {
        "host": p.hostname or "db",
        "port": p.port or 5432,
        "user": p.username or "booking",
        "password": p.password or "booking",
        "dbname": (p.path or "/booking").lstrip("/") or "booking",
        "connect_timeout": max(1, settings.STORE_TIMEOUT_MS // 1000),
    }


def wait(database_url: str, timeout_s: int) -> None:
    kwargs = _conn_kwargs(database_url)
    print(f"[wait_for_db] Waiting for Postgres at {kwargs['host']}:{kwargs['port']} db={kwargs['dbname']} (timeout={timeout_s}s)")
    deadline = time.time() + timeout_s
    while True:
        try:
            psycopg2.connect(**kwargs).close()
            print("[wait_for_db] Postgres is ready.")
            return
        except psycopg2.OperationalError as e:
            if time.time() > deadline:
                print(f"[wait_for_db] Timed out waiting for DB. Last error: {e}")
                raise
            time.sleep(1)


wait(settings.DATABASE_URL, int(os.getenv("DB_WAIT_TIMEOUT", "60")))
