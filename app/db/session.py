from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.core.config import settings


class Base(DeclarativeBase):
    pass


def build_engine(url: str, timeout_ms: int | None = None) -> Engine:
    """Engine with store timeouts applied (pool wait everywhere, statement/lock wait on Postgres)."""
    timeout_ms = timeout_ms if timeout_ms is not None else settings.STORE_TIMEOUT_MS
    kwargs: dict = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Request handlers run in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": timeout_ms / 1000}
    else:
        kwargs["pool_timeout"] = max(1, timeout_ms // 1000)
        if url.startswith("postgresql"):
            kwargs["connect_args"] = {
                "options": f"-c statement_timeout={timeout_ms} -c lock_timeout={timeout_ms}",
            }
    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
