# /app/db/database.py

import logging
from typing import Any, Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def engine_args_for(settings: Settings) -> Dict[str, Any]:
    """
    Driver-specific connection arguments.

    The lock timeout bounds how long a transaction waits for rows another
    request is holding; expiry surfaces as an OperationalError.
    """
    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        # 'check_same_thread' is only needed for SQLite.
        return {"connect_args": {"check_same_thread": False, "timeout": settings.db_lock_timeout}}
    if url.get_backend_name() == "postgresql":
        lock_timeout_ms = int(settings.db_lock_timeout * 1000)
        return {"connect_args": {"options": f"-c lock_timeout={lock_timeout_ms}"}, "pool_pre_ping": True}
    return {}


def build_engine(settings: Settings) -> Engine:
    return create_engine(settings.database_url, **engine_args_for(settings))


def build_session_factory(bind: Engine) -> sessionmaker:
    # Snapshots returned by a committed transaction stay readable.
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=bind)


engine = build_engine(get_settings())

# Each instance of SessionLocal is one database session.
SessionLocal = build_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
    """Creates every registered table that does not exist yet."""
    from .base import Base

    Base.metadata.create_all(bind=bind)
    logger.info("Database ready at %s", bind.url.render_as_string(hide_password=True))


# Dependency to get a DB session. Used by the API routers.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
