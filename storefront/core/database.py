from __future__ import annotations

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from storefront.core.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = str(settings.DATABASE_URL).startswith("sqlite")

# --- SQLAlchemy engine ---
engine = create_engine(
    str(settings.DATABASE_URL),
    future=True,
    pool_pre_ping=True,
    echo=getattr(settings, "DB_ECHO", False),
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)


if _is_sqlite:
    @event.listens_for(engine, "connect")
    def _enable_sqlite_fk(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# --- Session factory ---
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

# --- Declarative base ---
Base = declarative_base()


def init_db() -> None:
    """
    Register every model and create the missing tables.
    The models must be imported before create_all() runs.
    """
    from storefront.models import catalog_models, order_models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("[storefront] DB init: tables ensured")


def get_db():
    """Provide one DB session per HTTP request."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        logger.exception("[storefront] db session rolled back due to exception")
        raise
    finally:
        db.close()
        logger.debug("[storefront] db session closed")
