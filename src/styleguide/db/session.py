# src/styleguide/db/session.py
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, MetaData, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from styleguide.app_logger import get_logger
from styleguide.core.config import Settings, settings as default_settings

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Engine configuration
# ---------------------------------------------------------------------------

def create_db_engine(url: str | None = None, echo: bool | None = None, cfg: Settings | None = None) -> Engine:
    """Build a sync engine. In-memory SQLite shares one connection across the app."""
    cfg = cfg or default_settings
    url = url or cfg.DATABASE_URL
    kwargs: dict = {"echo": cfg.DB_ECHO if echo is None else echo}

    if url.startswith("sqlite") and (":memory:" in url or url.rstrip("/") == "sqlite:"):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    elif not url.startswith("sqlite"):
        kwargs["pool_pre_ping"] = True  # protects against stale connections

    logger.debug("Creating engine for %s", url)
    return create_engine(url, **kwargs)


def get_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(bind=engine, expire_on_commit=False, class_=Session)


def init_db(engine: Engine, metadata: MetaData) -> None:
    """Create every table known to ``metadata`` (host tables and TCA tables)."""
    metadata.create_all(engine)
    logger.info("Database schema ready (%d tables)", len(metadata.tables))


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    with factory() as session:
        try:
            yield session
        except Exception:
            session.rollback()
            raise
