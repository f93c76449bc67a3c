"""Engine and session factory for the profiles and fuel_reports tables."""

from __future__ import annotations

from collections.abc import Generator

from loguru import logger
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import settings

# Created on first use so importing the app never opens a connection
_engine: Engine | None = None
_SessionLocal: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        url = settings.database_url
        if url.lower().startswith("sqlite"):
            connect_args: dict = {"check_same_thread": False}
        else:
            connect_args = {"connect_timeout": 10, "application_name": "disciplin-os"}

        _engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        logger.info("Database engine initialized", dialect=_engine.dialect.name)
    return _engine


def _get_session_local() -> sessionmaker[Session]:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def init_db() -> None:
    """Create the profiles and fuel_reports tables if they do not exist yet."""
    from app.db.models import Base

    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables verified", tables=sorted(Base.metadata.tables))


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request.

    Repositories commit their own writes; the session is always closed.
    """
    session = _get_session_local()()
    try:
        yield session
    finally:
        session.close()
