"""Database session and engine helpers."""

import logging
from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from sehc.core.config import settings

logger = logging.getLogger("sehc.database")

SQLALCHEMY_DATABASE_URL = settings.database_url


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"pool_pre_ping": True, "future": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    return options


engine = create_engine(SQLALCHEMY_DATABASE_URL, **_engine_options(SQLALCHEMY_DATABASE_URL))
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db() -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations."""
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError:
        logger.exception("Database session failed")
        raise
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create every table known to the models metadata."""
    from sehc.models import Base

    Base.metadata.create_all(bind=bind or engine)
