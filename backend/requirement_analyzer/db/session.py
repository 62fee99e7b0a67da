import logging
import time
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from requirement_analyzer.config import DATABASE_URL
from requirement_analyzer.db.models import Base

logger = logging.getLogger(__name__)


def build_engine(url: str = DATABASE_URL) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # Route handlers run in a thread pool
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args, pool_pre_ping=True)


engine = build_engine()

# Returned trees are serialized after commit, so keep loaded attributes
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_session() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db(bind: Engine = engine, retries: int = 5, delay: float = 2) -> bool:
    """
    Create the schema, waiting for the database to come up.
    Returns False instead of raising when it never does.
    """
    for attempt in range(retries):
        try:
            Base.metadata.create_all(bind=bind)
            logger.info("[DB] Database connected")
            return True
        except OperationalError:
            logger.warning("[DB] Waiting for database... (%d/%d)", attempt + 1, retries)
            time.sleep(delay)

    logger.error("[DB] Database not ready, running without persistence")
    return False
