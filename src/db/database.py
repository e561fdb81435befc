"""Generate database session"""

import logging
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_URL, SQL_ECHO
from src.db.schema import Base

logger = logging.getLogger(__name__)

engine: Optional[Engine] = None
SessionLocal: Optional[sessionmaker[Session]] = None


def get_engine() -> Engine:
    """
    Create the engine on first use (and make sure all tables exist).
    Importing this module has no side effects, so tests can swap in their own database.
    """
    global engine

    if engine is None:
        connect_args = {}
        if DATABASE_URL.startswith("sqlite"):
            # FastAPI runs sync routes in a threadpool
            connect_args["check_same_thread"] = False
        engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)
        Base.metadata.create_all(bind=engine)
        logger.info("Database engine created for %s", engine.url.render_as_string())

    return engine


def get_sessionmaker() -> sessionmaker[Session]:
    """Session factory bound to the (lazily created) engine."""
    global SessionLocal

    if SessionLocal is None:
        SessionLocal = sessionmaker(bind=get_engine())
    return SessionLocal


def get_db() -> Generator[Session, None, None]:
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()
