"""Generate database engine / sessions"""

from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import get_settings
from src.db.schema import Base


def create_db_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Engine for the given URL, falling back to the configured one."""
    settings = get_settings()
    url = url or settings.DATABASE_URL
    echo = settings.DATABASE_ECHO if echo is None else echo
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Ensure all tables are created, then hand out a session factory bound to the engine."""
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """One session per request."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
