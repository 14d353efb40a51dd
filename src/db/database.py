"""Generate database sessions"""

from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_ECHO, DATABASE_URL
from src.db.schema import Base


def build_session_factory(url: str = DATABASE_URL) -> sessionmaker[Session]:
    """Create the engine and make sure all tables exist"""
    engine: Engine = create_engine(url, echo=DATABASE_ECHO)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """One session per request, always closed afterwards"""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
