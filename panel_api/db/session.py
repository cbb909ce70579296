"""Database engine, session factory and FastAPI session dependency"""
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

from panel_api.core.config import settings
from panel_api.db.base import Base
from panel_api.utils.logger import logger

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Iterator[Session]:
    """Yield a session for the duration of one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet"""
    # Register models on the metadata before create_all
    from panel_api.db.models import user  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def ping(db: Session) -> bool:
    """Return True when the database answers a trivial query"""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database ping failed: {str(e)}")
        return False
