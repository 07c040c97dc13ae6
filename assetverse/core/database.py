"""
Shared database for every AssetVerse module
"""
from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy import JSON, create_engine
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings

# Declarative base shared by all models
Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere (tests run on SQLite)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def _create_engine(url: str):
    if url.startswith("sqlite"):
        # One shared connection so in-memory databases survive across sessions
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    # PostgreSQL connection with pool settings
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        pool_recycle=3600,
    )


engine = _create_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that yields a database session.

    Usage:
        @router.get("/")
        def endpoint(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    All-or-nothing unit of work.

    Commits when the block finishes and rolls back on any exception
    (domain errors included) before re-raising, so a failed workflow
    never leaves partial writes or an open transaction behind.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
