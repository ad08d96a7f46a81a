import logging
from contextlib import contextmanager
from fastapi import HTTPException, status
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import StaticPool
from jobsolution.config.config import settings

logger = logging.getLogger(__name__)


def engine_options(url: str) -> dict:
    # sqlite is only used in-memory for tests; every session must see the same connection
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_MAX_OVERFLOW,
        "pool_recycle": settings.POSTGRES_POOL_RECYCLE_SECONDS,
        "pool_pre_ping": True,
    }


engine = create_engine(settings.database_url, **engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Commit everything flushed inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


@contextmanager
def unique_transaction(db: Session, conflict_detail: str):
    """Same as transaction(), but a constraint violation raised by the write is a 409.

    Covers the window between a service's uniqueness lookup and its insert,
    where a concurrent request may have written the same key.
    """
    try:
        with transaction(db):
            yield db
    except IntegrityError as e:
        logger.warning(f"Write rejected by a database constraint: {e.orig}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict_detail)
