import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from calometer.config import settings
from calometer.services.errors import CalometerError, StorageError

logger = logging.getLogger(__name__)

# SQLite needs to be shared across FastAPI's worker threads
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session, action: str):
    """Commit the statements issued inside the block as one transaction.

    Service errors roll back and propagate unchanged; database errors roll
    back and surface as ``StorageError`` naming the failed action.
    """
    try:
        yield db
        db.commit()
    except CalometerError:
        db.rollback()
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Database error while trying to %s: %s", action, exc)
        raise StorageError(f"failed to {action}") from exc
