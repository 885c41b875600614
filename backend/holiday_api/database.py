"""SQLAlchemy engine, session factory and unit-of-work helpers."""
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from holiday_api.config import settings
from holiday_api.errors import OperationCancelled

logger = logging.getLogger(__name__)

_ATOMIC_DEPTH = "atomic_depth"


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def enable_sqlite_foreign_keys(engine) -> None:
    """SQLite ignores foreign keys unless asked on every connection."""

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args(settings.DATABASE_URL),
)
if settings.DATABASE_URL.startswith("sqlite"):
    enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """Run a block as one unit of work.

    The outermost block commits on success and rolls back on any exception.
    Nested blocks join the enclosing unit: they neither commit nor roll back,
    and exceptions pass through to the outermost block.
    """
    depth = db.info.get(_ATOMIC_DEPTH, 0)
    db.info[_ATOMIC_DEPTH] = depth + 1
    try:
        yield db
        if depth == 0:
            db.commit()
    except Exception:
        if depth == 0:
            db.rollback()
        raise
    finally:
        db.info[_ATOMIC_DEPTH] = depth


def ensure_not_cancelled(cancel: Optional[threading.Event]) -> None:
    """Raise OperationCancelled when the caller's signal has fired."""
    if cancel is not None and cancel.is_set():
        raise OperationCancelled("Operation cancelled by caller")
