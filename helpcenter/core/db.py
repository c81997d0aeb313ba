from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from helpcenter.core.config import settings

_db_url = settings.DATABASE_URL

if _db_url.startswith("sqlite"):
    # For in-memory SQLite (tests) we need a single shared connection across threads.
    # StaticPool makes the same connection reused for the whole process.
    engine = create_engine(
        _db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        pool_pre_ping=True,
        echo=settings.DB_ECHO,
    )

    @event.listens_for(engine, "connect")
    def _sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

else:
    engine = create_engine(_db_url, pool_pre_ping=True, echo=settings.DB_ECHO)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@contextmanager
def transactional(db: Session) -> Iterator[Session]:
    """Commit on success, roll back and re-raise on any error."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
