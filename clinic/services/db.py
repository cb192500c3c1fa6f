from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from clinic.core.config import get_settings
from clinic.models import Base

# Seconds a SQLite writer waits for another transaction's lock before failing.
SQLITE_BUSY_TIMEOUT = 15


def _is_in_memory(url: URL) -> bool:
    return url.database in (None, "", ":memory:")


def create_db_engine(database_url: str) -> Engine:
    """Engine for ``database_url``.

    File-backed SQLite gets its parent directory created and a busy timeout so
    concurrent bookings queue on the write lock; in-memory SQLite shares one
    connection so every thread sees the same tables.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    connect_args = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}
    if _is_in_memory(url):
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)

    db_path = Path(url.database).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url.set(database=str(db_path)), connect_args=connect_args)


engine = create_db_engine(get_settings().database_url)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@retry(
    retry=retry_if_exception_type(OperationalError),
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    reraise=True,
)
def init_db(bind: Engine | None = None) -> None:
    bind = bind or engine
    logger.info("Creating database tables on {backend}", backend=bind.url.get_backend_name())
    Base.metadata.create_all(bind=bind)


@contextmanager
def db_session() -> Generator[Session, None, None]:
    session: Session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    with db_session() as session:
        yield session
