"""Engine construction, per-request sessions and the connectivity probe."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from inkpost.core.config import settings


def make_engine(url: str, **kwargs: Any) -> Engine:
    """
    Create an engine for url. SQLite connections are opened with
    check_same_thread=False because sync routes run on FastAPI's threadpool.
    """
    if url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        kwargs["connect_args"] = {"check_same_thread": False, **connect_args}
    return create_engine(url, **kwargs)


engine = make_engine(settings.DATABASE_URL, pool_pre_ping=True, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request; always closed afterwards."""
    with SessionLocal() as db:
        yield db


def check_db_connected(db: Session) -> bool:
    """True if SELECT 1 succeeds on the credential store."""
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        return False
    return True
