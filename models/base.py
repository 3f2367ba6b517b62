"""
Database configuration and base model.

Uses SQLAlchemy 2.0 declarative style with SQLite.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from config import PATHS


def get_database_url() -> str:
    """SQLite URL of the application database."""
    PATHS.data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{PATHS.database}"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


engine: Optional[Engine] = None

# Session factory, bound by configure_database()
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def configure_database(url: Optional[str] = None) -> Engine:
    """
    Bind the session factory to a database.

    Args:
        url: SQLAlchemy URL; defaults to the application database.
             ``sqlite://`` gives a shared in-memory database.
    """
    global engine

    url = url or get_database_url()
    if url in ("sqlite://", "sqlite:///:memory:"):
        engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},  # Allow multi-threaded access
        )

    SessionLocal.configure(bind=engine)
    return engine


def get_engine() -> Engine:
    if engine is None:
        return configure_database()
    return engine


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Context manager for database sessions."""
    get_engine()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Initialize the database, creating all tables."""
    # Register models on the metadata
    import models.tournament  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def reset_db() -> None:
    """Drop and recreate all tables. USE WITH CAUTION."""
    import models.tournament  # noqa: F401

    Base.metadata.drop_all(bind=get_engine())
    Base.metadata.create_all(bind=get_engine())
