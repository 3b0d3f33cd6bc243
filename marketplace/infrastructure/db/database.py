"""
Database configuration and session management.
"""

from typing import Optional
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from marketplace.config import settings


# Create declarative base
Base = declarative_base()


def create_db_engine(database_url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Create an engine for the given URL.
    In-memory SQLite shares one connection so every session sees the same data.
    """
    url = database_url or settings.database_url
    echo = settings.database_echo if echo is None else echo

    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
            return create_engine(url, connect_args=connect_args, poolclass=StaticPool, echo=echo)
        return create_engine(url, connect_args=connect_args, echo=echo)

    return create_engine(url, poolclass=NullPool, echo=echo)


def create_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
    )


def init_db(bind: Engine) -> None:
    """Create all tables that do not exist yet."""
    from . import models  # noqa: F401  registers the mapped tables

    Base.metadata.create_all(bind=bind)


# Create SQLAlchemy engine
engine = create_db_engine()
