"""
Database engine and session management for the relational backend.

Builds the SQLAlchemy engine from settings. SQLite URLs (used by the unit
tests) get a thread-agnostic connection, and in-memory SQLite shares one
connection through ``StaticPool`` so the schema survives across sessions.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from admin_core.utils.settings import Settings


def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
        kwargs["poolclass"] = StaticPool
    return kwargs


def create_engine_for_url(url: str) -> Engine:
    return create_engine(url, **_engine_kwargs(url))


def create_engine_from_settings(settings: Settings) -> Engine:
    if not settings.database_url:
        raise ValueError("DATABASE_URL is not configured")
    return create_engine_for_url(settings.database_url)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_schema(engine: Engine) -> None:
    """Create every table directly (tests and local sqlite); production uses alembic."""
    from admin_core.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)
