"""Database engine and session factory"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Base class for all models
Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    In-memory SQLite keeps a single shared connection so every session sees
    the same data. Foreign keys are switched on for SQLite connections.
    """
    kwargs = {"pool_pre_ping": True}

    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory; objects stay readable after commit"""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


def create_tables(engine: Engine) -> None:
    """Create all tables for the registered models"""
    # Register models on the metadata before create_all
    import fieldbook.models  # noqa: F401

    Base.metadata.create_all(engine)
