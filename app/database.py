# app/database.py
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Engine construction
#
# - SQLite connections are shared with FastAPI's threadpool,
#   so check_same_thread must be off.
# - In-memory SQLite ("sqlite://") lives inside a single
#   connection; StaticPool keeps that connection for the
#   lifetime of the engine, otherwise every checkout would
#   see an empty database.
# ---------------------------------------------------------


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given SQLAlchemy URL.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)

    return create_engine(url, echo=echo, pool_pre_ping=True)


engine = build_engine(settings.database_url, echo=settings.DATABASE_ECHO)


def create_db_and_tables(bind: Engine | None = None) -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(bind or engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...

    Tests swap the storage backend by overriding this dependency.
    """
    with Session(engine) as session:
        yield session
