# core/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def create_engine_for(database_url: str):
    """Build an engine; SQLite gets check_same_thread off, in-memory SQLite a single shared connection."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    kwargs = {"future": True, "connect_args": connect_args}
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def create_session_factory(database_url: str, create_tables: bool = True):
    """Return a sessionmaker bound to a fresh engine for `database_url`."""
    # Registers every model on Base.metadata before create_all
    import models  # noqa: F401

    engine = create_engine_for(database_url)
    if create_tables:
        Base.metadata.create_all(bind=engine)
    # expire_on_commit=False avoids needing refresh() in many places
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


def get_db(session_factory):
    """Yield a SQLAlchemy session (use: `for db in get_db(factory):`)."""
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
