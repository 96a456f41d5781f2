"""SQLite database setup via SQLAlchemy."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from cmj_kinetics.core.config import DatabaseSettings
from cmj_kinetics.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def create_db_engine(settings: DatabaseSettings | None = None) -> Engine:
    """Create an engine for the configured database URL.

    File-backed SQLite databases get their parent directory created.

    Args:
        settings: Database settings (uses defaults if None)

    Returns:
        SQLAlchemy engine
    """
    settings = settings or DatabaseSettings()
    url = make_url(settings.url)

    kwargs: dict[str, object] = {"echo": settings.echo}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": settings.timeout}
        if not url.database or url.database == ":memory:":
            # One shared connection, otherwise every checkout sees an empty DB
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(url, **kwargs)


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    # Import models so they register with Base.metadata
    import cmj_kinetics.store.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.debug("Database schema ready at %s", engine.url)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory bound to ``engine``."""
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Iterator[Session]:
    """Yield a session that is closed afterwards, rolling back on error."""
    db = factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
