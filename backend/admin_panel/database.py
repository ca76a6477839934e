"""Database engine and session lifecycle.

A :class:`Database` is built once at application start-up (see ``main.lifespan``),
stored on ``app.state.database`` and disposed on shutdown. Request handlers
receive it through the :func:`get_database` / :func:`get_db` dependencies
instead of reaching for a module-level engine.
"""
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterator

from fastapi import Depends, Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from admin_panel.config import Settings

Base = declarative_base()


def generate_uuid_string() -> str:
    """Generate UUID as string for SQLite compatibility"""
    return str(uuid.uuid4())


class Database:
    """Owns one SQLAlchemy engine and its session factory."""

    def __init__(self, url: str, **engine_options: Any):
        if url.startswith("sqlite"):
            engine_options.setdefault("connect_args", {"check_same_thread": False})
        else:
            engine_options.setdefault("pool_pre_ping", True)

        self.url = url
        self.engine: Engine = create_engine(url, **engine_options)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        options: Dict[str, Any] = {}
        if not settings.DATABASE_URL.startswith("sqlite"):
            options.update(
                pool_size=settings.DATABASE_POOL_SIZE,
                max_overflow=settings.DATABASE_MAX_OVERFLOW,
                pool_timeout=settings.DATABASE_POOL_TIMEOUT,
                pool_recycle=settings.DATABASE_POOL_RECYCLE,
            )
        return cls(settings.DATABASE_URL, **options)

    def session(self) -> Session:
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        # Import models so every table is registered on Base.metadata
        import admin_panel.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()


def get_database(request: Request) -> Database:
    """Return the Database created by the application lifespan."""
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """Yield a request-scoped session"""
    db = database.session()
    try:
        yield db
    finally:
        db.close()
