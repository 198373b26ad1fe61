#!/usr/bin/env python3
"""
FastAPI dependencies for dependency injection.
"""

import threading
from dataclasses import dataclass
from typing import Generator, Optional
from fastapi import Header
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .config import get_config
from .exceptions import AuthenticationRequiredException


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, url: str):
        engine_kwargs = {'pool_pre_ping': True}  # Verify connections before using
        if not url.startswith('sqlite'):
            engine_kwargs.update(pool_size=10, max_overflow=20)
        self.engine = create_engine(url, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine
        )

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session.

        Yields:
            Session: SQLAlchemy database session.
        """
        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()


_db_manager: Optional[DatabaseManager] = None
_db_manager_lock = threading.Lock()


def get_db_manager() -> DatabaseManager:
    """
    Create the global database manager on first use.

    Sync endpoints run in a threadpool, so creation is guarded to build one engine.
    """
    global _db_manager
    if _db_manager is None:
        with _db_manager_lock:
            if _db_manager is None:
                _db_manager = DatabaseManager(get_config().database.url)
    return _db_manager


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @app.get("/endpoint")
        def my_endpoint(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: Database session that will be automatically closed.
    """
    yield from get_db_manager().get_session()


@dataclass
class Caller:
    """Authenticated caller as forwarded by the hosting platform."""
    user_id: str
    role: Optional[str] = None


def get_current_caller(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None)
) -> Caller:
    """
    FastAPI dependency that reads the caller identity.

    Authentication happens upstream; the platform forwards the verified
    identity in X-User-Id / X-User-Role headers.

    Raises:
        AuthenticationRequiredException: If no identity was forwarded.
    """
    if not x_user_id:
        raise AuthenticationRequiredException("Authentication required")
    return Caller(user_id=x_user_id, role=x_user_role)
