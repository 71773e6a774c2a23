"""Pooled engine and the request-scoped session dependency."""

from __future__ import annotations

from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from onboarding.core.config import settings


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        # Local runs only; requests may be served from a worker thread.
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Iterator[Session]:
    """Yield one session per request; it is closed when the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
