"""
Engine and per-request sessions for the Forge database.
"""

from typing import Generator

from sqlmodel import Session, create_engine

from app.core.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
    pool_size=settings.DATABASE_POOL_SIZE,
    max_overflow=settings.DATABASE_MAX_OVERFLOW,
)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; uncommitted work is rolled back when it closes."""
    with Session(engine) as session:
        yield session
