"""
Database initialization.

Creates all tables directly from the SQLModel metadata.  Production
databases are managed with Alembic (``alembic upgrade head``); this is a
shortcut for local development.
"""

from loguru import logger
from sqlmodel import SQLModel

import app.db.base  # noqa: F401  registers every table on the metadata
from app.db.session import engine


def init_db() -> None:
    """Create every table that does not exist yet."""
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info(f"Tables ready: {', '.join(sorted(SQLModel.metadata.tables))}")


if __name__ == "__main__":
    init_db()
