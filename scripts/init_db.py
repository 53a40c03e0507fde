"""
Database initialization script.

Creates every Forge table on the configured database.  Prefer
``alembic upgrade head`` on shared databases.

Usage:
    python scripts/init_db.py
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.init_db import init_db

if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    logger.info(f"Initializing {settings.DATABASE_DBNAME} on {settings.DATABASE_HOST}:{settings.DATABASE_PORT}")

    try:
        init_db()
    except SQLAlchemyError as e:
        logger.error(f"Database initialization failed: {e}")
        sys.exit(1)

    logger.success("Database initialized")
