"""
Run the Forge API locally with auto-reload.

Reads ``.env`` before the settings are imported, so the same file
configures the database and the server.

Usage:
    python scripts/run_dev.py [--host 127.0.0.1] [--port 8000] [--no-reload]
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

import uvicorn
from loguru import logger

from app.core.config import settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Forge development server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--no-reload", dest="reload", action="store_false")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    logger.info(f"Starting {settings.PROJECT_NAME} {settings.VERSION} on http://{args.host}:{args.port} "
                f"(docs at /docs, reload={'on' if args.reload else 'off'})")
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload,
                log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
