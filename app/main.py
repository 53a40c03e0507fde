"""
Forge API entry point.

``create_app`` wires logging, the versioned routers and the error
handlers; ``app`` is the instance uvicorn serves.
"""

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import IntegrityError

from app.api.v1.router import api_router
from app.core.config import settings
from app.core.logging import setup_logging

API_V1_PREFIX = "/api/v1"

meta_router = APIRouter(tags=["Service"])


@meta_router.get("/")
async def root():
    return {"message": "Forge API", "version": settings.VERSION, "docs": "/docs"}


@meta_router.get("/health")
async def health_check():
    """Liveness check."""
    return {"status": "healthy", "service": "forge-api", "version": settings.VERSION}


@meta_router.get("/info")
async def info():
    return {
        "project_name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "project_url": settings.PROJECT_URL,
    }


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Concurrent writes racing on a unique key (user + day) surface as 409."""
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Conflicting write, retry the request"},
    )


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Training load, readiness and day-of workout adjustments.",
        debug=settings.DEBUG,
    )
    application.include_router(meta_router)
    application.include_router(api_router, prefix=API_V1_PREFIX)
    application.add_exception_handler(IntegrityError, integrity_error_handler)

    logger.debug(f"{settings.PROJECT_NAME} {settings.VERSION} configured")
    return application


app = create_app()
