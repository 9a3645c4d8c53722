"""
Image Storage Service - Main Application
========================================
FastAPI application entry point with lifecycle management.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from image_storage.api.dependencies.logging import RequestLoggingMiddleware
from image_storage.api.routes import health, storage
from image_storage.core.config import settings
from image_storage.core.logging_config import setup_logging, get_logger
from image_storage.services.storage import storage_facade

# Initialize logger
logger = get_logger(__name__)

# ============================================================================
# APPLICATION LIFESPAN MANAGEMENT
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application Lifespan Manager
    Handles startup and shutdown events for the application.
    """
    setup_logging()

    logger.info("=" * 70)
    logger.info(f"🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info("=" * 70)

    logger.info(f"📋 Environment: {settings.ENVIRONMENT}")
    logger.info(f"🐛 Debug Mode: {settings.DEBUG}")
    logger.info(f"🌐 API Host: {settings.API_HOST}:{settings.API_PORT}")

    storage_config = settings.get_storage_config()
    logger.info("🪣 Object Storage:")
    logger.info(f"   Bucket: {storage_config['bucket']}")
    logger.info(f"   Endpoint: {storage_config['endpoint'] or 'default'}")
    logger.info(f"   Path style: {'ENABLED' if storage_config['force_path_style'] else 'DISABLED'}")
    logger.info(f"   Client: {type(storage_facade.store).__name__}")

    logger.info("✅ Application startup complete")
    logger.info("=" * 70)

    yield

    logger.info("🛑 Shutting down application...")
    logger.info("✅ Shutdown complete")


# ============================================================================
# FASTAPI APPLICATION
# ============================================================================

app = FastAPI(
    title=settings.APP_NAME,
    description="## Read-only access to the image storage bucket",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    license_info={"name": "MIT"},
    openapi_tags=[
        {"name": "health", "description": "Health check and system status endpoints"},
        {"name": "storage", "description": "Object metadata, content and folder listing endpoints"},
    ],
)

# ============================================================================
# MIDDLEWARE
# ============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Process-Time"],
    max_age=600,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(storage.router, prefix="/api/v1/storage", tags=["storage"])


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================

@app.exception_handler(ClientError)
async def storage_client_error_handler(request: Request, exc: ClientError):
    error = exc.response.get("Error", {})
    logger.error(f"Storage error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": "Object storage request failed",
            "code": error.get("Code"),
        },
    )


@app.exception_handler(BotoCoreError)
async def storage_transport_error_handler(request: Request, exc: BotoCoreError):
    logger.error(f"Storage transport error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Object storage is unreachable"},
    )


# ============================================================================
# ROOT ENDPOINT
# ============================================================================

@app.get("/", summary="Root endpoint", tags=["health"])
async def root():
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "bucket": settings.IMAGE_STORAGE_BUCKET,
        "status": "operational",
        "docs": "/docs",
    }


# ============================================================================
# APPLICATION ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    from image_storage.core.server_config import get_uvicorn_config

    uvicorn.run(**get_uvicorn_config())
