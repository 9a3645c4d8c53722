"""
Health Check Endpoints
======================
Provides health status for monitoring and observability.

Endpoints:
- GET /health - Simple health check (for load balancers)
- GET /health/detailed - Comprehensive system status
- GET /health/live - Liveness probe
- GET /health/ready - Readiness probe (object storage reachable)
"""

import time
from datetime import datetime, timezone
from typing import Dict, Any

import psutil
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from image_storage.api.dependencies.storage import get_storage_facade
from image_storage.core.config import settings
from image_storage.core.logging_config import get_logger
from image_storage.services.storage import StorageFacade


logger = get_logger(__name__)


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class HealthStatus(BaseModel):
    """Simple health status response"""
    status: str = Field(..., description="Overall system status")
    timestamp: str = Field(..., description="Current server timestamp")
    version: str = Field(..., description="API version")
    environment: str = Field(..., description="Current environment")


class DependencyHealth(BaseModel):
    """Health status of a single dependency"""
    name: str = Field(..., description="Dependency name")
    status: str = Field(..., description="Status: healthy, unhealthy")
    response_time_ms: float = Field(None, description="Response time in milliseconds")
    message: str = Field(None, description="Additional information")
    details: Dict[str, Any] = Field(default_factory=dict, description="Extra details")


class SystemResources(BaseModel):
    """System resource utilization"""
    cpu_percent: float = Field(..., description="CPU usage percentage")
    memory_percent: float = Field(..., description="Memory usage percentage")
    memory_available_mb: float = Field(..., description="Available memory in MB")


class DetailedHealthStatus(BaseModel):
    """Detailed health status response"""
    status: str = Field(..., description="Overall system status")
    timestamp: str = Field(..., description="Current server timestamp")
    version: str = Field(..., description="API version")
    environment: str = Field(..., description="Current environment")
    uptime_seconds: float = Field(..., description="Server uptime in seconds")
    dependencies: list[DependencyHealth] = Field(default_factory=list, description="Dependency health checks")
    system_resources: SystemResources = Field(..., description="System resource usage")


# Track server start time for uptime calculation
SERVER_START_TIME = time.time()


router = APIRouter()


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


async def check_storage_health(storage: StorageFacade) -> DependencyHealth:
    """
    Check object storage reachability with a one-key listing

    Returns:
        DependencyHealth: Storage health status
    """
    details = settings.get_storage_config()
    start_time = time.time()

    try:
        await storage.store.list_objects_v2("", max_keys=1)
    except Exception as e:
        response_time_ms = (time.time() - start_time) * 1000
        logger.warning(f"Storage health check failed: {e}")
        return DependencyHealth(
            name="object_storage",
            status="unhealthy",
            response_time_ms=round(response_time_ms, 2),
            message=f"Storage health check error: {str(e)}",
            details=details,
        )

    response_time_ms = (time.time() - start_time) * 1000
    return DependencyHealth(
        name="object_storage",
        status="healthy",
        response_time_ms=round(response_time_ms, 2),
        message=f"Bucket {storage.bucket_name} is reachable",
        details=details,
    )


def get_system_resources() -> SystemResources:
    """
    Get current system resource utilization

    Returns:
        SystemResources: Current system resource metrics
    """
    memory = psutil.virtual_memory()

    return SystemResources(
        cpu_percent=round(psutil.cpu_percent(interval=0.1), 2),
        memory_percent=round(memory.percent, 2),
        memory_available_mb=round(memory.available / (1024 * 1024), 2),
    )


def determine_overall_status(dependencies: list[DependencyHealth]) -> str:
    """Overall status is unhealthy as soon as one dependency is"""
    if any(dep.status == "unhealthy" for dep in dependencies):
        return "unhealthy"
    return "healthy"


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get(
    "/health",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Simple health check",
    description="Returns basic health status. Used by load balancers and monitoring tools.",
    tags=["health"],
)
async def health_check():
    return HealthStatus(
        status="healthy",
        timestamp=utc_timestamp(),
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Returns system status including object storage and resources.",
    tags=["health"],
)
async def detailed_health_check(
    storage: StorageFacade = Depends(get_storage_facade),
):
    """
    Detailed Health Check

    More expensive than /health (hits the bucket); poll it less frequently.
    """
    dependencies = [await check_storage_health(storage)]

    return DetailedHealthStatus(
        status=determine_overall_status(dependencies),
        timestamp=utc_timestamp(),
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        uptime_seconds=round(time.time() - SERVER_START_TIME, 2),
        dependencies=dependencies,
        system_resources=get_system_resources(),
    )


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    tags=["health"],
)
async def liveness_probe():
    return {"status": "alive"}


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    description="Returns 200 when the object storage bucket is reachable, 503 otherwise.",
    tags=["health"],
)
async def readiness_probe(
    storage: StorageFacade = Depends(get_storage_facade),
):
    storage_health = await check_storage_health(storage)

    if storage_health.status != "healthy":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": storage_health.message},
        )

    return {"status": "ready"}
