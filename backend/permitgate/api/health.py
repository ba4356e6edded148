"""Health check endpoint."""

import time
from fastapi import APIRouter

from permitgate.models.responses import HealthResponse, HealthDependency
from permitgate.validators.catalog import SCHEMAS

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """System health check with schema catalog status."""
    dependencies = {}

    # Catalog is built at import; an empty one means nothing can be validated
    if SCHEMAS:
        dependencies["schema_catalog"] = HealthDependency(
            status="healthy",
            message=f"{len(SCHEMAS)} schemas loaded",
        )
    else:
        dependencies["schema_catalog"] = HealthDependency(status="unhealthy", message="No schemas loaded")

    all_healthy = all(d.status == "healthy" for d in dependencies.values())

    return HealthResponse(
        status="healthy" if all_healthy else "unhealthy",
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
