"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from permitgate.api.health import router as health_router
from permitgate.api.schemas import router as schemas_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Schema catalog and dry-run validation
api_router.include_router(schemas_router, tags=["Schemas"])
