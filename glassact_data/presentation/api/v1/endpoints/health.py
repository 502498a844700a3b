"""Health check endpoint — reports the loaded entity catalog."""

from fastapi import APIRouter, Depends

from glassact_data.config import get_settings
from glassact_data.application.services import ShapeService
from glassact_data.infrastructure.dependencies import get_shape_service

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(service: ShapeService = Depends(get_shape_service)) -> dict:
    """Returns the current application health status."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "entities": len(service.list_entities()),
    }
