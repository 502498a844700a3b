"""V1 API router, mounted under /api by the application factory."""

from fastapi import APIRouter

from glassact_data.presentation.api.v1.endpoints.health import router as health_router
from glassact_data.presentation.api.v1.shapes_controller import router as shapes_router
from glassact_data.presentation.api.v1.permissions_controller import router as permissions_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(shapes_router)
router.include_router(permissions_router)
