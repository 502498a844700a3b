"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from glassact_data.config import get_settings
from glassact_data.infrastructure.dependencies import get_entity_registry
from glassact_data.infrastructure.logging.log_config import setup_logging
from glassact_data.presentation.api.v1.router import router as v1_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and compile the entity catalog."""
    setup_logging()

    # Compile once at startup so a broken definition file fails the boot,
    # not the first request.
    registry = get_entity_registry()
    logger.info("Entity catalog ready: %d entities", len(registry.list_entities()))

    yield


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "glassact_data.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
