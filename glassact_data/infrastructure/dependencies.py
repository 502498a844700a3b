"""FastAPI dependency injection — wires infrastructure to application layer."""

import logging
from functools import lru_cache

from glassact_data.config import get_settings
from glassact_data.application.interfaces import EntityRegistry
from glassact_data.application.services import EntityCompiler, ShapeService
from glassact_data.domain.catalog import BUILTIN_ENTITIES
from glassact_data.infrastructure.registry import InMemoryEntityRegistry

logger = logging.getLogger(__name__)


def build_entity_registry(entity_file: str | None = None) -> InMemoryEntityRegistry:
    """Compile ``entity_file`` into a registry, or load the built-in catalog when empty."""
    if entity_file:
        entities = EntityCompiler(entity_file).compile()
        logger.info("Loaded %d entities from %s", len(entities), entity_file)
    else:
        entities = list(BUILTIN_ENTITIES)
        logger.info("Loaded %d built-in entities", len(entities))
    return InMemoryEntityRegistry(entities)


@lru_cache
def get_entity_registry() -> EntityRegistry:
    """Process-wide registry, compiled once from settings."""
    return build_entity_registry(get_settings().entity_file.strip())


@lru_cache
def get_shape_service() -> ShapeService:
    """Provides the ShapeService bound to the process-wide registry."""
    return ShapeService(get_entity_registry())
