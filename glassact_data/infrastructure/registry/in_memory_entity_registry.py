"""In-memory implementation of the EntityRegistry port."""

import logging
import threading

from glassact_data.application.interfaces import EntityRegistry
from glassact_data.domain.entities import ObjectType, validate_canonical
from glassact_data.domain.exceptions import DuplicateEntityError

logger = logging.getLogger(__name__)


class InMemoryEntityRegistry(EntityRegistry):
    """Dict-backed registry; entities are immutable so reads need no copying."""

    def __init__(self, entities: list[ObjectType] | tuple[ObjectType, ...] = ()):
        self._entities: dict[str, ObjectType] = {}
        self._lock = threading.Lock()
        for entity in entities:
            self.register(entity)

    def register(self, entity: ObjectType) -> None:
        validate_canonical(entity)
        with self._lock:
            if entity.name in self._entities:
                raise DuplicateEntityError("Entity", "name", entity.name)
            self._entities[entity.name] = entity
        logger.debug("Registered entity %s", entity.name)

    def get(self, name: str) -> ObjectType | None:
        return self._entities.get(name)

    def list_entities(self) -> list[ObjectType]:
        return sorted(self._entities.values(), key=lambda e: e.name)

    def clear(self) -> None:
        with self._lock:
            self._entities.clear()
