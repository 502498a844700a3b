"""Abstract registry interface (port) for canonical entity definitions."""

from abc import ABC, abstractmethod

from glassact_data.domain.entities import ObjectType


class EntityRegistry(ABC):
    """Port for entity catalog storage — implemented in the infrastructure layer."""

    @abstractmethod
    def register(self, entity: ObjectType) -> None:
        """Validate and store a canonical entity.

        Raises DefinitionError if the entity is not canonical and
        DuplicateEntityError if the name is already taken.
        """
        ...

    @abstractmethod
    def get(self, name: str) -> ObjectType | None:
        """Retrieve an entity by name."""
        ...

    @abstractmethod
    def list_entities(self) -> list[ObjectType]:
        """Retrieve every registered entity, sorted by name."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Remove every registered entity."""
        ...
