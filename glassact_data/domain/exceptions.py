"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity definition does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to register a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class DefinitionError(Exception):
    """Raised when an entity definition is malformed.

    Covers a missing augmentation, a field that collides with a reserved
    augmentation name, an unresolvable reference and unreadable definition
    files. Always fatal for the definition being loaded.
    """

    def __init__(self, entity: str, path: str, message: str):
        self.entity = entity
        self.path = path
        self.message = message
        location = f"{entity}.{path}" if path else entity
        super().__init__(f"{location}: {message}")


class ProjectionAmbiguityError(Exception):
    """Raised when a field cannot be classified as a plain value or an entity.

    The projection of the owning entity is aborted; nothing is guessed.
    """

    def __init__(self, entity: str, path: str, type_name: str):
        self.entity = entity
        self.path = path
        self.type_name = type_name
        super().__init__(
            f"{entity}.{path}: cannot project field of opaque type '{type_name}'"
        )
