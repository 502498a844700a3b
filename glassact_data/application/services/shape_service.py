"""Shape service — application facade over the entity registry and projections."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ValidationError

from glassact_data.application.interfaces import EntityRegistry
from glassact_data.application.services.model_builder import build_model
from glassact_data.application.services.projection import Method, project
from glassact_data.domain.entities import EnumType, Field, ObjectType, type_label
from glassact_data.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class FieldDescription:
    """One row of a derived shape's field table."""

    name: str
    type: str
    optional: bool
    nullable: bool
    augmentation: str | None = None
    variant: str | None = None
    description: str = ""


@dataclass
class ValidationReport:
    valid: bool
    errors: list[dict[str, Any]] = field(default_factory=list)


class ShapeService:
    """Business-level operations on the compiled entity catalog.

    Used by both the CLI and the HTTP API.
    """

    def __init__(self, registry: EntityRegistry):
        self._registry = registry
        self._models: dict[tuple[str, Method], type[BaseModel]] = {}
        self._lock = threading.Lock()

    # ── Catalog ──────────────────────────────────────────────────────

    def list_entities(self) -> list[ObjectType]:
        return self._registry.list_entities()

    def get_entity(self, name: str) -> ObjectType:
        """Retrieve a canonical entity, raising EntityNotFoundError if unknown."""
        entity = self._registry.get(name)
        if entity is None:
            raise EntityNotFoundError("Entity", name)
        return entity

    # ── Derived shapes ───────────────────────────────────────────────

    def derive(self, name: str, method: Method | str) -> ObjectType:
        return project(self.get_entity(name), method)

    def derive_all(self, name: str) -> dict[Method, ObjectType]:
        return {method: self.derive(name, method) for method in Method}

    def model_for(self, name: str, method: Method | str) -> type[BaseModel]:
        """Return the (cached) pydantic validator for an entity's derived shape."""
        method = Method(method.upper()) if isinstance(method, str) else method
        key = (name, method)
        with self._lock:
            cached = self._models.get(key)
        if cached is not None:
            return cached

        model = build_model(self.derive(name, method), method)
        with self._lock:
            self._models.setdefault(key, model)
            return self._models[key]

    def json_schema(self, name: str, method: Method | str) -> dict[str, Any]:
        return self.model_for(name, method).model_json_schema()

    def validate(self, name: str, method: Method | str, payload: Any) -> ValidationReport:
        """Check ``payload`` against the derived shape without raising on bad data."""
        model = self.model_for(name, method)
        try:
            model.model_validate(payload)
        except ValidationError as exc:
            errors = [
                {
                    "loc": [str(part) for part in err["loc"]],
                    "msg": err["msg"],
                    "type": err["type"],
                }
                for err in exc.errors()
            ]
            logger.debug("Payload rejected for %s %s: %d errors", method, name, len(errors))
            return ValidationReport(valid=False, errors=errors)
        return ValidationReport(valid=True)

    def describe(self, name: str, method: Method | str) -> list[FieldDescription]:
        """Flat field table of a derived shape, variant fields tagged with their arm."""
        shape = self.derive(name, method)
        rows = [_describe_field(f) for f in shape.fields]
        if shape.variants:
            rows.append(
                FieldDescription(
                    name=shape.discriminator,
                    type=type_label(EnumType(tuple(v.tag for v in shape.variants))),
                    optional=any(f.optional for v in shape.variants for f in v.fields),
                    nullable=False,
                )
            )
            for variant in shape.variants:
                rows.extend(_describe_field(f, variant.tag) for f in variant.fields)
        return rows


def _describe_field(f: Field, variant: str | None = None) -> FieldDescription:
    return FieldDescription(
        name=f.name,
        type=type_label(f.type),
        optional=f.optional,
        nullable=f.nullable,
        augmentation=f.augmentation.value if f.augmentation else None,
        variant=variant,
        description=f.description,
    )
