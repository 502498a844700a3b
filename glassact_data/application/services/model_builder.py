"""Builds pydantic models from derived shapes.

The models are the runtime validators handed to the form layer and the REST
client: ``build_model(to_post(CatalogItem), Method.POST)`` yields a
``PostCatalogItem`` model that rejects ``id`` and accepts ``description=None``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, RootModel, create_model
from pydantic import Field as PydanticField

from glassact_data.domain.entities import (
    ArrayType,
    EnumType,
    Field,
    FieldType,
    MapType,
    Nullable,
    ObjectType,
    OpaqueType,
    Primitive,
    TupleType,
)
from glassact_data.domain.exceptions import ProjectionAmbiguityError
from glassact_data.application.services.projection import Method

logger = logging.getLogger(__name__)

_PRIMITIVES: dict[str, Any] = {
    "string": str,
    "integer": int,
    "number": float,
    "boolean": bool,
    "timestamp": datetime,
    "json": Any,
}

_HASHABLE = (Primitive, EnumType)


class ModelBuilder:
    """Converts one derived shape tree into named pydantic models.

    A builder instance caches one model per distinct object node so that a
    nested entity reused in several fields maps to a single model class.
    Only the top-level node of a PATCH shape has its variants flattened.
    """

    def __init__(self, method: Method):
        self._method = method
        self._prefix = method.value.title()
        self._models: dict[ObjectType, type[BaseModel]] = {}
        self._names: dict[str, ObjectType] = {}

    def build(self, shape: ObjectType) -> type[BaseModel]:
        return self._object(shape, shape.name, "")

    # ── Object nodes ─────────────────────────────────────────────────

    def _object(self, node: ObjectType, root: str, path: str) -> type[BaseModel]:
        cached = self._models.get(node)
        if cached is not None:
            return cached

        name = self._unique_name(node)
        base = self._definitions(node.fields, root, path)

        if not node.variants:
            model = self._create(name, base, node.description)
        elif self._method is Method.PATCH and not path:
            model = self._create(name, {**base, **self._flattened_variants(node, root, path)}, node.description)
        else:
            model = self._discriminated(name, node, base, root, path)

        self._models[node] = model
        return model

    def _create(self, name: str, definitions: dict[str, Any], doc: str) -> type[BaseModel]:
        model = create_model(
            name,
            __config__=ConfigDict(extra="forbid"),
            __doc__=doc or None,
            **definitions,
        )
        logger.debug("Built model %s with %d fields", name, len(definitions))
        return model

    def _discriminated(
        self,
        name: str,
        node: ObjectType,
        base: dict[str, Any],
        root: str,
        path: str,
    ) -> type[BaseModel]:
        arms = []
        for variant in node.variants:
            definitions = dict(base)
            definitions[node.discriminator] = (Literal[variant.tag], ...)
            definitions.update(self._definitions(variant.fields, root, path))
            arms.append(self._create(f"{name}{variant.tag.title()}", definitions, node.description))

        if len(arms) == 1:
            return arms[0]

        union = Annotated[Union[tuple(arms)], PydanticField(discriminator=node.discriminator)]
        return type(name, (RootModel[union],), {"__module__": __name__, "__doc__": node.description or None})

    def _flattened_variants(self, node: ObjectType, root: str, path: str) -> dict[str, Any]:
        tags = tuple(v.tag for v in node.variants)
        definitions: dict[str, Any] = {
            node.discriminator: (Optional[Literal[tags]], PydanticField(default=None)),
        }
        for variant in node.variants:
            for f in variant.fields:
                annotation, _ = self._definition(f, root, path)
                definitions[f.name] = (annotation, PydanticField(default=None, description=f.description or None))
        return definitions

    def _unique_name(self, node: ObjectType) -> str:
        base = f"{self._prefix}{node.name}"
        candidate = base
        counter = 2
        while candidate in self._names and self._names[candidate] != node:
            candidate = f"{base}{counter}"
            counter += 1
        self._names[candidate] = node
        return candidate

    # ── Fields and types ─────────────────────────────────────────────

    def _definitions(self, fields: tuple[Field, ...], root: str, path: str) -> dict[str, Any]:
        return {f.name: self._definition(f, root, path) for f in fields}

    def _definition(self, f: Field, root: str, path: str) -> tuple[Any, Any]:
        field_path = f"{path}.{f.name}" if path else f.name
        annotation = self._annotation(f.type, root, field_path)
        if f.optional:
            default = PydanticField(default=None, description=f.description or None)
        else:
            default = PydanticField(..., description=f.description or None)
        return annotation, default

    def _annotation(self, type_: FieldType, root: str, path: str) -> Any:
        if isinstance(type_, Primitive):
            return _PRIMITIVES[type_.kind]
        if isinstance(type_, EnumType):
            return Literal[type_.values]
        if isinstance(type_, Nullable):
            return Optional[self._annotation(type_.inner, root, path)]
        if isinstance(type_, ArrayType):
            item = self._annotation(type_.item, root, f"{path}[]")
            if type_.unique and isinstance(type_.item, _HASHABLE):
                return set[item]
            return list[item]
        if isinstance(type_, TupleType):
            items = tuple(
                self._annotation(t, root, f"{path}[{idx}]") for idx, t in enumerate(type_.items)
            )
            return tuple[items]
        if isinstance(type_, MapType):
            return dict[str, self._annotation(type_.value, root, f"{path}{{}}")]
        if isinstance(type_, ObjectType):
            return self._object(type_, root, path)
        if isinstance(type_, OpaqueType):
            raise ProjectionAmbiguityError(root, path, type_.name)
        raise ProjectionAmbiguityError(root, path, type(type_).__name__)


def build_model(shape: ObjectType, method: Method) -> type[BaseModel]:
    """Build the pydantic model for an already projected ``shape``."""
    return ModelBuilder(method).build(shape)


def json_schema(shape: ObjectType, method: Method) -> dict[str, Any]:
    """JSON Schema (draft 2020-12, as emitted by pydantic) of a derived shape."""
    return build_model(shape, method).model_json_schema()
