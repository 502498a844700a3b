"""Shape projection engine — derives GET/POST/PATCH/PUT wire shapes.

Given a canonical entity, each projection walks the shape tree and rebuilds
every entity node with the augmentations its HTTP method calls for:

=========  ==========  ==========  =====================================
Method     Identity    Metadata    Top-level field optionality
=========  ==========  ==========  =====================================
GET        yes         yes         as declared
POST       no          no          as declared
PATCH      yes         no          all optional (``id``/``uuid`` required)
PUT        yes         no          all required
=========  ==========  ==========  =====================================

GET and POST apply to nested entities recursively. PATCH and PUT give nested
entities identity only and never change their optionality. Plain nested
objects are walked but never augmented.

All functions are pure: inputs are never mutated.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import replace
from enum import Enum

from glassact_data.domain.entities import (
    ArrayType,
    Augmentation,
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
from glassact_data.domain.entities.augmentations import assemble
from glassact_data.domain.exceptions import DefinitionError, ProjectionAmbiguityError

logger = logging.getLogger(__name__)

_BOTH = frozenset({Augmentation.IDENTITY, Augmentation.METADATA})
_IDENTITY = frozenset({Augmentation.IDENTITY})
_NONE: frozenset[Augmentation] = frozenset()


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"


NodeRule = Callable[[ObjectType, str], ObjectType]


# ── Tree walking ─────────────────────────────────────────────────────


def _walk(type_: FieldType, rule: NodeRule, root: str, path: str) -> FieldType:
    """Apply ``rule`` to every object node reachable from ``type_``."""
    if isinstance(type_, (Primitive, EnumType)):
        return type_
    if isinstance(type_, ObjectType):
        return rule(type_, path)
    if isinstance(type_, Nullable):
        return Nullable(_walk(type_.inner, rule, root, path))
    if isinstance(type_, ArrayType):
        return replace(type_, item=_walk(type_.item, rule, root, f"{path}[]"))
    if isinstance(type_, TupleType):
        return TupleType(
            tuple(_walk(t, rule, root, f"{path}[{idx}]") for idx, t in enumerate(type_.items))
        )
    if isinstance(type_, MapType):
        return MapType(_walk(type_.value, rule, root, f"{path}{{}}"))
    if isinstance(type_, OpaqueType):
        raise ProjectionAmbiguityError(root, path, type_.name)
    raise ProjectionAmbiguityError(root, path, type(type_).__name__)


def _walk_fields(
    fields: Iterable[Field], rule: NodeRule, root: str, path: str
) -> tuple[Field, ...]:
    return tuple(
        replace(f, type=_walk(f.type, rule, root, _join(path, f.name))) for f in fields
    )


def _rebuild(
    node: ObjectType, rule: NodeRule, root: str, path: str, augmentations: frozenset[Augmentation]
) -> ObjectType:
    """Recurse into ``node``'s children, then assemble it with ``augmentations``."""
    rebuilt = replace(
        node,
        fields=_walk_fields(node.intrinsic_fields, rule, root, path),
        variants=tuple(
            replace(v, fields=_walk_fields(v.fields, rule, root, path)) for v in node.variants
        ),
    )
    return assemble(rebuilt, augmentations)


def _nested_rule(augmentations: frozenset[Augmentation], root: str) -> NodeRule:
    """Rule for nodes below the top: entities get ``augmentations``, plain objects none."""

    def rule(node: ObjectType, path: str) -> ObjectType:
        target = augmentations if node.entity else _NONE
        return _rebuild(node, rule, root, path, target)

    return rule


def _require_object(shape: ObjectType) -> ObjectType:
    if not isinstance(shape, ObjectType):
        raise DefinitionError(str(shape), "", "only object shapes can be projected")
    return shape


def _set_optional(fields: tuple[Field, ...], optional: bool) -> tuple[Field, ...]:
    return tuple(
        replace(f, optional=optional) if f.is_intrinsic else replace(f, optional=False)
        for f in fields
    )


# ── Projections ──────────────────────────────────────────────────────


def to_get(shape: ObjectType) -> ObjectType:
    """Read shape: identity and metadata on the record and every nested entity."""
    shape = _require_object(shape)
    rule = _nested_rule(_BOTH, shape.name)
    return _rebuild(shape, rule, shape.name, "", _BOTH)


def to_post(shape: ObjectType) -> ObjectType:
    """Create shape: intrinsic fields only, on the record and every nested entity."""
    shape = _require_object(shape)
    rule = _nested_rule(_NONE, shape.name)
    return _rebuild(shape, rule, shape.name, "", _NONE)


def to_patch(shape: ObjectType) -> ObjectType:
    """Partial update shape: identity required, every other top-level field optional."""
    shape = _require_object(shape)
    rule = _nested_rule(_IDENTITY, shape.name)
    projected = _rebuild(shape, rule, shape.name, "", _IDENTITY)
    return replace(
        projected,
        fields=_set_optional(projected.fields, True),
        variants=tuple(
            replace(v, fields=_set_optional(v.fields, True)) for v in projected.variants
        ),
    )


def to_put(shape: ObjectType) -> ObjectType:
    """Full replacement shape: identity plus every top-level field, all required."""
    shape = _require_object(shape)
    rule = _nested_rule(_IDENTITY, shape.name)
    projected = _rebuild(shape, rule, shape.name, "", _IDENTITY)
    return replace(
        projected,
        fields=_set_optional(projected.fields, False),
        variants=tuple(
            replace(v, fields=_set_optional(v.fields, False)) for v in projected.variants
        ),
    )


_PROJECTIONS: dict[Method, Callable[[ObjectType], ObjectType]] = {
    Method.GET: to_get,
    Method.POST: to_post,
    Method.PATCH: to_patch,
    Method.PUT: to_put,
}


def project(shape: ObjectType, method: Method | str) -> ObjectType:
    """Dispatch to the projection for ``method`` (case-insensitive)."""
    method = Method(method.upper()) if isinstance(method, str) else method
    return _PROJECTIONS[method](shape)


def derive_all(shape: ObjectType) -> dict[Method, ObjectType]:
    """Return all four derived shapes of ``shape``."""
    derived = {method: fn(shape) for method, fn in _PROJECTIONS.items()}
    logger.debug("Derived %d shapes for %s", len(derived), shape.name)
    return derived


# ── Composition helpers ──────────────────────────────────────────────


def extend(shape: ObjectType, **fields: FieldType | Field) -> ObjectType:
    """Return ``shape`` with extra intrinsic fields appended, e.g. an expanded relation."""
    extra = ObjectType.of(shape.name, **fields).fields
    existing = set(shape.field_names)
    for f in extra:
        if f.name in existing:
            raise DefinitionError(shape.name, f.name, "field already declared")
    return assemble(replace(shape, fields=shape.fields + extra), shape.augmentations)


def omit_paths(shape: ObjectType, paths: Iterable[str]) -> ObjectType:
    """Drop fields by dotted path, looking through arrays, nullables and variants.

    ``omit_paths(to_post(ProjectWithInlays), ["inlays.project_id"])`` removes
    ``project_id`` from every inlay element. Unknown paths raise DefinitionError.
    """
    result = _require_object(shape)
    for dotted in paths:
        result = _omit(result, dotted.split("."), shape.name, dotted)
    return result


def _omit(node: ObjectType, parts: list[str], root: str, dotted: str) -> ObjectType:
    head, rest = parts[0], parts[1:]
    found = False

    def visit(fields: tuple[Field, ...]) -> tuple[Field, ...]:
        nonlocal found
        out: list[Field] = []
        for f in fields:
            if f.name != head:
                out.append(f)
                continue
            found = True
            if rest:
                out.append(replace(f, type=_omit_in_type(f.type, rest, root, dotted)))
        return tuple(out)

    fields = visit(node.fields)
    variants = tuple(replace(v, fields=visit(v.fields)) for v in node.variants)
    if not found:
        raise DefinitionError(root, dotted, "no such field to omit")
    return replace(node, fields=fields, variants=variants)


def _omit_in_type(type_: FieldType, parts: list[str], root: str, dotted: str) -> FieldType:
    if isinstance(type_, ObjectType):
        return _omit(type_, parts, root, dotted)
    if isinstance(type_, Nullable):
        return Nullable(_omit_in_type(type_.inner, parts, root, dotted))
    if isinstance(type_, ArrayType):
        return replace(type_, item=_omit_in_type(type_.item, parts, root, dotted))
    raise DefinitionError(root, dotted, "path descends into a non-object field")


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


__all__ = [
    "Method",
    "derive_all",
    "extend",
    "omit_paths",
    "project",
    "to_get",
    "to_patch",
    "to_post",
    "to_put",
]
