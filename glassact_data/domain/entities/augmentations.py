"""Identity and metadata augmentations shared by every stored entity.

A canonical entity is its intrinsic fields plus two augmentations:

* identity — ``id`` (internal, sequential) and ``uuid`` (public identifier)
* metadata — ``created_at``, ``updated_at`` and ``version`` (optimistic
  concurrency counter maintained by the server)

Fields added here carry an ``augmentation`` marker, so stripping and
detection never rely on field names alone.
"""

from __future__ import annotations

from dataclasses import replace

from glassact_data.domain.entities.shape import (
    INTEGER,
    STRING,
    TIMESTAMP,
    ArrayType,
    Augmentation,
    Field,
    FieldType,
    MapType,
    Nullable,
    ObjectType,
    TupleType,
)
from glassact_data.domain.exceptions import DefinitionError

IDENTITY_FIELDS: tuple[Field, ...] = (
    Field("id", INTEGER, description="Internal sequential id", augmentation=Augmentation.IDENTITY),
    Field("uuid", STRING, description="Public identifier", augmentation=Augmentation.IDENTITY),
)

METADATA_FIELDS: tuple[Field, ...] = (
    Field("created_at", TIMESTAMP, augmentation=Augmentation.METADATA),
    Field("updated_at", TIMESTAMP, augmentation=Augmentation.METADATA),
    Field(
        "version",
        INTEGER,
        description="Optimistic concurrency counter",
        augmentation=Augmentation.METADATA,
    ),
)

RESERVED_FIELDS: dict[Augmentation, tuple[Field, ...]] = {
    Augmentation.IDENTITY: IDENTITY_FIELDS,
    Augmentation.METADATA: METADATA_FIELDS,
}

RESERVED_NAMES = frozenset(f.name for group in RESERVED_FIELDS.values() for f in group)


def assemble(shape: ObjectType, augmentations: frozenset[Augmentation]) -> ObjectType:
    """Rebuild ``shape`` carrying exactly ``augmentations``.

    Field order is fixed: identity, intrinsic fields as declared, metadata.
    Raises DefinitionError if an intrinsic field would be shadowed by an
    augmentation field of the same name.
    """
    intrinsic = shape.intrinsic_fields
    for aug in augmentations:
        reserved = {f.name for f in RESERVED_FIELDS[aug]}
        for f in intrinsic:
            if f.name in reserved:
                raise DefinitionError(
                    shape.name,
                    f.name,
                    f"field collides with reserved {aug.value} field",
                )

    fields: list[Field] = []
    if Augmentation.IDENTITY in augmentations:
        fields.extend(IDENTITY_FIELDS)
    fields.extend(intrinsic)
    if Augmentation.METADATA in augmentations:
        fields.extend(METADATA_FIELDS)
    return replace(shape, fields=tuple(fields), augmentations=frozenset(augmentations))


def with_identity(shape: ObjectType) -> ObjectType:
    """Return ``shape`` plus ``{id, uuid}``, tagged as identity."""
    return assemble(shape, shape.augmentations | {Augmentation.IDENTITY})


def with_metadata(shape: ObjectType) -> ObjectType:
    """Return ``shape`` plus ``{created_at, updated_at, version}``, tagged as metadata."""
    return assemble(shape, shape.augmentations | {Augmentation.METADATA})


def strip_augmentation(shape: ObjectType, augmentation: Augmentation) -> ObjectType:
    return assemble(shape, shape.augmentations - {augmentation})


def canonical(shape: ObjectType) -> ObjectType:
    """Compose both augmentations and mark the shape as a stored entity."""
    return replace(with_metadata(with_identity(shape)), entity=True)


def validate_canonical(shape: ObjectType) -> None:
    """Check that ``shape`` and every nested entity are well-formed canonical entities.

    Raises DefinitionError naming the entity and the field path.
    """
    if not isinstance(shape, ObjectType):
        raise DefinitionError(str(shape), "", "entity definition must be an object shape")
    if not shape.entity:
        raise DefinitionError(shape.name, "", "shape is not declared as an entity")
    _validate_node(shape, shape.name, "")


def _validate_node(node: ObjectType, root: str, path: str) -> None:
    if node.entity:
        for aug, expected in RESERVED_FIELDS.items():
            if not node.has(aug):
                raise DefinitionError(root, path, f"{node.name} is missing the {aug.value} augmentation")
            for reserved in expected:
                if node.get_field(reserved.name) != reserved:
                    raise DefinitionError(
                        root,
                        _join(path, reserved.name),
                        f"{aug.value} field was not added by the augmentation helpers",
                    )
        for f in node.intrinsic_fields:
            if f.name in RESERVED_NAMES:
                raise DefinitionError(
                    root, _join(path, f.name), "field name is reserved for augmentations"
                )

    for f in node.fields:
        _validate_type(f.type, root, _join(path, f.name))
    taken = set(node.field_names) | {node.discriminator}
    for variant in node.variants:
        for f in variant.fields:
            if node.entity and f.name in RESERVED_NAMES:
                raise DefinitionError(
                    root, _join(path, f.name), "field name is reserved for augmentations"
                )
            if f.name in taken:
                raise DefinitionError(
                    root,
                    _join(path, f"variants.{variant.tag}.{f.name}"),
                    "variant field duplicates a field of the entity",
                )
            _validate_type(f.type, root, _join(path, f.name))


def _validate_type(type_: FieldType, root: str, path: str) -> None:
    if isinstance(type_, ObjectType):
        _validate_node(type_, root, path)
    elif isinstance(type_, Nullable):
        _validate_type(type_.inner, root, path)
    elif isinstance(type_, ArrayType):
        _validate_type(type_.item, root, f"{path}[]")
    elif isinstance(type_, TupleType):
        for idx, item in enumerate(type_.items):
            _validate_type(item, root, f"{path}[{idx}]")
    elif isinstance(type_, MapType):
        _validate_type(type_.value, root, f"{path}{{}}")


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name
