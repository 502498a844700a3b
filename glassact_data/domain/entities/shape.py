"""Shape model — immutable description of entity fields and their types.

Every node is a frozen dataclass so that shapes compare by value, hash, and
can be shared between threads without copying. Projections never mutate a
shape; they build new ones with ``dataclasses.replace``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union


class Augmentation(str, Enum):
    """Cross-cutting field groups layered onto an entity's intrinsic fields."""

    IDENTITY = "identity"
    METADATA = "metadata"


PRIMITIVE_KINDS = frozenset({"string", "integer", "number", "boolean", "timestamp", "json"})


@dataclass(frozen=True)
class Primitive:
    """A scalar value: string, integer, number, boolean, timestamp or json."""

    kind: str

    def __post_init__(self) -> None:
        if self.kind not in PRIMITIVE_KINDS:
            raise ValueError(f"Unknown primitive kind: {self.kind!r}")


@dataclass(frozen=True)
class EnumType:
    """An enum of string values. A single value acts as a literal."""

    values: tuple[str, ...]
    name: str | None = None


@dataclass(frozen=True)
class Nullable:
    inner: FieldType


@dataclass(frozen=True)
class ArrayType:
    item: FieldType
    unique: bool = False


@dataclass(frozen=True)
class TupleType:
    items: tuple[FieldType, ...]


@dataclass(frozen=True)
class MapType:
    """A string-keyed record, e.g. ``Record<string, unknown>``."""

    value: FieldType


@dataclass(frozen=True)
class OpaqueType:
    """A type referenced by name that carries no shape information."""

    name: str


@dataclass(frozen=True)
class Field:
    """A named field on an object shape.

    ``optional`` means the field may be omitted; nullability is expressed
    by wrapping the type in :class:`Nullable`. ``augmentation`` is the marker
    set by the augmentation helpers; intrinsic fields leave it ``None``.
    """

    name: str
    type: FieldType
    optional: bool = False
    description: str = ""
    augmentation: Augmentation | None = None

    @property
    def is_intrinsic(self) -> bool:
        return self.augmentation is None

    @property
    def nullable(self) -> bool:
        return isinstance(self.type, Nullable)


@dataclass(frozen=True)
class Variant:
    """One arm of a discriminated union, selected by its ``tag``."""

    tag: str
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class ObjectType:
    """An object shape: a plain nested value or a stored entity.

    ``entity`` marks stored records and is kept through every projection so
    that a stripped (POST) child can be re-augmented later. ``augmentations``
    lists the augmentation tags currently applied.
    """

    name: str
    fields: tuple[Field, ...] = ()
    entity: bool = False
    augmentations: frozenset[Augmentation] = field(default_factory=frozenset)
    discriminator: str | None = None
    variants: tuple[Variant, ...] = ()
    description: str = ""

    @classmethod
    def of(cls, name: str, /, **fields: FieldType | Field) -> ObjectType:
        """Build a plain object from keyword fields, in declaration order.

        Values are either a type or a :class:`Field` (e.g. from :func:`optional`),
        whose name is taken from the keyword.
        """
        return cls(
            name=name,
            fields=tuple(_as_field(key, value) for key, value in fields.items()),
        )

    def with_variants(
        self, discriminator: str, /, **variants: dict[str, FieldType | Field]
    ) -> ObjectType:
        """Return a copy carrying a discriminated union on ``discriminator``."""
        return replace(
            self,
            discriminator=discriminator,
            variants=tuple(
                Variant(
                    tag=tag,
                    fields=tuple(_as_field(key, value) for key, value in spec.items()),
                )
                for tag, spec in variants.items()
            ),
        )

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def intrinsic_fields(self) -> tuple[Field, ...]:
        return tuple(f for f in self.fields if f.is_intrinsic)

    def get_field(self, name: str) -> Field | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def has(self, augmentation: Augmentation) -> bool:
        return augmentation in self.augmentations


FieldType = Union[
    Primitive, EnumType, Nullable, ArrayType, TupleType, MapType, ObjectType, OpaqueType
]

STRING = Primitive("string")
INTEGER = Primitive("integer")
NUMBER = Primitive("number")
BOOLEAN = Primitive("boolean")
TIMESTAMP = Primitive("timestamp")
JSON = Primitive("json")


def nullable(inner: FieldType) -> Nullable:
    return inner if isinstance(inner, Nullable) else Nullable(inner)


def array_of(item: FieldType) -> ArrayType:
    return ArrayType(item)


def set_of(item: FieldType) -> ArrayType:
    return ArrayType(item, unique=True)


def enum(*values: str, name: str | None = None) -> EnumType:
    return EnumType(values=tuple(values), name=name)


def optional(type_: FieldType, description: str = "") -> Field:
    """Mark a field as omittable when used with :meth:`ObjectType.of`."""
    return Field(name="", type=type_, optional=True, description=description)


def _as_field(name: str, value: FieldType | Field) -> Field:
    if isinstance(value, Field):
        return replace(value, name=name)
    return Field(name=name, type=value)


def type_label(type_: FieldType) -> str:
    """Render a type in the shorthand read by the entity compiler.

    Enums render their values rather than their name so that the label
    compiles back to the same type.
    """
    if isinstance(type_, Primitive):
        return type_.kind
    if isinstance(type_, EnumType):
        return "enum(" + ", ".join(type_.values) + ")"
    if isinstance(type_, Nullable):
        return f"{type_label(type_.inner)} | null"
    if isinstance(type_, ArrayType):
        inner = type_label(type_.item)
        if isinstance(type_.item, Nullable):
            inner = f"({inner})"
        return f"set<{inner}>" if type_.unique else f"{inner}[]"
    if isinstance(type_, TupleType):
        return "[" + ", ".join(type_label(t) for t in type_.items) + "]"
    if isinstance(type_, MapType):
        return f"map<{type_label(type_.value)}>"
    if isinstance(type_, (ObjectType, OpaqueType)):
        return type_.name
    return type(type_).__name__
