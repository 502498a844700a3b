from .shape import (
    Augmentation,
    Primitive,
    EnumType,
    Nullable,
    ArrayType,
    TupleType,
    MapType,
    OpaqueType,
    Field,
    Variant,
    ObjectType,
    FieldType,
    STRING,
    INTEGER,
    NUMBER,
    BOOLEAN,
    TIMESTAMP,
    JSON,
    nullable,
    array_of,
    set_of,
    enum,
    optional,
    type_label,
)
from .augmentations import (
    IDENTITY_FIELDS,
    METADATA_FIELDS,
    RESERVED_NAMES,
    canonical,
    strip_augmentation,
    validate_canonical,
    with_identity,
    with_metadata,
)
from .permissions import (
    PermissionAction,
    DealershipUserRole,
    InternalUserRole,
    allowed_actions,
    can,
    is_dealership_user,
    is_internal_user,
)

__all__ = [
    "Augmentation",
    "Primitive",
    "EnumType",
    "Nullable",
    "ArrayType",
    "TupleType",
    "MapType",
    "OpaqueType",
    "Field",
    "Variant",
    "ObjectType",
    "FieldType",
    "STRING",
    "INTEGER",
    "NUMBER",
    "BOOLEAN",
    "TIMESTAMP",
    "JSON",
    "nullable",
    "array_of",
    "set_of",
    "enum",
    "optional",
    "type_label",
    "IDENTITY_FIELDS",
    "METADATA_FIELDS",
    "RESERVED_NAMES",
    "canonical",
    "strip_augmentation",
    "validate_canonical",
    "with_identity",
    "with_metadata",
    "PermissionAction",
    "DealershipUserRole",
    "InternalUserRole",
    "allowed_actions",
    "can",
    "is_dealership_user",
    "is_internal_user",
]
