"""Entity compiler — parses YAML entity definition files into canonical shapes.

A definition file declares plain nested ``objects`` and canonical
``entities``. Entities always get the identity and metadata augmentations;
objects never do. Names may be referenced in any order. A name that matches
neither a primitive nor a declaration loads as an opaque external type, and
projecting an entity that contains one fails with ProjectionAmbiguityError.

Field shorthand::

    name: string
    notes: string | null
    inlays: Inlay[]
    status: enum(draft, sent)
    tags: set<string>
    color_overrides: map<json>
    location: [number, number]
    steps: (string | null)[]

Mapping form::

    approved_proof_id: {type: integer, nullable: true, optional: true}
    status: {type: enum, values: [draft, sent]}
    location: {type: tuple, of: [number, number]}
    color_overrides: {type: map, value: json}
"""

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

import yaml

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
    Variant,
    canonical,
)
from glassact_data.domain.entities.augmentations import RESERVED_NAMES, validate_canonical
from glassact_data.domain.entities.shape import PRIMITIVE_KINDS
from glassact_data.domain.exceptions import DefinitionError

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TOKEN_RE = re.compile(r"\s*(\[\]|[\[\](),<>|]|[A-Za-z0-9_][A-Za-z0-9_.\-]*)")
_MAPPING_KEYS = frozenset(
    {"type", "optional", "nullable", "description", "values", "items", "unique", "of", "value", "fields"}
)
_FLAG_KEYS = ("optional", "nullable", "unique")
_PUNCTUATION = frozenset({"[]", "[", "]", "(", ")", ",", "<", ">", "|"})


class _ShorthandParser:
    """Recursive-descent reader for the field type shorthand.

    Grammar::

        type    := postfix ['|' 'null']
        postfix := primary ('[]')*
        primary := '(' type ')'
                 | 'enum' '(' value (',' value)* ')'
                 | ('set' | 'map') '<' type '>'
                 | '[' type (',' type)* ']'
                 | NAME

    Malformed text raises ValueError. ``named`` resolves a bare NAME.
    """

    def __init__(self, text: str, named: Callable[[str], FieldType]):
        self._tokens = self._tokenize(text)
        self._pos = 0
        self._named = named

    @staticmethod
    def _tokenize(text: str) -> list[str]:
        tokens = []
        pos = 0
        text = text.rstrip()
        while pos < len(text):
            match = _TOKEN_RE.match(text, pos)
            if match is None:
                raise ValueError(f"unexpected {text[pos:].strip()[:1]!r}")
            tokens.append(match.group(1))
            pos = match.end()
        return tokens

    def parse(self) -> FieldType:
        type_ = self._type()
        if self._pos < len(self._tokens):
            raise ValueError(f"unexpected {self._tokens[self._pos]!r}")
        return type_

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _take(self, expected: str | None = None) -> str:
        token = self._peek()
        if token is None:
            raise ValueError("unexpected end of type")
        if expected is not None and token != expected:
            raise ValueError(f"expected {expected!r}, got {token!r}")
        self._pos += 1
        return token

    def _type(self) -> FieldType:
        type_ = self._postfix()
        if self._peek() == "|":
            self._take()
            self._take("null")
            return Nullable(type_)
        return type_

    def _postfix(self) -> FieldType:
        type_ = self._primary()
        while self._peek() == "[]":
            self._take()
            type_ = ArrayType(type_)
        return type_

    def _primary(self) -> FieldType:
        token = self._take()
        if token == "(":
            type_ = self._type()
            self._take(")")
            return type_
        if token == "[":
            items = [self._type()]
            while self._peek() == ",":
                self._take()
                items.append(self._type())
            self._take("]")
            return TupleType(tuple(items))
        if token == "enum" and self._peek() == "(":
            self._take()
            values = [self._value()]
            while self._peek() == ",":
                self._take()
                values.append(self._value())
            self._take(")")
            return EnumType(tuple(values))
        if token in ("set", "map") and self._peek() == "<":
            self._take()
            inner = self._type()
            self._take(">")
            return ArrayType(inner, unique=True) if token == "set" else MapType(inner)
        if token in _PUNCTUATION:
            raise ValueError(f"unexpected {token!r}")
        return self._named(token)

    def _value(self) -> str:
        token = self._take()
        if token in _PUNCTUATION:
            raise ValueError(f"unexpected {token!r} in enum values")
        return token


class EntityCompiler:
    """Compiles YAML entity definitions to canonical ``ObjectType`` shapes."""

    def __init__(self, entity_file: str | Path):
        self._path = Path(entity_file)
        self._raw_objects: dict[str, dict] = {}
        self._raw_entities: dict[str, dict] = {}
        self._built: dict[str, ObjectType] = {}
        self._building: list[str] = []

    def compile(self) -> list[ObjectType]:
        """Parse the file and return every entity, in declaration order.

        Raises DefinitionError on the first malformed definition.
        """
        logger.info("Compiling entity definitions from %s", self._path)
        data = self._load_yaml()

        self._raw_objects = self._index(data.get("objects") or [], "objects")
        self._raw_entities = self._index(data.get("entities") or [], "entities")
        for name in self._raw_objects:
            if name in self._raw_entities:
                raise DefinitionError(name, "", "declared both as an object and as an entity")

        entities = [self._resolve(name) for name in self._raw_entities]
        for entity in entities:
            validate_canonical(entity)

        logger.info(
            "Compiled %d entities and %d objects from %s",
            len(entities),
            len(self._raw_objects),
            self._path.name,
        )
        return entities

    # ── Loading ──────────────────────────────────────────────────────

    def _load_yaml(self) -> dict:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            raise DefinitionError(str(self._path), "", f"cannot read definition file: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DefinitionError(str(self._path), "", "definition file must be a mapping")
        return data

    def _index(self, entries: Any, section: str) -> dict[str, dict]:
        if not isinstance(entries, list):
            raise DefinitionError(section, "", "section must be a list of definitions")
        indexed: dict[str, dict] = {}
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict) or "name" not in entry:
                raise DefinitionError(f"{section}[{idx}]", "", "definition needs a 'name'")
            name = str(entry["name"])
            if not _NAME_RE.match(name):
                raise DefinitionError(name, "", "invalid definition name")
            if name in indexed:
                raise DefinitionError(name, "", f"duplicate definition in {section}")
            indexed[name] = entry
        return indexed

    # ── Resolution ───────────────────────────────────────────────────

    def _resolve(self, name: str) -> ObjectType:
        if name in self._built:
            return self._built[name]
        if name in self._building:
            cycle = " -> ".join(self._building + [name])
            raise DefinitionError(self._building[0], "", f"circular reference: {cycle}")

        self._building.append(name)
        try:
            is_entity = name in self._raw_entities
            entry = self._raw_entities[name] if is_entity else self._raw_objects[name]
            shape = self._build_object(name, entry, is_entity)
        finally:
            self._building.pop()

        self._built[name] = shape
        return shape

    def _build_object(self, name: str, entry: dict, is_entity: bool) -> ObjectType:
        raw_fields = entry.get("fields") or {}
        if not isinstance(raw_fields, dict):
            raise DefinitionError(name, "", "'fields' must be a mapping")

        fields = self._build_fields(name, "", raw_fields, is_entity)
        shape = ObjectType(
            name=name,
            fields=fields,
            description=str(entry.get("description", "")).strip(),
        )

        variants = entry.get("variants")
        if variants is not None:
            shape = self._build_variants(shape, variants, is_entity)

        return canonical(shape) if is_entity else shape

    def _build_variants(self, shape: ObjectType, raw: Any, is_entity: bool) -> ObjectType:
        if not isinstance(raw, dict) or not isinstance(raw.get("options"), dict):
            raise DefinitionError(shape.name, "variants", "needs 'discriminator' and 'options'")
        discriminator = raw.get("discriminator")
        if not isinstance(discriminator, str) or not _NAME_RE.match(discriminator):
            raise DefinitionError(shape.name, "variants", "invalid discriminator")
        if discriminator in shape.field_names:
            raise DefinitionError(shape.name, discriminator, "discriminator collides with a field")

        variants = []
        for tag, raw_fields in raw["options"].items():
            if not isinstance(raw_fields, dict):
                raise DefinitionError(shape.name, f"variants.{tag}", "variant must map field names to types")
            fields = self._build_fields(shape.name, "", raw_fields, is_entity)
            for f in fields:
                if f.name in shape.field_names or f.name == discriminator:
                    raise DefinitionError(
                        shape.name,
                        f"variants.{tag}.{f.name}",
                        "variant field duplicates a field of the entity",
                    )
            variants.append(Variant(tag=str(tag), fields=fields))
        return replace(shape, discriminator=discriminator, variants=tuple(variants))

    def _build_fields(self, owner: str, path: str, raw_fields: dict, is_entity: bool) -> tuple[Field, ...]:
        fields = []
        for field_name, spec in raw_fields.items():
            field_name = str(field_name)
            field_path = f"{path}.{field_name}" if path else field_name
            if not _NAME_RE.match(field_name):
                raise DefinitionError(owner, field_path, "invalid field name")
            if is_entity and field_name in RESERVED_NAMES:
                raise DefinitionError(
                    owner, field_path, "field name is reserved for augmentations"
                )
            fields.append(self._build_field(owner, field_path, field_name, spec))
        return tuple(fields)

    def _build_field(self, owner: str, path: str, name: str, spec: Any) -> Field:
        if isinstance(spec, str):
            return Field(name=name, type=self._parse_shorthand(owner, path, spec))
        if not isinstance(spec, dict):
            raise DefinitionError(owner, path, f"unsupported field spec: {spec!r}")

        unknown = set(spec) - _MAPPING_KEYS
        if unknown:
            raise DefinitionError(owner, path, f"unknown keys: {', '.join(sorted(unknown))}")

        for key in _FLAG_KEYS:
            if key in spec and not isinstance(spec[key], bool):
                raise DefinitionError(owner, path, f"'{key}' must be true or false, got {spec[key]!r}")

        type_ = self._parse_mapping(owner, path, spec)
        if spec.get("nullable", False):
            type_ = type_ if isinstance(type_, Nullable) else Nullable(type_)
        return Field(
            name=name,
            type=type_,
            optional=spec.get("optional", False),
            description=str(spec.get("description", "")).strip(),
        )

    def _parse_mapping(self, owner: str, path: str, spec: dict) -> FieldType:
        kind = spec.get("type")
        if kind == "enum":
            values = spec.get("values")
            if not isinstance(values, list) or not values:
                raise DefinitionError(owner, path, "enum needs a non-empty 'values' list")
            return EnumType(values=tuple(str(v) for v in values))
        if kind in ("array", "set"):
            if "items" not in spec:
                raise DefinitionError(owner, path, f"{kind} needs 'items'")
            item = self._build_field(owner, f"{path}[]", "item", spec["items"]).type
            return ArrayType(item, unique=kind == "set" or spec.get("unique", False))
        if kind == "tuple":
            items = spec.get("of")
            if not isinstance(items, list) or not items:
                raise DefinitionError(owner, path, "tuple needs a non-empty 'of' list")
            return TupleType(
                tuple(
                    self._build_field(owner, f"{path}[{idx}]", "item", item).type
                    for idx, item in enumerate(items)
                )
            )
        if kind == "map":
            if "value" not in spec:
                raise DefinitionError(owner, path, "map needs 'value'")
            return MapType(self._build_field(owner, f"{path}{{}}", "value", spec["value"]).type)
        if kind == "object":
            raw_fields = spec.get("fields")
            if not isinstance(raw_fields, dict):
                raise DefinitionError(owner, path, "inline object needs 'fields'")
            return ObjectType(
                name=f"{owner}_{path.replace('.', '_')}",
                fields=self._build_fields(owner, path, raw_fields, is_entity=False),
            )
        if isinstance(kind, str):
            return self._parse_shorthand(owner, path, kind)
        raise DefinitionError(owner, path, "field mapping needs a 'type'")

    def _parse_shorthand(self, owner: str, path: str, text: str) -> FieldType:
        try:
            return _ShorthandParser(text, lambda name: self._named_type(owner, path, name)).parse()
        except ValueError as exc:
            raise DefinitionError(owner, path, f"cannot parse type {text.strip()!r}: {exc}") from exc

    def _named_type(self, owner: str, path: str, name: str) -> FieldType:
        if name in PRIMITIVE_KINDS:
            return Primitive(name)
        if not _NAME_RE.match(name):
            raise DefinitionError(owner, path, f"cannot parse type {name!r}")
        if name in self._raw_entities or name in self._raw_objects:
            return self._resolve(name)
        logger.warning("%s.%s references unknown type %r; treating it as opaque", owner, path, name)
        return OpaqueType(name)
