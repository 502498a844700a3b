"""Unit tests for the entity registry and the ShapeService facade."""

import pytest

from glassact_data.application.services import Method, ShapeService
from glassact_data.domain.catalog import BUILTIN_ENTITIES, CatalogItem, Inlay, Project
from glassact_data.domain.entities import STRING, ObjectType, OpaqueType, canonical
from glassact_data.domain.exceptions import (
    DefinitionError,
    DuplicateEntityError,
    EntityNotFoundError,
    ProjectionAmbiguityError,
)
from glassact_data.infrastructure.registry import InMemoryEntityRegistry


@pytest.fixture
def registry() -> InMemoryEntityRegistry:
    return InMemoryEntityRegistry([CatalogItem, Project, Inlay])


@pytest.fixture
def service(registry) -> ShapeService:
    return ShapeService(registry)


# ── Registry ─────────────────────────────────────────────────────────


def test_registry_lists_entities_sorted(registry):
    assert [e.name for e in registry.list_entities()] == ["CatalogItem", "Inlay", "Project"]


def test_registry_get_returns_none_for_unknown(registry):
    assert registry.get("Nope") is None
    assert registry.get("Project") is Project


def test_registry_rejects_duplicates(registry):
    with pytest.raises(DuplicateEntityError):
        registry.register(Project)


def test_registry_rejects_non_canonical_shapes(registry):
    with pytest.raises(DefinitionError):
        registry.register(ObjectType.of("Loose", name=STRING))


def test_registry_clear(registry):
    registry.clear()
    assert registry.list_entities() == []


def test_builtin_catalog_registers_cleanly():
    registry = InMemoryEntityRegistry(BUILTIN_ENTITIES)
    assert len(registry.list_entities()) == len(BUILTIN_ENTITIES)


# ── ShapeService ─────────────────────────────────────────────────────


def test_get_entity_raises_for_unknown(service):
    with pytest.raises(EntityNotFoundError):
        service.get_entity("Nope")


def test_derive_and_derive_all(service):
    post = service.derive("CatalogItem", "post")
    assert len(post.fields) == 11
    shapes = service.derive_all("CatalogItem")
    assert len(shapes[Method.GET].fields) == 16


def test_model_for_is_cached(service):
    first = service.model_for("Project", Method.GET)
    assert service.model_for("Project", "get") is first
    assert service.model_for("Project", Method.POST) is not first


def test_validate_reports_errors(service):
    report = service.validate("Project", Method.PATCH, {"name": "Lobby"})
    assert report.valid is False
    missing = {tuple(err["loc"]) for err in report.errors}
    assert ("id",) in missing and ("uuid",) in missing


def test_validate_accepts_valid_payload(service):
    report = service.validate("Project", "patch", {"id": 1, "uuid": "p1", "status": "ordered"})
    assert report.valid is True
    assert report.errors == []


def test_describe_lists_fields_with_markers(service):
    rows = {row.name: row for row in service.describe("CatalogItem", Method.GET)}
    assert rows["id"].augmentation == "identity"
    assert rows["version"].augmentation == "metadata"
    assert rows["description"].nullable is True
    assert rows["description"].type == "string | null"
    assert rows["name"].augmentation is None


def test_describe_includes_variant_fields(service):
    rows = service.describe("Inlay", Method.POST)
    by_name = {row.name: row for row in rows}
    assert by_name["type"].type == "enum(catalog, custom)"
    assert by_name["catalog_info"].variant == "catalog"
    assert by_name["custom_info"].type == "InlayCustomInfo"


def test_ambiguous_entity_raises_on_derive():
    shape = canonical(ObjectType.of("Thing", blob=OpaqueType("Blob")))
    service = ShapeService(InMemoryEntityRegistry([shape]))
    with pytest.raises(ProjectionAmbiguityError):
        service.derive("Thing", Method.GET)


def test_describe_renders_enum_vocabulary(service):
    rows = {row.name: row for row in service.describe("Project", Method.GET)}
    assert rows["status"].type.startswith("enum(draft, designing, ")
