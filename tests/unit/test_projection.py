"""Unit tests for the GET/POST/PATCH/PUT shape projections."""

import pytest

from glassact_data.application.services.projection import (
    Method,
    derive_all,
    extend,
    omit_paths,
    project,
    to_get,
    to_patch,
    to_post,
    to_put,
)
from glassact_data.domain.catalog import (
    BUILTIN_ENTITIES,
    PROJECT_WITH_INLAYS_REQUEST_OMIT,
    CatalogItem,
    Dealership,
    Inlay,
    Project,
    ProjectWithInlays,
)
from glassact_data.domain.entities import (
    INTEGER,
    STRING,
    ArrayType,
    Augmentation,
    Nullable,
    ObjectType,
    OpaqueType,
    array_of,
    canonical,
)
from glassact_data.domain.entities.augmentations import RESERVED_NAMES
from glassact_data.domain.exceptions import DefinitionError, ProjectionAmbiguityError

CATALOG_ITEM_FIELDS = [
    "catalog_code",
    "name",
    "description",
    "category",
    "default_width",
    "default_height",
    "min_width",
    "min_height",
    "default_price_group_id",
    "svg_url",
    "is_active",
]

ENTITY_IDS = [e.name for e in BUILTIN_ENTITIES]


def _intrinsic_names(shape: ObjectType) -> list[str]:
    return [f.name for f in shape.intrinsic_fields]


# ── Properties over every built-in entity ───────────────────────────


@pytest.mark.parametrize("entity", BUILTIN_ENTITIES, ids=ENTITY_IDS)
def test_projections_are_idempotent(entity):
    for fn in (to_get, to_post, to_patch, to_put):
        once = fn(entity)
        assert fn(once) == once


@pytest.mark.parametrize("entity", BUILTIN_ENTITIES, ids=ENTITY_IDS)
def test_post_of_get_keeps_exactly_intrinsic_fields(entity):
    assert to_post(to_get(entity)).field_names == _intrinsic_names(entity)


@pytest.mark.parametrize("entity", BUILTIN_ENTITIES, ids=ENTITY_IDS)
def test_get_adds_exactly_the_five_augmentation_fields(entity):
    names = set(to_get(entity).field_names)
    assert names - set(_intrinsic_names(entity)) == RESERVED_NAMES
    assert len(to_get(entity).fields) == len(entity.intrinsic_fields) + 5


@pytest.mark.parametrize("entity", BUILTIN_ENTITIES, ids=ENTITY_IDS)
def test_get_of_post_restores_canonical_entity(entity):
    assert to_get(to_post(entity)) == to_get(entity)


@pytest.mark.parametrize("entity", BUILTIN_ENTITIES, ids=ENTITY_IDS)
def test_patch_makes_intrinsic_fields_optional_and_identity_required(entity):
    patch = to_patch(entity)
    assert patch.get_field("id").optional is False
    assert patch.get_field("uuid").optional is False
    assert all(f.optional for f in patch.intrinsic_fields)
    assert all(f.optional for v in patch.variants for f in v.fields)
    assert not patch.has(Augmentation.METADATA)


@pytest.mark.parametrize("entity", BUILTIN_ENTITIES, ids=ENTITY_IDS)
def test_put_requires_every_field(entity):
    put = to_put(entity)
    assert put.field_names[:2] == ["id", "uuid"]
    assert not any(f.optional for f in put.fields)
    assert "version" not in put.field_names


# ── CatalogItem ─────────────────────────────────────────────────────


def test_catalog_item_post_has_exactly_eleven_fields():
    post = to_post(CatalogItem)
    assert post.field_names == CATALOG_ITEM_FIELDS
    assert post.augmentations == frozenset()


def test_catalog_item_get_has_sixteen_fields():
    get = to_get(CatalogItem)
    assert get.field_names == (
        ["id", "uuid"] + CATALOG_ITEM_FIELDS + ["created_at", "updated_at", "version"]
    )


def test_nullable_fields_stay_nullable_in_every_projection():
    for method in Method:
        shape = project(CatalogItem, method)
        assert isinstance(shape.get_field("description").type, Nullable)
        assert not isinstance(shape.get_field("name").type, Nullable)


def test_post_keeps_entity_marker():
    assert to_post(CatalogItem).entity is True


# ── Recursion ───────────────────────────────────────────────────────


def test_get_recurses_into_nested_entity_arrays():
    inlays = to_get(ProjectWithInlays).get_field("inlays").type
    assert isinstance(inlays, ArrayType)
    assert inlays.item == to_get(Inlay)
    assert inlays.item.field_names[:2] == ["id", "uuid"]


def test_post_recurses_into_nested_entity_arrays():
    inlays = to_post(ProjectWithInlays).get_field("inlays").type
    assert inlays.item == to_post(Inlay)
    assert "id" not in inlays.item.field_names


def test_get_recurses_into_variant_fields():
    inlay = to_get(Inlay)
    catalog = next(v for v in inlay.variants if v.tag == "catalog")
    info = catalog.fields[0].type
    assert info.field_names[0] == "id"
    assert info.field_names[-1] == "version"


def test_patch_gives_nested_entities_identity_only():
    item = to_patch(ProjectWithInlays).get_field("inlays").type.item
    assert item.augmentations == frozenset({Augmentation.IDENTITY})
    assert item.field_names[:2] == ["id", "uuid"]
    assert "version" not in item.field_names
    # Nested optionality is left as declared.
    assert item.get_field("name").optional is False
    assert item.get_field("approved_proof_id").optional is True


def test_put_gives_nested_entities_identity_only():
    item = to_put(ProjectWithInlays).get_field("inlays").type.item
    assert item.augmentations == frozenset({Augmentation.IDENTITY})
    assert item.get_field("approved_proof_id").optional is True


def test_plain_nested_objects_are_never_augmented():
    for method in Method:
        address = project(Dealership, method).get_field("address").type
        assert address.entity is False
        assert address.field_names[0] == "street"
        assert "id" not in address.field_names


def test_plain_nested_version_field_survives_every_projection():
    release = ObjectType.of("Release", version=STRING, notes=STRING)
    app = canonical(ObjectType.of("App", name=STRING, release=release))
    for method in Method:
        projected = project(app, method)
        assert "version" in projected.get_field("release").type.field_names


# ── Errors ──────────────────────────────────────────────────────────


def test_opaque_field_raises_with_path():
    child = canonical(ObjectType.of("Inlay", catalog_info=OpaqueType("ExternalInfo")))
    parent = canonical(ObjectType.of("Project", inlays=array_of(child)))
    with pytest.raises(ProjectionAmbiguityError) as exc_info:
        to_get(parent)
    assert exc_info.value.entity == "Project"
    assert exc_info.value.path == "inlays[].catalog_info"
    assert "Project.inlays[].catalog_info" in str(exc_info.value)


@pytest.mark.parametrize("method", list(Method))
def test_opaque_field_fails_every_method(method):
    shape = canonical(ObjectType.of("Thing", blob=OpaqueType("Blob")))
    with pytest.raises(ProjectionAmbiguityError):
        project(shape, method)


def test_project_accepts_method_names_case_insensitively():
    assert project(CatalogItem, "get") == to_get(CatalogItem)
    assert project(CatalogItem, "Patch") == to_patch(CatalogItem)


def test_project_rejects_unknown_method():
    with pytest.raises(ValueError):
        project(CatalogItem, "DELETE")


def test_derive_all_returns_four_shapes():
    shapes = derive_all(Project)
    assert set(shapes) == set(Method)
    assert shapes[Method.POST] == to_post(Project)


# ── Composition helpers ─────────────────────────────────────────────


def test_extend_appends_before_metadata():
    extended = extend(Project, inlays=array_of(Inlay))
    assert extended.field_names[-4:] == ["inlays", "created_at", "updated_at", "version"]
    assert to_get(extended).get_field("inlays").type.item == to_get(Inlay)


def test_extend_rejects_existing_field():
    with pytest.raises(DefinitionError):
        extend(Project, name=STRING)


def test_omit_paths_drops_server_filled_back_references():
    request = omit_paths(to_post(ProjectWithInlays), PROJECT_WITH_INLAYS_REQUEST_OMIT)
    item = request.get_field("inlays").type.item
    assert "project_id" not in item.field_names
    variants = {v.tag: v.fields[0].type for v in item.variants}
    assert "inlay_id" not in variants["catalog"].field_names
    assert "inlay_id" not in variants["custom"].field_names
    assert "catalog_item_id" in variants["catalog"].field_names


def test_omit_paths_rejects_unknown_path():
    with pytest.raises(DefinitionError, match="no such field"):
        omit_paths(to_post(Project), ["nope"])


def test_omit_paths_rejects_descent_into_scalar():
    with pytest.raises(DefinitionError, match="non-object"):
        omit_paths(to_post(Project), ["name.first"])


def test_projection_does_not_mutate_input():
    before = ProjectWithInlays
    to_post(ProjectWithInlays)
    to_patch(ProjectWithInlays)
    assert ProjectWithInlays is before
    assert ProjectWithInlays.get_field("inlays").type.item == Inlay
    assert INTEGER == ProjectWithInlays.get_field("dealership_id").type
