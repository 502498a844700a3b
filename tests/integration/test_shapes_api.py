"""Integration tests for the shapes and permissions endpoints."""

import pytest
from httpx import ASGITransport, AsyncClient

from glassact_data.application.services import ShapeService
from glassact_data.domain.catalog import BUILTIN_ENTITIES
from glassact_data.domain.entities import STRING, ObjectType, OpaqueType, canonical
from glassact_data.infrastructure.dependencies import get_shape_service
from glassact_data.infrastructure.registry import InMemoryEntityRegistry
from glassact_data.main import app

Ambiguous = canonical(ObjectType.of("Ambiguous", name=STRING, blob=OpaqueType("Blob")))


@pytest.fixture
async def client():
    service = ShapeService(InMemoryEntityRegistry(BUILTIN_ENTITIES + (Ambiguous,)))
    app.dependency_overrides[get_shape_service] = lambda: service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def test_list_entities(client):
    response = await client.get("/api/v1/entities")
    assert response.status_code == 200
    by_name = {e["name"]: e for e in response.json()}
    assert by_name["CatalogItem"]["field_count"] == 11
    assert by_name["Inlay"]["has_variants"] is True
    assert by_name["Inlay"]["discriminator"] == "type"


async def test_get_shape_returns_fields_and_schema(client):
    response = await client.get("/api/v1/entities/CatalogItem/shapes/post")
    assert response.status_code == 200
    data = response.json()
    assert data["method"] == "POST"
    assert len(data["fields"]) == 11
    assert data["json_schema"]["title"] == "PostCatalogItem"


async def test_get_shape_unknown_entity_is_404(client):
    response = await client.get("/api/v1/entities/Nope/shapes/get")
    assert response.status_code == 404


async def test_get_shape_unknown_method_is_404(client):
    response = await client.get("/api/v1/entities/CatalogItem/shapes/delete")
    assert response.status_code == 404


@pytest.mark.filterwarnings("error:.*HTTP_422_UNPROCESSABLE_ENTITY:DeprecationWarning")
async def test_get_shape_ambiguous_is_422(client):
    response = await client.get("/api/v1/entities/Ambiguous/shapes/get")
    assert response.status_code == 422
    assert "Ambiguous.blob" in response.json()["detail"]


async def test_validate_payload(client):
    ok = await client.post(
        "/api/v1/entities/Project/shapes/patch/validate",
        json={"id": 1, "uuid": "p1", "name": "Lobby"},
    )
    assert ok.status_code == 200
    assert ok.json()["valid"] is True

    bad = await client.post(
        "/api/v1/entities/Project/shapes/post/validate",
        json={"id": 1, "name": "Lobby"},
    )
    assert bad.status_code == 200
    body = bad.json()
    assert body["valid"] is False
    assert any(err["loc"] == ["id"] for err in body["errors"])


async def test_permission_check(client):
    response = await client.post(
        "/api/v1/permissions/check",
        json={
            "actor": {"id": 7, "dealership_id": 3, "role": "admin", "is_active": True},
            "action": "pay_invoice",
        },
    )
    assert response.status_code == 200
    assert response.json() == {"action": "pay_invoice", "allowed": True, "actor_kind": "dealership"}


async def test_permission_check_null_actor(client):
    response = await client.post(
        "/api/v1/permissions/check",
        json={"actor": None, "action": "view_projects"},
    )
    assert response.status_code == 200
    assert response.json()["allowed"] is False
    assert response.json()["actor_kind"] is None


async def test_list_actions(client):
    response = await client.get("/api/v1/permissions/actions")
    assert response.status_code == 200
    assert "create_proof" in response.json()["actions"]


async def test_allowed_actions(client):
    response = await client.post(
        "/api/v1/permissions/allowed",
        json={"id": 9, "role": "designer", "is_active": True},
    )
    assert response.json()["actions"] == ["create_proof"]


async def test_get_shape_labels_enum_vocabulary(client):
    response = await client.get("/api/v1/entities/Inlay/shapes/get")
    assert response.status_code == 200
    by_name = {row["name"]: row for row in response.json()["fields"]}
    assert by_name["type"]["type"] == "enum(catalog, custom)"
