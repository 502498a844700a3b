"""Pydantic schemas for the shapes and permissions API."""

from typing import Any

from pydantic import BaseModel, Field


class EntitySummarySchema(BaseModel):
    """Lightweight entity representation for list views."""

    name: str
    description: str = ""
    field_count: int
    has_variants: bool = False
    discriminator: str | None = None


class FieldDescriptionSchema(BaseModel):
    name: str
    type: str
    optional: bool
    nullable: bool
    augmentation: str | None = None
    variant: str | None = None
    description: str = ""

    model_config = {"from_attributes": True}


class ShapeSchema(BaseModel):
    """One derived shape: its field table plus the JSON Schema of its validator."""

    entity: str
    method: str
    fields: list[FieldDescriptionSchema]
    json_schema: dict[str, Any]


class ValidationErrorSchema(BaseModel):
    loc: list[str]
    msg: str
    type: str


class ValidationResultSchema(BaseModel):
    entity: str
    method: str
    valid: bool
    errors: list[ValidationErrorSchema] = []


class PermissionCheckRequest(BaseModel):
    """Actor as received from the session layer, plus the action to check."""

    actor: dict[str, Any] | None = Field(
        ...,
        examples=[{"id": 7, "dealership_id": 3, "role": "submitter", "is_active": True}],
    )
    action: str = Field(..., min_length=1, examples=["create_project"])


class PermissionCheckResponse(BaseModel):
    action: str
    allowed: bool
    actor_kind: str | None = None


class AllowedActionsResponse(BaseModel):
    actions: list[str]
